"""
Working tree dirtiness detection.

Each DirtyMode maps to a function returning the marker appended to the
version string, or an empty string for a clean working tree.
"""

import hashlib
from enum import Enum
from typing import Callable, Dict

import git
from loguru import logger

from .errors import RepositoryAccessError

DIRTY_MARKER = '-DIRTY'
DIRTY_HASH_LENGTH = 8

# git treats this path specially in --no-index mode on every platform
_NULL_PATH = '/dev/null'

# Fixed prefixes and no textconv keep the diff bytes independent of user config
_DIFF_OPTIONS = (
    '--no-color', '--no-ext-diff', '--no-textconv', '--binary', '--full-index',
    '--src-prefix=a/', '--dst-prefix=b/',
)


class DirtyMode(str, Enum):
    """Supported dirtiness detection strategies."""

    HASH = 'hash'
    FLAG = 'flag'


def _untracked_diff(repo: git.Repo, path: str) -> str:
    """
    Render an untracked path as a new-file diff.

    Directories listed by git status (nested repositories it does not
    descend into) are represented by their path only.

    Raises:
        RepositoryAccessError: If git cannot diff the file
    """
    if path.endswith('/'):
        return f'untracked directory {path}'

    status, output, error = repo.git.diff(
        '--no-index', *_DIFF_OPTIONS, '--', _NULL_PATH, path,
        with_extended_output=True,
        with_exceptions=False,
    )
    # Exit status 1 only means the files differ
    if status not in (0, 1):
        raise RepositoryAccessError(f"Failed to diff untracked file {path}: {error}")
    return output


def working_tree_diff(repo: git.Repo) -> str:
    """
    Render the index vs. working tree difference as a unified diff.

    Rename detection is enabled. Untracked files are appended as new-file
    diffs in path order so they contribute to the content hash.

    Args:
        repo: Open repository with a working tree

    Returns:
        str: Unified diff text, empty when the working tree matches the index

    Raises:
        RepositoryAccessError: If an untracked file cannot be diffed
    """
    chunks = []
    tracked = repo.git.diff('-M', *_DIFF_OPTIONS)
    if tracked:
        chunks.append(tracked)

    for path in sorted(repo.untracked_files):
        untracked = _untracked_diff(repo, path)
        if untracked:
            chunks.append(untracked)

    return '\n'.join(chunks)


def dirty_hash(repo: git.Repo) -> str:
    """
    Get the MD5 digest of the working tree diff.

    Returns:
        str: Hex digest, or an empty string for a clean working tree
    """
    diff = working_tree_diff(repo)
    if not diff:
        return ''
    return hashlib.md5(diff.encode('utf-8', errors='surrogateescape')).hexdigest()


def is_dirty(repo: git.Repo) -> bool:
    """Check for untracked, missing, modified or staged files."""
    return repo.is_dirty(index=True, working_tree=True, untracked_files=True)


def _hash_marker(repo: git.Repo) -> str:
    digest = dirty_hash(repo)
    if not digest:
        return ''
    logger.debug(f"Working tree diff digest: {digest}")
    return f'{DIRTY_MARKER}-{digest[:DIRTY_HASH_LENGTH]}'


def _flag_marker(repo: git.Repo) -> str:
    return DIRTY_MARKER if is_dirty(repo) else ''


_MARKERS: Dict[DirtyMode, Callable[[git.Repo], str]] = {
    DirtyMode.HASH: _hash_marker,
    DirtyMode.FLAG: _flag_marker,
}


def dirty_marker(repo: git.Repo, mode: DirtyMode) -> str:
    """
    Get the dirtiness marker for the working tree.

    Args:
        repo: Open repository
        mode: Detection strategy

    Returns:
        str: "-DIRTY-<hash>", "-DIRTY" or "" depending on mode and state
    """
    return _MARKERS[DirtyMode(mode)](repo)
