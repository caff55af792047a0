"""
Version derivation from git history.

Selects the biggest annotated version tag reachable from HEAD, appends the
number of commits since that tag with the short HEAD sha, and marks dirty
working trees. Repositories without a usable tag yield the fallback version.
"""

import os
from dataclasses import dataclass
from functools import reduce
from typing import Dict, List, Optional, Union

import git
from git.exc import GitError, ODBError
from loguru import logger

from .dirty import DirtyMode, dirty_marker
from .errors import NoTagsReachable, RepositoryAccessError, RepositoryNotFound
from .reporting import LoguruReporter, Reporter
from .version import Version

DEFAULT_FALLBACK_VERSION = '0.0.0-SNAPSHOT'
SHORT_SHA_LENGTH = 7


@dataclass
class DeriveOptions:
    """Policy for a single derivation."""

    commits_no: bool = True
    dirty_detect: bool = True
    dirty_mode: DirtyMode = DirtyMode.HASH
    fallback_version: str = DEFAULT_FALLBACK_VERSION


@dataclass(frozen=True)
class TagInfo:
    """Annotated tag peeled to its target commit."""

    name: str
    commit_sha: str
    tagged_date: int


def open_repository(git_root: Union[str, os.PathLike]) -> git.Repo:
    """
    Open the repository rooted exactly at git_root.

    Parent directories are not searched.

    Raises:
        RepositoryNotFound: If git_root does not exist or is not a repository
    """
    try:
        return git.Repo(git_root)
    except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
        raise RepositoryNotFound(str(git_root)) from e


def annotated_tags(repo: git.Repo) -> List[TagInfo]:
    """
    List annotated tags pointing at commits.

    Lightweight tags and tags on trees, blobs or other tags are skipped.

    Raises:
        RepositoryAccessError: If a tag ref points at a missing object
    """
    tags = []
    for ref in repo.tags:
        try:
            tag_object = ref.tag
            target = tag_object.object if tag_object is not None else None
        except ValueError as e:
            # GitPython signals unresolvable shas with a plain ValueError
            raise RepositoryAccessError(f"Failed to resolve tag {ref.name}: {e}") from e
        if tag_object is None:
            logger.debug(f"Skipping lightweight tag {ref.name}")
            continue
        if target.type != 'commit':
            logger.debug(f"Skipping tag {ref.name} pointing at a {target.type}")
            continue
        tags.append(TagInfo(ref.name, target.hexsha, tag_object.tagged_date))
    return tags


def reachable_tags(repo: git.Repo, tags: List[TagInfo], head_sha: str) -> List[TagInfo]:
    """Keep tags whose commit is HEAD or one of its ancestors."""
    reachable: Dict[str, bool] = {}
    result = []
    for tag in tags:
        if tag.commit_sha not in reachable:
            reachable[tag.commit_sha] = repo.is_ancestor(tag.commit_sha, head_sha)
        if reachable[tag.commit_sha]:
            result.append(tag)
        else:
            logger.debug(f"Tag {tag.name} is not reachable from HEAD")
    return result


def _bigger_or_later(best: TagInfo, candidate: TagInfo) -> TagInfo:
    order = Version.parse(candidate.name).compare(Version.parse(best.name))
    if order == 0:
        order = (candidate.tagged_date > best.tagged_date) - (candidate.tagged_date < best.tagged_date)
    return candidate if order > 0 else best


def select_tag(tags: List[TagInfo]) -> Optional[TagInfo]:
    """
    Pick the tag with the biggest version.

    Tags comparing equal are decided by the later tagger timestamp, so the
    most recently created of several tags on one commit wins.

    Raises:
        VersionParseError: If a tag name is not a version
    """
    if not tags:
        return None
    return reduce(_bigger_or_later, sorted(tags, key=lambda tag: tag.name))


def find_current_tag(repo: git.Repo) -> TagInfo:
    """
    Find the tag the version is based on.

    Raises:
        NoTagsReachable: If HEAD is unborn or no annotated tag is reachable
    """
    if not repo.head.is_valid():
        raise NoTagsReachable("Repository has no commits")

    head_sha = repo.head.commit.hexsha
    tags = annotated_tags(repo)
    if not tags:
        raise NoTagsReachable("Repository has no annotated tags")

    tag = select_tag(reachable_tags(repo, tags, head_sha))
    if tag is None:
        raise NoTagsReachable("No annotated tag is reachable from HEAD")
    return tag


def count_commits_since(repo: git.Repo, commit_sha: str, head_sha: str) -> int:
    """Count commits reachable from head_sha but not from commit_sha."""
    return int(repo.git.rev_list('--count', f'{commit_sha}..{head_sha}'))


def _derive(repo: git.Repo, options: DeriveOptions, reporter: Reporter) -> str:
    tag = find_current_tag(repo)
    reporter.tag_selected(tag.name, tag.commit_sha)

    if Version.parse(tag.name).is_snapshot:
        reporter.snapshot_found(tag.name)
        reporter.version_calculated(tag.name)
        return tag.name

    version = tag.name
    head_sha = repo.head.commit.hexsha

    if options.commits_no:
        count = count_commits_since(repo, tag.commit_sha, head_sha)
        if count > 0:
            version += f'-{count}-g{head_sha[:SHORT_SHA_LENGTH]}'

    if options.dirty_detect:
        if repo.bare:
            logger.debug("Bare repository, skipping dirty detection")
        else:
            version += dirty_marker(repo, options.dirty_mode)

    reporter.version_calculated(version)
    return version


def derive_version(git_root: Union[str, os.PathLike] = '.',
                   options: Optional[DeriveOptions] = None,
                   reporter: Optional[Reporter] = None) -> str:
    """
    Derive the version string for the repository at git_root.

    Args:
        git_root: Path of the repository working tree (or bare repository)
        options: Derivation policy, defaults to DeriveOptions()
        reporter: Receiver of progress and warning events, defaults to LoguruReporter

    Returns:
        str: e.g. "1.1.1", "1.1.1-2-gabc1234", "1.1.1-DIRTY-0a1b2c3d" or the
            fallback version

    Raises:
        VersionParseError: If the selected tag names are not versions
        RepositoryAccessError: If the repository cannot be read
    """
    options = options or DeriveOptions()
    reporter = reporter or LoguruReporter()

    try:
        repo = open_repository(git_root)
    except RepositoryNotFound:
        reporter.repository_not_found(str(git_root), options.fallback_version)
        return options.fallback_version
    except (GitError, OSError) as e:
        raise RepositoryAccessError(f"Failed to open repository [{git_root}]: {e}") from e

    with repo:
        try:
            return _derive(repo, options, reporter)
        except NoTagsReachable as e:
            logger.debug(str(e))
            reporter.no_tags_found(options.fallback_version)
            return options.fallback_version
        except (GitError, ODBError, OSError) as e:
            raise RepositoryAccessError(f"Failed to read repository [{git_root}]: {e}") from e
