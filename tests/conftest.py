"""
Pytest configuration and shared fixtures for test suite.

Provides throwaway git repositories built with the git binary, with a fixed
identity and a deterministic clock so commit and tag timestamps are ordered.
"""

import os
import subprocess
import pytest
from pathlib import Path
from unittest.mock import MagicMock

from version_from_git.reporting import Reporter

BASE_TIMESTAMP = 1700000000


class GitRepo:
    """Helper driving the git binary inside a test repository."""

    def __init__(self, path: Path, clock: list):
        self.path = Path(path)
        self._clock = clock

    def git(self, *args, cwd=None) -> str:
        """Run a git command, advancing the shared clock by ten seconds."""
        self._clock[0] += 10
        stamp = f'{BASE_TIMESTAMP + self._clock[0]} +0000'
        env = dict(os.environ)
        env.update({
            'GIT_AUTHOR_NAME': 'Test User',
            'GIT_AUTHOR_EMAIL': 'test@example.com',
            'GIT_COMMITTER_NAME': 'Test User',
            'GIT_COMMITTER_EMAIL': 'test@example.com',
            'GIT_AUTHOR_DATE': stamp,
            'GIT_COMMITTER_DATE': stamp,
            'GIT_CONFIG_NOSYSTEM': '1',
        })
        result = subprocess.run(
            ['git', '-c', 'commit.gpgsign=false', '-c', 'tag.gpgsign=false', *args],
            cwd=cwd or self.path,
            env=env,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()

    def init(self) -> 'GitRepo':
        self.path.mkdir(parents=True, exist_ok=True)
        self.git('init')
        self.git('symbolic-ref', 'HEAD', 'refs/heads/master')
        return self

    def write(self, name: str, content: str = 'some-text') -> Path:
        file_path = self.path / name
        file_path.write_text(content)
        return file_path

    def commit_file(self, name: str, content: str = 'some-text', message: str = None) -> str:
        """Write, stage and commit a file, returning the new HEAD sha."""
        self.write(name, content)
        self.git('add', name)
        self.git('commit', '-m', message or f'add {name}')
        return self.head_sha()

    def tag(self, name: str, message: str = 'version tag') -> None:
        self.git('tag', '-a', '-m', message, name)

    def lightweight_tag(self, name: str) -> None:
        self.git('tag', name)

    def checkout(self, *args) -> None:
        self.git('checkout', *args)

    def head_sha(self) -> str:
        return self.git('rev-parse', 'HEAD')

    def clone(self, destination: Path) -> 'GitRepo':
        self.git('clone', str(self.path), str(destination), cwd=self.path.parent)
        return GitRepo(destination, self._clock)


@pytest.fixture
def clock():
    """Shared fake clock in seconds past BASE_TIMESTAMP."""
    return [0]


@pytest.fixture
def git_repo(tmp_path, clock):
    """Create an empty git repository on branch master."""
    return GitRepo(tmp_path / 'repo', clock).init()


@pytest.fixture
def tagged_repo(git_repo):
    """Repository with one commit tagged 1.1.1."""
    git_repo.commit_file('test.txt', message='initial commit')
    git_repo.tag('1.1.1')
    return git_repo


@pytest.fixture
def mock_reporter():
    """Reporter mock recording derivation events."""
    return MagicMock(spec=Reporter)
