"""
Exceptions raised while deriving a version from a git repository.

RepositoryNotFound and NoTagsReachable are expected repository states and are
recovered inside derive_version() by returning the fallback version.
VersionParseError and RepositoryAccessError are surfaced to the caller.
"""


class VersionFromGitError(Exception):
    """Base class for all version-from-git errors."""


class RepositoryNotFound(VersionFromGitError):
    """No git repository exists at the given path."""

    def __init__(self, path: str):
        super().__init__(f"No GIT repository found in [{path}]")
        self.path = path


class NoTagsReachable(VersionFromGitError):
    """The repository has no annotated version tag reachable from HEAD."""


class RepositoryAccessError(VersionFromGitError):
    """Any other failure while reading the repository."""


class VersionParseError(VersionFromGitError, ValueError):
    """Malformed version text."""

    def __init__(self, char: str, position: int):
        super().__init__(f"Unexpected character '{char}' at position '{position}'")
        self.char = char
        self.position = position
