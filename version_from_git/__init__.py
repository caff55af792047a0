"""
Version from Git

Derives a deterministic semantic version string from the annotated tags,
commit history and working tree state of a git repository.
"""

from ._version import __version__
from .deriver import DEFAULT_FALLBACK_VERSION, DeriveOptions, derive_version
from .dirty import DirtyMode
from .errors import (
    NoTagsReachable,
    RepositoryAccessError,
    RepositoryNotFound,
    VersionFromGitError,
    VersionParseError,
)
from .reporting import LoguruReporter, Reporter
from .version import Version

__description__ = "Derive semantic versions from git tags"

__all__ = [
    "DEFAULT_FALLBACK_VERSION",
    "DeriveOptions",
    "DirtyMode",
    "LoguruReporter",
    "NoTagsReachable",
    "RepositoryAccessError",
    "RepositoryNotFound",
    "Reporter",
    "Version",
    "VersionFromGitError",
    "VersionParseError",
    "derive_version",
]
