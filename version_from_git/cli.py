"""
Command-line interface for version-from-git.

Main entry point that orchestrates configuration, logging and version
derivation. The derived version is the only thing written to stdout.
"""

import argparse
import sys

from loguru import logger
from rich.console import Console

from .config import VALID_LOG_LEVELS, load_config
from .deriver import derive_version
from .dirty import DirtyMode
from .errors import RepositoryAccessError, VersionParseError
from .logging_config import setup_logging

# Shared stderr console for log output, stdout stays machine readable
console = Console(stderr=True)


def parse_arguments(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog='version-from-git',
        description='Derive a semantic version from the annotated tags of a git repository'
    )

    parser.add_argument('git_root', nargs='?', help='Path of the git repository (default: current directory)')

    # Derivation policy
    parser.add_argument('--no-commits', dest='commits_no', action='store_false', default=None,
                        help='Do not append the number of commits since the tag and the short HEAD sha')
    parser.add_argument('--no-dirty', dest='dirty_detect', action='store_false', default=None,
                        help='Do not mark uncommitted working tree changes')
    parser.add_argument('--dirty-mode', choices=[mode.value for mode in DirtyMode],
                        help='Dirty marker: "hash" appends -DIRTY-<diff hash>, "flag" appends -DIRTY (default: hash)')
    parser.add_argument('--fallback-version', help='Version used when no tag is found (default: 0.0.0-SNAPSHOT)')

    # Logging
    parser.add_argument('--log-level', choices=VALID_LOG_LEVELS + [level.lower() for level in VALID_LOG_LEVELS],
                        help='Logging level (default: INFO)')

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point for the application."""
    setup_logging(console=console)

    args = parse_arguments(argv)

    if args.log_level:
        setup_logging(args.log_level.upper(), console=console)

    config = load_config(args)
    if config is None:
        return 1

    setup_logging(config.log_level, console=console)

    try:
        version = derive_version(config.git_root, config.to_options())
    except VersionParseError as e:
        logger.error(f"❌ Tag is not a valid version: {e}")
        return 1
    except RepositoryAccessError as e:
        logger.error(f"❌ {e}")
        return 1

    print(version)
    return 0


if __name__ == '__main__':
    sys.exit(main())
