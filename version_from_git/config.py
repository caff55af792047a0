"""
Configuration management for version-from-git.

Handles environment variable loading, validation, and provides a centralized
configuration object for the command-line interface.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv
from loguru import logger

from .deriver import DEFAULT_FALLBACK_VERSION, DeriveOptions
from .dirty import DirtyMode
from .errors import VersionParseError
from .version import Version

# Load environment variables from .env file
load_dotenv()

VALID_LOG_LEVELS = ['DEBUG', 'VERBOSE', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def get_config_value(cli_args, field_name: str, env_key: str, default, value_type: type = str):
    """
    Get configuration value with proper precedence: CLI args > env vars > defaults.

    Args:
        cli_args: CLI arguments object or None
        field_name: Name of the CLI argument field
        env_key: Environment variable key
        default: Default value if neither CLI nor env var is set
        value_type: Type to convert the value to (str, int, bool)

    Returns:
        The configuration value converted to the specified type
    """
    cli_value = getattr(cli_args, field_name, None) if cli_args else None
    if cli_value is not None:
        return cli_value

    env_value = os.environ.get(env_key, '')

    # Handle boolean conversion specially
    if value_type == bool:
        if env_value.strip().lower() in ('true', '1', 'yes'):
            return True
        elif env_value.strip().lower() in ('false', '0', 'no'):
            return False
        return default

    if not env_value:
        return default

    try:
        return value_type(env_value)
    except (ValueError, TypeError):
        return default


def get_config_value_str(cli_args, field_name: str, env_key: str, default: str = '') -> str:
    """Get string configuration value."""
    return get_config_value(cli_args, field_name, env_key, default, str)


def get_config_value_bool(cli_args, field_name: str, env_key: str, default: bool = False) -> bool:
    """Get boolean configuration value."""
    return get_config_value(cli_args, field_name, env_key, default, bool)


@dataclass
class Config:
    """Configuration object containing all application settings."""

    # Repository location
    git_root: str

    # Derivation policy
    commits_no: bool
    dirty_detect: bool
    dirty_mode: DirtyMode
    fallback_version: str

    # Logging
    log_level: str = 'INFO'

    def to_options(self) -> DeriveOptions:
        """Build the derivation policy from this configuration."""
        return DeriveOptions(
            commits_no=self.commits_no,
            dirty_detect=self.dirty_detect,
            dirty_mode=self.dirty_mode,
            fallback_version=self.fallback_version,
        )


def _validate_fallback_version(fallback_version: str, validation_errors: list) -> None:
    """
    Validate the fallback version.

    Args:
        fallback_version: Version returned when no tag can be used
        validation_errors: List to append validation errors
    """
    if not fallback_version.strip():
        validation_errors.append('VERSION_FALLBACK must not be empty')
        return

    try:
        Version.parse(fallback_version)
    except VersionParseError as e:
        validation_errors.append(f'VERSION_FALLBACK is not a valid version (got: {fallback_version}): {e}')


def load_config(cli_args=None) -> Config:
    """
    Load and validate configuration from CLI arguments and environment variables.
    CLI arguments take precedence over environment variables.

    Args:
        cli_args: Parsed CLI arguments or None

    Returns:
        Config: Validated configuration object, or None if validation failed
    """
    git_root = get_config_value_str(cli_args, 'git_root', 'VERSION_GIT_ROOT', '.')
    commits_no = get_config_value_bool(cli_args, 'commits_no', 'VERSION_COMMITS_NO', True)
    dirty_detect = get_config_value_bool(cli_args, 'dirty_detect', 'VERSION_DIRTY_DETECT', True)
    dirty_mode = get_config_value_str(cli_args, 'dirty_mode', 'VERSION_DIRTY_MODE', DirtyMode.HASH.value).lower()
    fallback_version = get_config_value_str(cli_args, 'fallback_version', 'VERSION_FALLBACK', DEFAULT_FALLBACK_VERSION)

    # Handle log_level (case insensitive)
    log_level = get_config_value_str(cli_args, 'log_level', 'LOG_LEVEL', 'INFO').upper()

    validation_errors = []

    if log_level not in VALID_LOG_LEVELS:
        validation_errors.append(f'LOG_LEVEL must be one of {VALID_LOG_LEVELS} (got: {log_level})')

    valid_modes = [mode.value for mode in DirtyMode]
    if dirty_mode not in valid_modes:
        validation_errors.append(f'VERSION_DIRTY_MODE must be one of {valid_modes} (got: {dirty_mode})')

    _validate_fallback_version(fallback_version, validation_errors)

    if validation_errors:
        logger.error('❌ Configuration Error:')
        for i, error_msg in enumerate(validation_errors, 1):
            logger.error(f'   {i}. {error_msg}')
        return None

    config = Config(
        git_root=git_root,
        commits_no=commits_no,
        dirty_detect=dirty_detect,
        dirty_mode=DirtyMode(dirty_mode),
        fallback_version=fallback_version,
        log_level=log_level
    )

    logger.debug(f'VERSION_GIT_ROOT = {config.git_root}')
    logger.debug(f'VERSION_COMMITS_NO = {config.commits_no}')
    logger.debug(f'VERSION_DIRTY_DETECT = {config.dirty_detect}')
    logger.debug(f'VERSION_DIRTY_MODE = {config.dirty_mode.value}')
    logger.debug(f'VERSION_FALLBACK = {config.fallback_version}')

    return config
