"""
Progress and warning reporting for version derivation.

The deriver only calls Reporter methods; how messages are rendered is up to
the implementation. LoguruReporter sends them through the shared loguru
logger configured in logging_config.
"""

from loguru import logger


class Reporter:
    """No-op reporter. Subclass and override the events you care about."""

    def repository_not_found(self, git_root: str, fallback_version: str) -> None:
        pass

    def no_tags_found(self, fallback_version: str) -> None:
        pass

    def tag_selected(self, tag_name: str, commit_sha: str) -> None:
        pass

    def snapshot_found(self, tag_name: str) -> None:
        pass

    def version_calculated(self, version: str) -> None:
        pass


class LoguruReporter(Reporter):
    """Report derivation events through loguru."""

    def repository_not_found(self, git_root, fallback_version):
        logger.warning(f"No GIT repository found in [{git_root}], falling back to default version {fallback_version}")

    def no_tags_found(self, fallback_version):
        logger.warning(f"No tags found, falling back to default version {fallback_version}")

    def tag_selected(self, tag_name, commit_sha):
        logger.debug(f"Selected tag {tag_name} at commit {commit_sha[:7]}")

    def snapshot_found(self, tag_name):
        logger.warning(f"SNAPSHOT version found ({tag_name}). Skipping further calculations")

    def version_calculated(self, version):
        logger.info(f"✅ Version calculated: {version}")
