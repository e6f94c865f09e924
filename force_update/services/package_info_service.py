import logging
from importlib import metadata
from typing import Optional

logger = logging.getLogger(__name__)


class PackageInfoService:
    """Provides the version string of the running application."""

    def __init__(self, distribution_name: Optional[str] = None, version: Optional[str] = None):
        self.distribution_name = distribution_name
        self.version = version

    async def current_version(self) -> str:
        """
        Get the current application version.

        An explicit version wins over the installed distribution metadata.

        Raises:
            ValueError: if neither a version nor a distribution name is configured
            importlib.metadata.PackageNotFoundError: if the distribution is not installed
        """
        if self.version:
            return self.version

        if not self.distribution_name:
            raise ValueError("No application version or distribution name configured")

        version = metadata.version(self.distribution_name)
        logger.debug(f"Resolved version {version} for distribution {self.distribution_name}")
        return version
