import logging
from typing import Optional

from force_update.services.package_info_service import PackageInfoService
from force_update.services.platform_service import PlatformService
from force_update.services.remote_config_service import RemoteConfigService, RemoteConfigSettings
from force_update.utils.logging_utils import log_exception
from force_update.utils.version_utils import is_update_required

logger = logging.getLogger(__name__)


class UpdateCheckerService:
    """Decides whether the running application must be updated."""

    def __init__(
        self,
        remote_config: RemoteConfigService,
        package_info: PackageInfoService,
        platform_service: Optional[PlatformService] = None,
        settings: Optional[RemoteConfigSettings] = None,
    ):
        self.remote_config = remote_config
        self.package_info = package_info
        self.platform_service = platform_service or PlatformService()
        # Always attempt a fresh fetch, bounded by the fetch timeout
        self.settings = settings or RemoteConfigSettings()

    async def _resolve_required_version(self, remote_key: str, override_version: Optional[str]) -> Optional[str]:
        """Get the minimum version from remote config, falling back to the override."""
        self.remote_config.set_config_settings(self.settings)
        await self.remote_config.fetch_and_activate()

        remote_version = self.remote_config.get_string(remote_key)
        if remote_version:
            return remote_version
        if override_version:
            return override_version
        return None

    async def check_for_update(self, remote_key: str, override_version: Optional[str] = None) -> bool:
        """
        Check if a mandatory update is required.

        Args:
            remote_key: Remote config key holding the minimum version (e.g. '2.5.0')
            override_version: Used when the key has no remote value

        Returns:
            True if the current version is lower than the minimum version.
            Any failure yields False so users are never blocked by an error.
        """
        if not self.platform_service.is_supported_mobile_platform():
            logger.debug(f"Update check skipped on unsupported platform {self.platform_service.system_name!r}")
            return False

        try:
            required_version = await self._resolve_required_version(remote_key, override_version)
            if required_version is None:
                logger.debug(f"No minimum version configured for key {remote_key!r}")
                return False

            current_version = await self.package_info.current_version()
            logger.info(f"Current version: {current_version}, required minimum version: {required_version}")

            return is_update_required(current_version, required_version)

        except Exception as e:
            log_exception(logger, "Error during update check", e)
            return False
