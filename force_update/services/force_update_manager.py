import logging
from typing import Optional

from force_update.config.config_manager import ConfigManager
from force_update.services.http_remote_config_service import HttpRemoteConfigService
from force_update.services.package_info_service import PackageInfoService
from force_update.services.platform_service import PlatformService
from force_update.services.remote_config_service import RemoteConfigSettings
from force_update.services.update_checker_service import UpdateCheckerService
from force_update.services.update_prompt_service import (
    ConsolePromptRenderer,
    PromptRenderer,
    UpdatePromptService,
    UrlLauncher,
)

logger = logging.getLogger(__name__)


class ForceUpdateManager:
    """Entry point combining the update check and the update prompt."""

    def __init__(
        self,
        checker: UpdateCheckerService,
        prompter: UpdatePromptService,
        config: Optional[ConfigManager] = None,
    ):
        self.checker = checker
        self.prompter = prompter
        self.config = config

    @classmethod
    def from_config(cls, config: ConfigManager, renderer: Optional[PromptRenderer] = None) -> 'ForceUpdateManager':
        """Build a manager with the HTTP remote config source described by the configuration."""
        settings = RemoteConfigSettings(fetch_timeout=config.fetch_timeout)
        remote_config = HttpRemoteConfigService(
            config.remote_config_url,
            settings=settings,
            cache_file=config.cache_file,
        )
        package_info = PackageInfoService(
            distribution_name=config.app_distribution,
            version=config.app_version,
        )
        platform_service = PlatformService(config.platform_override)

        checker = UpdateCheckerService(remote_config, package_info, platform_service, settings)
        prompter = UpdatePromptService(
            renderer or ConsolePromptRenderer(),
            UrlLauncher(),
            platform_service,
        )
        return cls(checker, prompter, config)

    async def check_for_update(
        self,
        remote_key: Optional[str] = None,
        override_version: Optional[str] = None,
    ) -> bool:
        """Check if an update is required, using configured values for missing arguments."""
        if remote_key is None:
            if self.config is None:
                raise ValueError("remote_key is required without a configuration")
            remote_key = self.config.remote_config_key
        if override_version is None and self.config is not None:
            override_version = self.config.minimum_version_override

        return await self.checker.check_for_update(remote_key, override_version)

    async def perform_force_update(
        self,
        android_store_url: Optional[str] = None,
        ios_store_url: Optional[str] = None,
        dismissible: Optional[bool] = None,
        dialog_title: Optional[str] = None,
        dialog_message: Optional[str] = None,
        update_button_text: Optional[str] = None,
        later_button_text: Optional[str] = None,
    ) -> None:
        """Show the update prompt, using configured values for missing arguments."""
        kwargs = {
            'android_store_url': android_store_url,
            'ios_store_url': ios_store_url,
            'dismissible': dismissible,
            'dialog_title': dialog_title,
            'dialog_message': dialog_message,
            'update_button_text': update_button_text,
            'later_button_text': later_button_text,
        }
        if self.config is not None:
            for name, value in kwargs.items():
                if value is None:
                    kwargs[name] = getattr(self.config, name)

        if not kwargs['android_store_url'] or not kwargs['ios_store_url']:
            raise ValueError("Both android_store_url and ios_store_url are required")

        await self.prompter.perform_force_update(**{k: v for k, v in kwargs.items() if v is not None})

    def close(self) -> None:
        """Release resources held by the remote config source."""
        close = getattr(self.checker.remote_config, 'close', None)
        if callable(close):
            close()

    async def run(self) -> bool:
        """Check for a required update and show the prompt if one is needed."""
        update_required = await self.check_for_update()
        if update_required:
            logger.info("Update required, showing update prompt")
            await self.perform_force_update()
        return update_required
