from typing import Optional
import os
import logging
from dotenv import load_dotenv

from force_update.services.remote_config_service import DEFAULT_FETCH_TIMEOUT_SEC
from force_update.services.update_prompt_service import (
    DEFAULT_DIALOG_MESSAGE,
    DEFAULT_DIALOG_TITLE,
    DEFAULT_LATER_BUTTON_TEXT,
    DEFAULT_UPDATE_BUTTON_TEXT,
)

logger = logging.getLogger(__name__)

DEFAULT_REMOTE_CONFIG_KEY = 'minimum_version'

CONFIG_VARS = [
    'FORCE_UPDATE_REMOTE_CONFIG_URL',
    'FORCE_UPDATE_REMOTE_CONFIG_KEY',
    'FORCE_UPDATE_MINIMUM_VERSION_OVERRIDE',
    'FORCE_UPDATE_FETCH_TIMEOUT',
    'FORCE_UPDATE_CACHE_FILE',
    'FORCE_UPDATE_APP_DISTRIBUTION',
    'FORCE_UPDATE_APP_VERSION',
    'FORCE_UPDATE_PLATFORM',
    'FORCE_UPDATE_ANDROID_STORE_URL',
    'FORCE_UPDATE_IOS_STORE_URL',
    'FORCE_UPDATE_DISMISSIBLE',
    'FORCE_UPDATE_DIALOG_TITLE',
    'FORCE_UPDATE_DIALOG_MESSAGE',
    'FORCE_UPDATE_UPDATE_BUTTON_TEXT',
    'FORCE_UPDATE_LATER_BUTTON_TEXT',
]

REQUIRED_VARS = [
    'FORCE_UPDATE_REMOTE_CONFIG_URL',
    'FORCE_UPDATE_ANDROID_STORE_URL',
    'FORCE_UPDATE_IOS_STORE_URL',
]

TRUE_VALUES = ('1', 'true', 'yes', 'on')

class ConfigManager:
    def __init__(self, local_config: str = '.env', system_config: str = '/etc/force-update/config'):
        self.local_config = local_config
        self.system_config = system_config
        self.config_loaded = False
        self._config = {}

    def load_configuration(self) -> bool:
        """
        Load configuration from the local .env file and the system config file.
        Variables already present in the environment are kept.
        """
        if os.path.exists(self.local_config):
            load_dotenv(self.local_config)
            self.config_loaded = True

        if os.path.exists(self.system_config):
            load_dotenv(self.system_config)
            self.config_loaded = True

        if not self.config_loaded and not os.getenv('FORCE_UPDATE_REMOTE_CONFIG_URL'):
            logger.error(f"No configuration found. Please create {self.system_config} or {self.local_config}")
            return False

        self._cache_config()
        return True

    def _cache_config(self):
        """Cache all force update environment variables"""
        for var in CONFIG_VARS:
            self._config[var] = os.getenv(var)

    def _get(self, var: str) -> Optional[str]:
        value = self._config.get(var)
        return value.strip() if value else None

    @property
    def remote_config_url(self) -> Optional[str]:
        return self._get('FORCE_UPDATE_REMOTE_CONFIG_URL')

    @property
    def remote_config_key(self) -> str:
        """Get the remote config key holding the minimum version"""
        return self._get('FORCE_UPDATE_REMOTE_CONFIG_KEY') or DEFAULT_REMOTE_CONFIG_KEY

    @property
    def minimum_version_override(self) -> Optional[str]:
        """Get the local fallback minimum version"""
        return self._get('FORCE_UPDATE_MINIMUM_VERSION_OVERRIDE')

    @property
    def fetch_timeout(self) -> float:
        """Get the remote config fetch timeout in seconds with fallback"""
        raw = self._get('FORCE_UPDATE_FETCH_TIMEOUT')
        if not raw:
            return DEFAULT_FETCH_TIMEOUT_SEC
        try:
            timeout = float(raw)
        except ValueError:
            logger.warning(f"Invalid FORCE_UPDATE_FETCH_TIMEOUT {raw!r}, using {DEFAULT_FETCH_TIMEOUT_SEC}")
            return DEFAULT_FETCH_TIMEOUT_SEC
        return timeout if timeout > 0 else DEFAULT_FETCH_TIMEOUT_SEC

    @property
    def cache_file(self) -> Optional[str]:
        return self._get('FORCE_UPDATE_CACHE_FILE')

    @property
    def app_distribution(self) -> Optional[str]:
        return self._get('FORCE_UPDATE_APP_DISTRIBUTION')

    @property
    def app_version(self) -> Optional[str]:
        return self._get('FORCE_UPDATE_APP_VERSION')

    @property
    def platform_override(self) -> Optional[str]:
        return self._get('FORCE_UPDATE_PLATFORM')

    @property
    def android_store_url(self) -> Optional[str]:
        return self._get('FORCE_UPDATE_ANDROID_STORE_URL')

    @property
    def ios_store_url(self) -> Optional[str]:
        return self._get('FORCE_UPDATE_IOS_STORE_URL')

    @property
    def dismissible(self) -> bool:
        """Check if the prompt offers a "later" option"""
        return (self._get('FORCE_UPDATE_DISMISSIBLE') or '').lower() in TRUE_VALUES

    @property
    def dialog_title(self) -> str:
        return self._get('FORCE_UPDATE_DIALOG_TITLE') or DEFAULT_DIALOG_TITLE

    @property
    def dialog_message(self) -> str:
        return self._get('FORCE_UPDATE_DIALOG_MESSAGE') or DEFAULT_DIALOG_MESSAGE

    @property
    def update_button_text(self) -> str:
        return self._get('FORCE_UPDATE_UPDATE_BUTTON_TEXT') or DEFAULT_UPDATE_BUTTON_TEXT

    @property
    def later_button_text(self) -> str:
        return self._get('FORCE_UPDATE_LATER_BUTTON_TEXT') or DEFAULT_LATER_BUTTON_TEXT

    def validate_config(self) -> bool:
        """Validate that all required configuration is present"""
        missing = [var for var in REQUIRED_VARS if not self._get(var)]
        if missing:
            logger.error(f"Missing required configuration: {', '.join(missing)}")
            return False
        return True
