import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Fetch policy used by the update gate
DEFAULT_FETCH_TIMEOUT_SEC = 10.0
DEFAULT_MINIMUM_FETCH_INTERVAL_SEC = 0.0


class RemoteConfigError(Exception):
    """Raised by a remote config backend when values cannot be fetched."""


class FetchStatus:
    NO_FETCH_YET = 'no_fetch_yet'
    SUCCESS = 'success'
    THROTTLED = 'throttled'
    FAILURE = 'failure'


@dataclass(frozen=True)
class RemoteConfigSettings:
    """Fetch policy for a remote config source (seconds)."""
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT_SEC
    minimum_fetch_interval: float = DEFAULT_MINIMUM_FETCH_INTERVAL_SEC


def _to_config_string(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


class RemoteConfigService(ABC):
    """
    Base class for remote key/value config sources.

    Values go through two stages: a fetch stores them as *fetched* values,
    and activation promotes them to *active* values, which are the ones
    returned by ``get_string``. Backends only implement ``_fetch_values``.
    """

    def __init__(self, settings: Optional[RemoteConfigSettings] = None):
        self.settings = settings or RemoteConfigSettings()
        self._defaults: Dict[str, str] = {}
        self._fetched: Optional[Dict[str, str]] = None
        self._active: Dict[str, str] = {}
        self._activated = False
        self.last_fetch_status = FetchStatus.NO_FETCH_YET
        self.last_fetch_time: Optional[float] = None

    def set_config_settings(self, settings: RemoteConfigSettings) -> None:
        """Set the fetch timeout and minimum fetch interval."""
        if settings.fetch_timeout <= 0:
            raise ValueError(f"fetch_timeout must be positive, got {settings.fetch_timeout}")
        if settings.minimum_fetch_interval < 0:
            raise ValueError(
                f"minimum_fetch_interval must not be negative, got {settings.minimum_fetch_interval}"
            )
        self.settings = settings

    def set_defaults(self, defaults: Dict[str, Any]) -> None:
        """Set in-app default values used when a key has no active value."""
        self._defaults = {key: _to_config_string(value) for key, value in defaults.items()}

    @abstractmethod
    async def _fetch_values(self) -> Dict[str, Any]:
        """
        Fetch the raw key/value mapping from the backend.

        Returns:
            Mapping of config keys to values

        Raises:
            RemoteConfigError: if the backend could not provide values
        """
        pass

    def _is_throttled(self) -> bool:
        if self.last_fetch_time is None:
            return False
        elapsed = time.monotonic() - self.last_fetch_time
        return elapsed < self.settings.minimum_fetch_interval

    async def _on_fetch_failed(self, error: Exception) -> None:
        """Hook for backends to fall back to last-known values after a failed fetch."""
        pass

    async def _on_activated(self, values: Dict[str, str]) -> None:
        """Hook for backends to persist newly activated values."""
        pass

    async def fetch(self) -> bool:
        """
        Fetch values from the backend without activating them.

        Returns:
            True if new values were fetched, False if the fetch was throttled

        Raises:
            RemoteConfigError, asyncio.TimeoutError: on backend failure
        """
        if self._is_throttled():
            logger.debug("Remote config fetch throttled by minimum fetch interval")
            self.last_fetch_status = FetchStatus.THROTTLED
            return False

        try:
            raw = await asyncio.wait_for(self._fetch_values(), timeout=self.settings.fetch_timeout)
        except Exception:
            self.last_fetch_status = FetchStatus.FAILURE
            raise

        self._fetched = {key: _to_config_string(value) for key, value in raw.items()}
        self.last_fetch_status = FetchStatus.SUCCESS
        self.last_fetch_time = time.monotonic()
        logger.debug(f"Fetched {len(self._fetched)} remote config values")
        return True

    async def activate(self) -> bool:
        """
        Promote the last fetched values to active values.

        Returns:
            True if the active values changed or this was the first activation
        """
        if self._fetched is None:
            return False

        fetched, self._fetched = self._fetched, None
        # The first activation is always applied, even when empty
        if self._activated and fetched == self._active:
            return False

        self._active = fetched
        self._activated = True
        await self._on_activated(dict(fetched))
        return True

    async def fetch_and_activate(self) -> bool:
        """
        Fetch and activate values in one step.

        Never raises: on failure the previously active (or default) values
        stay in use.

        Returns:
            True if new values were activated
        """
        try:
            await self.fetch()
        except asyncio.TimeoutError:
            logger.warning(f"Remote config fetch timed out after {self.settings.fetch_timeout}s")
            await self._on_fetch_failed(RemoteConfigError("fetch timed out"))
            return False
        except Exception as e:
            logger.warning(f"Remote config fetch failed: {e}")
            await self._on_fetch_failed(e)
            return False

        return await self.activate()

    @property
    def has_activated(self) -> bool:
        """Check if values from a successful fetch were activated in this process."""
        return self._activated

    def get_string(self, key: str) -> str:
        """Get the active value for a key, the default, or an empty string."""
        if key in self._active:
            return self._active[key]
        return self._defaults.get(key, '')

    def get_all(self) -> Dict[str, str]:
        """Get defaults overlaid with the active values."""
        values = dict(self._defaults)
        values.update(self._active)
        return values
