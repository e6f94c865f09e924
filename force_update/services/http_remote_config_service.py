import asyncio
import json
import logging
import os
from typing import Any, Dict, Optional

import aiofiles
import requests

from force_update.services.remote_config_service import (
    RemoteConfigError,
    RemoteConfigService,
    RemoteConfigSettings,
)

logger = logging.getLogger(__name__)


class HttpRemoteConfigService(RemoteConfigService):
    """
    Remote config source backed by a JSON document served over HTTP.

    The response must be a JSON object of key/value pairs. Responses in the
    hosted remote config REST shape (``{"entries": {...}, "state": ...}``)
    are unwrapped. When ``cache_file`` is set, activated values are written
    there and reloaded as last-known values if a later fetch fails.
    """

    def __init__(
        self,
        url: str,
        settings: Optional[RemoteConfigSettings] = None,
        headers: Optional[Dict[str, str]] = None,
        payload: Optional[Dict[str, Any]] = None,
        cache_file: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(settings)
        if not url:
            raise ValueError("Remote config URL is required")
        self.url = url
        self.headers = headers or {}
        self.payload = payload
        self.cache_file = cache_file
        # Only a session created here is closed by close()
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self) -> None:
        """Close the HTTP session if this service created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> 'HttpRemoteConfigService':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self) -> Dict[str, Any]:
        method = 'POST' if self.payload is not None else 'GET'
        try:
            response = self.session.request(
                method,
                self.url,
                headers=self.headers,
                json=self.payload,
                timeout=self.settings.fetch_timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise RemoteConfigError(f"Request to {self.url} failed: {e}") from e
        except ValueError as e:
            raise RemoteConfigError(f"Invalid JSON from {self.url}: {e}") from e

        if not isinstance(data, dict):
            raise RemoteConfigError(f"Expected a JSON object from {self.url}, got {type(data).__name__}")

        entries = data.get('entries')
        if isinstance(entries, dict):
            return entries
        return data

    async def _fetch_values(self) -> Dict[str, Any]:
        return await asyncio.to_thread(self._request)

    async def _on_activated(self, values: Dict[str, str]) -> None:
        if not self.cache_file:
            return
        try:
            async with aiofiles.open(self.cache_file, mode='w') as f:
                await f.write(json.dumps(values))
        except OSError as e:
            logger.warning(f"Could not write remote config cache {self.cache_file}: {e}")

    async def _on_fetch_failed(self, error: Exception) -> None:
        # Values activated in this process are newer than anything in the cache
        if self.has_activated or not self.cache_file or not os.path.exists(self.cache_file):
            return
        try:
            async with aiofiles.open(self.cache_file, mode='r') as f:
                cached = json.loads(await f.read())
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read remote config cache {self.cache_file}: {e}")
            return

        if not isinstance(cached, dict):
            logger.warning(f"Ignoring malformed remote config cache {self.cache_file}")
            return

        self._active = {str(key): str(value) for key, value in cached.items()}
        logger.info(f"Using {len(self._active)} cached remote config values from {self.cache_file}")
