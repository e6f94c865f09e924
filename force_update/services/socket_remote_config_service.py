import logging
from typing import Any, Dict, List, Optional

import socketio

from force_update.services.remote_config_service import (
    RemoteConfigError,
    RemoteConfigService,
    RemoteConfigSettings,
)

logger = logging.getLogger(__name__)


class SocketRemoteConfigService(RemoteConfigService):
    """Remote config source that asks a Socket.IO server for its values."""

    def __init__(
        self,
        sio: socketio.AsyncClient,
        namespace: str = '/',
        keys: Optional[List[str]] = None,
        settings: Optional[RemoteConfigSettings] = None,
    ):
        super().__init__(settings)
        self.sio = sio
        self.namespace = namespace
        self.keys = keys

    async def _fetch_values(self) -> Dict[str, Any]:
        if not self.sio.connected:
            raise RemoteConfigError("Socket not connected")

        payload: Dict[str, Any] = {}
        if self.keys:
            payload['keys'] = list(self.keys)

        result = await self.sio.call(
            'get_remote_config',
            payload,
            namespace=self.namespace,
            timeout=self.settings.fetch_timeout
        )

        if not result or not isinstance(result, dict):
            raise RemoteConfigError("Invalid response")

        if not result.get('success'):
            raise RemoteConfigError(result.get('error') or "Remote config request failed")

        config = result.get('config')
        if not isinstance(config, dict):
            raise RemoteConfigError("Response is missing the config mapping")

        return config
