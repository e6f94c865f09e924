"""
Shared fixtures for force update tests

Provides an in-memory remote config source so no test needs the network
"""

import os
from typing import Any, Dict, Optional

import pytest

from force_update.services.package_info_service import PackageInfoService
from force_update.services.platform_service import PlatformService
from force_update.services.remote_config_service import RemoteConfigService


class FakeRemoteConfigService(RemoteConfigService):
    """Remote config source returning canned values or raising a canned error"""

    def __init__(self, values: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        super().__init__()
        self.values = values or {}
        self.error = error
        self.fetch_calls = 0

    async def _fetch_values(self) -> Dict[str, Any]:
        self.fetch_calls += 1
        if self.error is not None:
            raise self.error
        return dict(self.values)


@pytest.fixture
def fake_remote_config():
    return FakeRemoteConfigService()


@pytest.fixture
def android_platform():
    return PlatformService("Android")


@pytest.fixture
def ios_platform():
    return PlatformService("iOS")


@pytest.fixture
def package_info():
    return PackageInfoService(version="1.5.0")


@pytest.fixture
def isolated_environ(monkeypatch):
    """Give each test its own copy of os.environ so load_dotenv cannot leak"""
    environ = {k: v for k, v in os.environ.items() if not k.startswith("FORCE_UPDATE_")}
    monkeypatch.setattr(os, "environ", environ)
    return environ
