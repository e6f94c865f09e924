"""Platform predicate and application version lookup"""

from importlib import metadata

import pytest

from force_update.services.package_info_service import PackageInfoService
from force_update.services.platform_service import PlatformService


@pytest.mark.parametrize("name,android,ios", [
    ("Android", True, False),
    ("iOS", False, True),
    ("iPadOS", False, True),
    ("Linux", False, False),
    ("Darwin", False, False),
])
def test_platform_predicates(name, android, ios):
    service = PlatformService(name)

    assert service.is_android() is android
    assert service.is_ios() is ios
    assert service.is_supported_mobile_platform() is (android or ios)


def test_platform_detection_uses_platform_module(monkeypatch):
    monkeypatch.setattr("platform.system", lambda: "Android")
    assert PlatformService().is_supported_mobile_platform() is True


@pytest.mark.asyncio
async def test_explicit_version_wins():
    service = PackageInfoService(distribution_name="pytest", version="1.2.3")
    assert await service.current_version() == "1.2.3"


@pytest.mark.asyncio
async def test_version_from_installed_distribution():
    service = PackageInfoService(distribution_name="pytest")
    assert await service.current_version() == metadata.version("pytest")


@pytest.mark.asyncio
async def test_unknown_distribution_raises():
    service = PackageInfoService(distribution_name="no-such-distribution-force-update")
    with pytest.raises(metadata.PackageNotFoundError):
        await service.current_version()


@pytest.mark.asyncio
async def test_nothing_configured_raises():
    with pytest.raises(ValueError):
        await PackageInfoService().current_version()
