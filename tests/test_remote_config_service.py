"""Fetch/activate behavior shared by all remote config sources"""

import asyncio
from typing import Any, Dict

import pytest

from conftest import FakeRemoteConfigService
from force_update.services.remote_config_service import (
    FetchStatus,
    RemoteConfigError,
    RemoteConfigService,
    RemoteConfigSettings,
)


class SlowRemoteConfigService(RemoteConfigService):
    async def _fetch_values(self) -> Dict[str, Any]:
        await asyncio.sleep(5)
        return {"minimum_version": "9.9.9"}


def test_get_string_is_empty_for_unknown_key(fake_remote_config):
    assert fake_remote_config.get_string("missing") == ""
    assert fake_remote_config.last_fetch_status == FetchStatus.NO_FETCH_YET


def test_defaults_are_used_until_activation():
    service = FakeRemoteConfigService({"minimum_version": "2.0.0"})
    service.set_defaults({"minimum_version": "1.0.0", "soft": True, "count": 3})

    assert service.get_string("minimum_version") == "1.0.0"
    assert service.get_string("soft") == "true"
    assert service.get_string("count") == "3"


@pytest.mark.asyncio
async def test_fetch_and_activate_promotes_values():
    service = FakeRemoteConfigService({"minimum_version": "2.0.0", "flag": False})

    assert await service.fetch_and_activate() is True
    assert service.get_string("minimum_version") == "2.0.0"
    assert service.get_string("flag") == "false"
    assert service.last_fetch_status == FetchStatus.SUCCESS


@pytest.mark.asyncio
async def test_fetch_does_not_activate():
    service = FakeRemoteConfigService({"minimum_version": "2.0.0"})

    assert await service.fetch() is True
    assert service.get_string("minimum_version") == ""
    assert await service.activate() is True
    assert service.get_string("minimum_version") == "2.0.0"


@pytest.mark.asyncio
async def test_activate_reports_unchanged_values():
    service = FakeRemoteConfigService({"minimum_version": "2.0.0"})
    await service.fetch_and_activate()

    assert await service.fetch_and_activate() is False
    assert service.get_string("minimum_version") == "2.0.0"


@pytest.mark.asyncio
async def test_activate_without_fetch_is_noop(fake_remote_config):
    assert await fake_remote_config.activate() is False


@pytest.mark.asyncio
async def test_fetch_failure_keeps_previous_values():
    service = FakeRemoteConfigService({"minimum_version": "2.0.0"})
    await service.fetch_and_activate()

    service.error = RemoteConfigError("server down")
    assert await service.fetch_and_activate() is False
    assert service.get_string("minimum_version") == "2.0.0"
    assert service.last_fetch_status == FetchStatus.FAILURE


@pytest.mark.asyncio
async def test_fetch_failure_falls_back_to_defaults():
    service = FakeRemoteConfigService(error=ConnectionError("no network"))
    service.set_defaults({"minimum_version": "1.0.0"})

    assert await service.fetch_and_activate() is False
    assert service.get_string("minimum_version") == "1.0.0"


@pytest.mark.asyncio
async def test_fetch_raises_backend_error():
    service = FakeRemoteConfigService(error=RemoteConfigError("boom"))

    with pytest.raises(RemoteConfigError):
        await service.fetch()


@pytest.mark.asyncio
async def test_fetch_timeout_is_not_raised():
    service = SlowRemoteConfigService(RemoteConfigSettings(fetch_timeout=0.05))

    assert await service.fetch_and_activate() is False
    assert service.last_fetch_status == FetchStatus.FAILURE


@pytest.mark.asyncio
async def test_minimum_fetch_interval_throttles_fetches():
    service = FakeRemoteConfigService({"minimum_version": "2.0.0"})
    service.set_config_settings(RemoteConfigSettings(minimum_fetch_interval=3600))

    await service.fetch_and_activate()
    service.values = {"minimum_version": "3.0.0"}
    assert await service.fetch_and_activate() is False

    assert service.fetch_calls == 1
    assert service.last_fetch_status == FetchStatus.THROTTLED
    assert service.get_string("minimum_version") == "2.0.0"


@pytest.mark.asyncio
async def test_zero_interval_always_fetches():
    service = FakeRemoteConfigService({"minimum_version": "2.0.0"})
    service.set_config_settings(RemoteConfigSettings(minimum_fetch_interval=0))

    await service.fetch_and_activate()
    service.values = {"minimum_version": "3.0.0"}
    await service.fetch_and_activate()

    assert service.fetch_calls == 2
    assert service.get_string("minimum_version") == "3.0.0"


@pytest.mark.parametrize("settings", [
    RemoteConfigSettings(fetch_timeout=0),
    RemoteConfigSettings(minimum_fetch_interval=-1),
])
def test_invalid_settings_are_rejected(fake_remote_config, settings):
    with pytest.raises(ValueError):
        fake_remote_config.set_config_settings(settings)


@pytest.mark.asyncio
async def test_get_all_overlays_active_on_defaults():
    service = FakeRemoteConfigService({"minimum_version": "2.0.0"})
    service.set_defaults({"minimum_version": "1.0.0", "other": "x"})
    await service.fetch_and_activate()

    assert service.get_all() == {"minimum_version": "2.0.0", "other": "x"}


@pytest.mark.asyncio
async def test_first_activation_applies_empty_values():
    service = FakeRemoteConfigService({})
    assert service.has_activated is False

    assert await service.fetch_and_activate() is True
    assert service.has_activated is True
    assert await service.fetch_and_activate() is False
