import platform
from typing import Optional

ANDROID = 'android'
IOS_NAMES = ('ios', 'ipados')


class PlatformService:
    """Answers which platform the application is running on."""

    def __init__(self, system_name: Optional[str] = None):
        # An explicit name overrides detection, e.g. to exercise the gate on a desktop
        self._system_name = system_name

    @property
    def system_name(self) -> str:
        return (self._system_name or platform.system()).strip().lower()

    def is_android(self) -> bool:
        return self.system_name == ANDROID

    def is_ios(self) -> bool:
        return self.system_name in IOS_NAMES

    def is_supported_mobile_platform(self) -> bool:
        """Check if the update gate applies to this platform."""
        return self.is_android() or self.is_ios()
