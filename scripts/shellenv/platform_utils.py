import sys
from typing import Optional

# GUI apps launched from Finder/Dock inherit launchd's PATH=/usr/bin:/bin:/usr/sbin:/sbin
GUI_RESTRICTED_PLATFORMS = ("darwin",)


class PlatformDetector:
    @staticmethod
    def current() -> str:
        return sys.platform

    @staticmethod
    def is_gui_restricted(platform: Optional[str] = None) -> bool:
        name = platform if platform is not None else PlatformDetector.current()
        return name in GUI_RESTRICTED_PLATFORMS
