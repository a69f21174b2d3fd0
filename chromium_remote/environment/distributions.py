from enum import Enum
from typing import Dict, Optional
from chromium_remote.environment.os_detection import OsArchitecture


class ChromiumDistribution(Enum):
    """Known Chromium builds and the executable each one ships per platform."""

    LATEST_TRUNK_BUILD = (
        "latest-trunk-build",
        "Official latest trunk build. Downloaded from \"https://download-chromium.appspot.com\".",
        {
            OsArchitecture.LINUX_X86: "chrome",
            OsArchitecture.LINUX_X64: "chrome",
            OsArchitecture.WINDOWS_X86: "chrome.exe",
            OsArchitecture.WINDOWS_X64: "chrome.exe",
        }
    )

    def __init__(self, distribution_id: str, description: str, executable_names: Dict[OsArchitecture, str]):
        self.id = distribution_id
        self.description = description
        self.executable_names = executable_names

    def executable_name(self, architecture: OsArchitecture) -> Optional[str]:
        if architecture == OsArchitecture.UNSUPPORTED:
            return None
        return self.executable_names.get(architecture)

    @classmethod
    def from_id(cls, distribution_id: str) -> "ChromiumDistribution":
        for distribution in cls:
            if distribution.id == distribution_id or distribution.name == distribution_id.upper():
                return distribution
        raise ValueError(f"Unknown Chromium distribution: {distribution_id}")
