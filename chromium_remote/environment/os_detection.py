import platform
from enum import Enum
from typing import NamedTuple


class OsArchitecture(Enum):
    """Operating system / architecture combinations a distribution can be installed on."""
    WINDOWS_X86 = "windows-x86"
    WINDOWS_X64 = "windows-x64"
    LINUX_X86 = "linux-x86"
    LINUX_X64 = "linux-x64"
    UNSUPPORTED = "unsupported"


class OsInfo(NamedTuple):
    os_name: str
    os_arch: str

    def info_string(self) -> str:
        return f"os.name: {self.os_name} os.arch: {self.os_arch}"


def get_os_info() -> OsInfo:
    return OsInfo(platform.system().lower(), platform.machine())


def detect_os_architecture(os_name: str = None, os_arch: str = None) -> OsArchitecture:
    """
    Map an OS name and architecture string to an OsArchitecture.

    Both default to the host values. Unknown combinations yield UNSUPPORTED
    instead of raising.
    """
    if os_name is None or os_arch is None:
        host = get_os_info()
        os_name = host.os_name if os_name is None else os_name
        os_arch = host.os_arch if os_arch is None else os_arch

    name = (os_name or "").lower()
    is_64_bit = "64" in (os_arch or "")

    # "darwin" contains "win"
    if "darwin" in name or "mac" in name:
        return OsArchitecture.UNSUPPORTED

    if "win" in name:
        return OsArchitecture.WINDOWS_X64 if is_64_bit else OsArchitecture.WINDOWS_X86
    if "nux" in name or "nix" in name or "bsd" in name:
        return OsArchitecture.LINUX_X64 if is_64_bit else OsArchitecture.LINUX_X86

    return OsArchitecture.UNSUPPORTED
