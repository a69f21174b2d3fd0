from .os_detection import OsArchitecture, OsInfo, detect_os_architecture, get_os_info  # noqa: F401
from .distributions import ChromiumDistribution  # noqa: F401
