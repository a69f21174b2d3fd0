"""chromium-remote: download, install and remotely control Chromium builds.

Resolves a Chromium distribution into a local executable (downloading and
unpacking it when needed) and starts it as a Selenium WebDriver session,
optionally with extensions installed.
"""
from .errors import (  # noqa: F401
    ChromiumRemoteError, DownloadError, ExtractionError, ResolutionError,
    UnimplementedDistributionError, ChecksumMismatchError,
)
from .environment.os_detection import OsArchitecture, detect_os_architecture  # noqa: F401
from .environment.distributions import ChromiumDistribution  # noqa: F401
from .environment.resolver import resolve, is_default_installation_present  # noqa: F401
from .environment.session import RemoteChromium, SessionFactory, SeleniumSessionFactory, FakeSessionFactory  # noqa: F401
from .extensions import Extension, CommonExtension  # noqa: F401
from .options import LaunchOptions, with_app_options, with_headless_options  # noqa: F401
from .launcher import create_instance  # noqa: F401

__version__ = "0.1.0"
