import os

# Installation layout (relative to the user's home directory)
DEFAULT_USER_HOME_DOWNLOAD_DIRECTORY = "chromium-remote-downloads"
EXTENSIONS_DIRECTORY = "chromium-remote-extensions"
EXTENSION_FILE_SUFFIX = ".crx"

# Downloads
DOWNLOAD_BUFFER_SIZE = 8 * 1024 * 1024      # 8 MiB read chunks
DOWNLOAD_PROGRESS_INTERVAL = 10 * 1024 * 1024  # report every 10 MiB
ZIP_BUFFER_SIZE = 4096
ZIP_FILE_PREFIX = "chromium-trunk"
ZIP_FILE_SUFFIX = ".zip"

CONNECTION_TIMEOUT = 30
READ_TIMEOUT = 300
MAX_RETRIES = 0       # a resolution makes exactly one download attempt
RETRY_BACKOFF = 0.5

ROTATE_USER_AGENT = False
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"

# Latest trunk build download URLs and their override keys
LATEST_TRUNK_URL_WINDOWS_X86_KEY = "CHROMIUM_REMOTE_LATEST_TRUNK_URL_WINDOWS_X86"
LATEST_TRUNK_URL_WINDOWS_X64_KEY = "CHROMIUM_REMOTE_LATEST_TRUNK_URL_WINDOWS_X64"
LATEST_TRUNK_URL_LINUX_X86_KEY = "CHROMIUM_REMOTE_LATEST_TRUNK_URL_LINUX_X86"
LATEST_TRUNK_URL_LINUX_X64_KEY = "CHROMIUM_REMOTE_LATEST_TRUNK_URL_LINUX_X64"

DEFAULT_LATEST_TRUNK_URL_WINDOWS_X86 = "https://download-chromium.appspot.com/dl/Win"
DEFAULT_LATEST_TRUNK_URL_WINDOWS_X64 = "https://download-chromium.appspot.com/dl/Win_x64"
DEFAULT_LATEST_TRUNK_URL_LINUX_X86 = "https://download-chromium.appspot.com/dl/Linux"
DEFAULT_LATEST_TRUNK_URL_LINUX_X64 = "https://download-chromium.appspot.com/dl/Linux_x64"

# Common extensions
UBLOCK_ORIGIN_LITE_URL_KEY = "CHROMIUM_REMOTE_EXTENSION_URL_UBLOCK_ORIGIN_LITE"
DEFAULT_UBLOCK_ORIGIN_LITE_URL = (
    "https://clients2.google.com/service/update2/crx?response=redirect&prodversion=120.0"
    "&acceptformat=crx3&x=id%3Dddkjiahejlhfcafbddmgiahcphecmpfh%26uc"
)

# Browser
DEFAULT_WINDOW_WIDTH = 1920
DEFAULT_WINDOW_HEIGHT = 1080
WEBDRIVER_PATH = ""   # empty: let Selenium Manager resolve chromedriver

VERBOSE = False

_ua = None
def get_user_agent():
    global _ua
    if not ROTATE_USER_AGENT:
        return DEFAULT_USER_AGENT
    try:
        if _ua is None:
            from fake_useragent import UserAgent
            _ua = UserAgent(platforms='desktop', min_version=120.0)
        return _ua.random
    except Exception:
        return DEFAULT_USER_AGENT

def get_property(key: str, default: str = None, properties=None):
    """Look up an override: explicit mapping first, then the process environment."""
    if properties is not None and properties.get(key):
        return properties[key]
    value = os.environ.get(key)
    if value:
        return value
    return default

def get_default_installation_directory() -> str:
    return os.path.join(os.path.expanduser("~"), DEFAULT_USER_HOME_DOWNLOAD_DIRECTORY)
