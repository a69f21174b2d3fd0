import atexit
import os
import threading
from typing import FrozenSet, List, NamedTuple, Optional, Tuple
from selenium import webdriver
from selenium.webdriver.common.by import By
from selenium.webdriver.chrome.service import Service as ChromeService
from chromium_remote.logging.logger import logger
from chromium_remote.extensions import Extension, obtain_extensions, get_extensions_directory
from chromium_remote.helpers.browser_data import clear_data_for_url
from chromium_remote.helpers.file_download import FileDownloader
from chromium_remote.options import LaunchOptions
from chromium_remote import config as cfg


class ChromiumVersion(NamedTuple):
    version_id: str
    full_version: str


class RemoteChromium:
    """
    A live, remotely controllable Chromium process.

    The session is live until close() is called, the ``with`` block exits,
    or the interpreter shuts down. The driver is quit at most once.
    """

    def __init__(self, driver=None, extensions: FrozenSet[Extension] = frozenset(), executable_path: str = None):
        self.driver = driver
        self.extensions = frozenset(extensions)
        self.executable_path = executable_path
        self._closed = driver is None
        self._close_lock = threading.Lock()
        self._version = None
        self._version_obtained = False
        if driver is not None:
            atexit.register(self._close_at_exit)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    @property
    def is_live(self) -> bool:
        return not self._closed

    def close(self):
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        atexit.unregister(self._close_at_exit)
        try:
            self.driver.quit()
            logger.info("Chromium session closed")
        except Exception as e:
            logger.warning(f"Error closing Chromium session: {e}")

    def _close_at_exit(self):
        # Other components may already be torn down here; only log.
        try:
            self.close()
        except Exception as e:
            logger.warning(f"Unable to quit Chrome driver at exit: {e}")

    def clear_browser_data_for_url(self, url: str) -> int:
        if not self.is_live:
            raise RuntimeError("Cannot clear browser data: the session is not live")
        return clear_data_for_url(self.driver, url)

    def get_version(self) -> Optional[ChromiumVersion]:
        """Read the version from chrome://version once per session. Returns None if it cannot be read."""
        if self._version_obtained:
            return self._version
        self._version_obtained = True
        if not self.is_live:
            return None
        try:
            self.driver.get("chrome://version/")
            full_version = self.driver.find_element(By.ID, "version").text
            version_id = full_version.split(" ", 1)[0]
            self._version = ChromiumVersion(version_id, full_version)
        except Exception as e:
            logger.warning(f"Unable to obtain Chromium version: {e}")
        return self._version


class SessionFactory:
    """Creates RemoteChromium sessions for a resolved executable."""

    def launch(self, executable_path: str, options: LaunchOptions = None) -> RemoteChromium:
        raise NotImplementedError


class SeleniumSessionFactory(SessionFactory):
    """Starts a real Chromium process through Selenium's ChromeDriver."""

    def __init__(self, webdriver_path: str = None, file_downloader: FileDownloader = None):
        self.webdriver_path = webdriver_path if webdriver_path is not None else cfg.WEBDRIVER_PATH
        self.file_downloader = file_downloader

    def _create_service(self) -> ChromeService:
        if self.webdriver_path:
            return ChromeService(executable_path=self.webdriver_path, log_output=os.devnull)
        # Selenium Manager resolves a matching chromedriver
        return ChromeService(log_output=os.devnull)

    def launch(self, executable_path: str, options: LaunchOptions = None) -> RemoteChromium:
        options = (options or LaunchOptions()).with_binary_location(executable_path)

        extension_files = []
        if options.extensions:
            extension_files = obtain_extensions(
                options.extensions,
                get_extensions_directory(executable_path),
                reinstall=options.reinstall_extensions,
                file_downloader=self.file_downloader
            )
            for path in extension_files:
                logger.info(f"Register extension file: {path}")

        chrome_options = options.to_chrome_options(options.binary_location, extension_files)
        logger.info(f"Starting Chromium: {options.binary_location}")
        driver = webdriver.Chrome(service=self._create_service(), options=chrome_options)
        logger.success("Chromium session started")
        return RemoteChromium(driver, frozenset(options.extensions), executable_path)


class FakeSessionFactory(SessionFactory):
    """Records launch requests without starting a browser."""

    def __init__(self):
        self.launches: List[Tuple[str, LaunchOptions]] = []

    def launch(self, executable_path: str, options: LaunchOptions = None) -> RemoteChromium:
        options = (options or LaunchOptions()).with_binary_location(executable_path)
        self.launches.append((executable_path, options))
        return RemoteChromium(None, frozenset(options.extensions), executable_path)
