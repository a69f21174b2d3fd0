"""Immutable launch options for a remote Chromium session.

Every ``with_*`` method returns a new LaunchOptions; nothing is mutated in
place, so presets can be shared and extended freely.
"""
from dataclasses import dataclass, replace
from typing import Any, Iterable, Optional, Sequence, Tuple
from selenium.webdriver import ChromeOptions
from chromium_remote.logging.logger import logger
from chromium_remote.extensions import Extension, CommonExtension
from chromium_remote.environment.os_detection import OsArchitecture, detect_os_architecture
from chromium_remote import config as cfg


@dataclass(frozen=True)
class LaunchOptions:
    arguments: Tuple[str, ...] = ()
    experimental_options: Tuple[Tuple[str, Any], ...] = ()
    extensions: Tuple[Extension, ...] = ()
    reinstall_extensions: bool = False
    binary_location: Optional[str] = None

    def with_argument(self, argument: str) -> "LaunchOptions":
        return replace(self, arguments=self.arguments + (argument,))

    def with_experimental_option(self, name: str, value: Any) -> "LaunchOptions":
        kept = tuple((k, v) for k, v in self.experimental_options if k != name)
        return replace(self, experimental_options=kept + ((name, value),))

    def with_binary_location(self, binary_location: str) -> "LaunchOptions":
        return replace(self, binary_location=binary_location)

    def with_disabled_automation_warning(self, architecture: OsArchitecture = None) -> "LaunchOptions":
        architecture = architecture or detect_os_architecture()
        if architecture not in (OsArchitecture.WINDOWS_X86, OsArchitecture.WINDOWS_X64):
            logger.warning(
                "Chromium doesn't hide the test-related info-bar messages on non-Windows platforms. "
                "Set the argument \"--disable-infobars\" to hide ALL info-bar messages."
            )
            return self.with_argument("--disable-infobars")
        logger.info("Disable automation warning (excludeSwitches=enable-automation, useAutomationExtension=false).")
        return (self
                .with_experimental_option("excludeSwitches", ["enable-automation"])
                .with_experimental_option("useAutomationExtension", False))

    def with_app(self, app_url: str) -> "LaunchOptions":
        logger.info(f"Add \"--app\" option. URL: {app_url}")
        return self.with_argument(f"--app={app_url}")

    def with_headless(self) -> "LaunchOptions":
        return self.with_argument("--headless")

    def with_disable_gpu(self) -> "LaunchOptions":
        return self.with_argument("--disable-gpu")

    def with_window_size(self, width: int, height: int) -> "LaunchOptions":
        return self.with_argument(f"--window-size={width},{height}")

    def with_disable_dev_shm_usage(self) -> "LaunchOptions":
        return self.with_argument("--disable-dev-shm-usage")

    def with_extensions(self, extensions: Iterable, reinstall: bool = False) -> "LaunchOptions":
        resolved = []
        for extension in extensions:
            if isinstance(extension, CommonExtension):
                extension = extension.to_extension()
            logger.info(f"Register extension \"{extension.id}\".")
            if extension not in resolved:
                resolved.append(extension)
        return replace(self, extensions=tuple(resolved), reinstall_extensions=reinstall)

    def to_chrome_options(self, binary_location: str, extension_files: Sequence[str] = ()) -> ChromeOptions:
        """Build Selenium ChromeOptions. *binary_location* always wins over the stored one."""
        options = ChromeOptions()
        options.binary_location = binary_location
        for argument in self.arguments:
            options.add_argument(argument)
        for name, value in self.experimental_options:
            options.add_experimental_option(name, value)
        for path in extension_files:
            options.add_extension(path)
        return options


def with_app_options(app_url: str) -> LaunchOptions:
    return LaunchOptions().with_disabled_automation_warning().with_app(app_url)


def with_headless_options(disable_gpu: bool = False, width: int = cfg.DEFAULT_WINDOW_WIDTH,
                          height: int = cfg.DEFAULT_WINDOW_HEIGHT) -> LaunchOptions:
    options = (LaunchOptions()
               .with_headless()
               .with_disable_dev_shm_usage()
               .with_window_size(width, height))
    if disable_gpu:
        options = options.with_disable_gpu()
    return options
