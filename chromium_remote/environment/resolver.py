"""Installation resolution: find an installed distribution or download it, then locate its executable."""
import os
import shutil
import threading
from typing import Callable, Mapping, Optional
from chromium_remote.logging.logger import logger
from chromium_remote.errors import ResolutionError, DownloadError, ExtractionError
from chromium_remote.environment.distributions import ChromiumDistribution
from chromium_remote.environment.os_detection import OsArchitecture, detect_os_architecture
from chromium_remote.environment.downloader import get_download_strategy
from chromium_remote.helpers.file_search import find_file
from chromium_remote import config as cfg

StatusCallback = Callable[[str], None]

_install_locks = {}
_install_locks_guard = threading.Lock()


def _install_lock(distribution: ChromiumDistribution) -> threading.Lock:
    with _install_locks_guard:
        if distribution.id not in _install_locks:
            _install_locks[distribution.id] = threading.Lock()
        return _install_locks[distribution.id]


def get_default_installation_directory() -> str:
    return cfg.get_default_installation_directory()


def get_distribution_installation_directory(distribution: ChromiumDistribution, root: str = None) -> str:
    return os.path.join(root or get_default_installation_directory(), distribution.id)


def find_executable(distribution: ChromiumDistribution, architecture: OsArchitecture, directory: str) -> Optional[str]:
    executable_name = distribution.executable_name(architecture)
    if executable_name is None:
        return None
    return find_file(directory, executable_name)


def get_installed_executable(distribution: ChromiumDistribution, architecture: OsArchitecture = None,
                             root: str = None) -> Optional[str]:
    directory = get_distribution_installation_directory(distribution, root)
    if not os.path.isdir(directory):
        return None
    return find_executable(distribution, architecture or detect_os_architecture(), directory)


def is_default_installation_present(distribution: ChromiumDistribution, architecture: OsArchitecture = None,
                                    root: str = None) -> bool:
    executable = get_installed_executable(distribution, architecture, root)
    return executable is not None and os.path.exists(executable)


def _delete_installation(directory: str) -> bool:
    if not os.path.exists(directory):
        return False
    try:
        shutil.rmtree(directory)
        return True
    except OSError as e:
        logger.warning(f"Could not delete existing installation {directory}: {e}")
        return False


def resolve(distribution: ChromiumDistribution, overwrite: bool = False,
            status_callback: Optional[StatusCallback] = None, install_root: str = None,
            architecture: OsArchitecture = None, strategy=None,
            properties: Mapping[str, str] = None, delete_downloaded_file: bool = True) -> Optional[str]:
    """
    Make sure *distribution* is installed and return the path of its executable.

    With *overwrite* the installation directory is removed first and the
    distribution is always downloaded again. Returns None when the download
    succeeded but no executable could be found in it; raises ResolutionError
    when the platform is unsupported or the download/extraction failed.
    """
    status = status_callback or logger.status
    install_root = install_root or get_default_installation_directory()
    architecture = architecture or detect_os_architecture()
    directory = get_distribution_installation_directory(distribution, install_root)

    with _install_lock(distribution):
        if overwrite:
            status(f"Overwrite is enabled. Try to delete existing Chromium installation. Path: {directory}")
            deleted = _delete_installation(directory)
            status(f"Deletion attempt was completed. Deletion occurred: {deleted}")
            perform_installation = True
        else:
            status("Overwrite is disabled. Try to find existing Chromium installation.")
            perform_installation = not (
                os.path.isdir(directory) and find_executable(distribution, architecture, directory)
            )

        if perform_installation:
            status("An installation attempt should be performed. Try to download Chromium. Please wait.")
            if strategy is None:
                strategy = get_download_strategy(distribution)
            try:
                strategy.download(distribution, install_root, architecture, properties, delete_downloaded_file)
            except (DownloadError, ExtractionError, OSError) as e:
                raise ResolutionError(f"Unable to install Chromium distribution \"{distribution.id}\": {e}") from e
            status("The Chromium download was completed.")

        executable = find_executable(distribution, architecture, directory) if os.path.isdir(directory) else None

    if executable is None:
        status("Unable to find Chromium installation. Return None.")
        return None

    status(f"The Chromium installation was found. Path: {executable}")
    return executable
