import os
import time
from typing import Mapping, Optional
from chromium_remote.logging.logger import logger
from chromium_remote.errors import ResolutionError, UnimplementedDistributionError
from chromium_remote.environment.distributions import ChromiumDistribution
from chromium_remote.environment.os_detection import OsArchitecture, detect_os_architecture, get_os_info
from chromium_remote.helpers.file_download import FileDownloader, ProgressCallback
from chromium_remote.helpers.zip_utils import extract_zip
from chromium_remote import config as cfg


class LatestTrunkDownloader:
    """Downloads the latest Chromium trunk snapshot and unpacks it into the installation directory."""

    URLS = {
        OsArchitecture.WINDOWS_X86: (cfg.LATEST_TRUNK_URL_WINDOWS_X86_KEY, cfg.DEFAULT_LATEST_TRUNK_URL_WINDOWS_X86),
        OsArchitecture.WINDOWS_X64: (cfg.LATEST_TRUNK_URL_WINDOWS_X64_KEY, cfg.DEFAULT_LATEST_TRUNK_URL_WINDOWS_X64),
        OsArchitecture.LINUX_X86: (cfg.LATEST_TRUNK_URL_LINUX_X86_KEY, cfg.DEFAULT_LATEST_TRUNK_URL_LINUX_X86),
        OsArchitecture.LINUX_X64: (cfg.LATEST_TRUNK_URL_LINUX_X64_KEY, cfg.DEFAULT_LATEST_TRUNK_URL_LINUX_X64),
    }

    def __init__(self, file_downloader: FileDownloader = None, progress_callback: Optional[ProgressCallback] = None):
        self.file_downloader = file_downloader or FileDownloader()
        self.progress_callback = progress_callback

    def get_download_url(self, architecture: OsArchitecture, properties: Mapping[str, str] = None) -> Optional[str]:
        entry = self.URLS.get(architecture)
        if entry is None:
            return None
        key, default_url = entry
        return cfg.get_property(key, default_url, properties)

    def download(self, distribution: ChromiumDistribution, download_root: str,
                 architecture: OsArchitecture, properties: Mapping[str, str] = None,
                 delete_downloaded_file: bool = True) -> str:
        """Download and extract the build. Returns the extraction directory."""
        url = self.get_download_url(architecture, properties)
        if url is None:
            info = get_os_info().info_string()
            logger.error(f"Unsupported OS: {info}")
            raise ResolutionError(f"The given OS \"{info}\" is unsupported.")

        extraction_dir = os.path.join(download_root, distribution.id)
        os.makedirs(extraction_dir, exist_ok=True)

        zip_path = os.path.join(
            extraction_dir,
            f"{cfg.ZIP_FILE_PREFIX}{int(time.time() * 1000)}{cfg.ZIP_FILE_SUFFIX}"
        )

        logger.info(f"Try to download Chromium browser from URL: {url}")
        self.file_downloader.download_file(url, zip_path, self.progress_callback)
        extract_zip(zip_path, extraction_dir)
        logger.info(f"Chromium downloaded and extracted successfully to: {extraction_dir}")

        if delete_downloaded_file:
            try:
                os.remove(zip_path)
                logger.info("The downloaded file was deleted.")
            except OSError as e:
                logger.warning(f"Unable to delete downloaded file {zip_path}: {e}")

        return extraction_dir


DOWNLOAD_STRATEGIES = {
    ChromiumDistribution.LATEST_TRUNK_BUILD: LatestTrunkDownloader,
}


def get_download_strategy(distribution: ChromiumDistribution, **kwargs):
    strategy_cls = DOWNLOAD_STRATEGIES.get(distribution)
    if strategy_cls is None:
        raise UnimplementedDistributionError(
            f"Missing Chromium distribution implementation \"{distribution.name}\"."
        )
    return strategy_cls(**kwargs)


def download_chromium(distribution: ChromiumDistribution, delete_downloaded_file: bool = True,
                      download_root: str = None, architecture: OsArchitecture = None,
                      properties: Mapping[str, str] = None, progress_callback: Optional[ProgressCallback] = None) -> str:
    """
    Download *distribution* for *architecture* (default: the host) below
    *download_root* (default: the per-user download directory).
    """
    download_root = download_root or cfg.get_default_installation_directory()
    architecture = architecture or detect_os_architecture()
    logger.info(
        f"Try to download Chromium for distribution {distribution.name} for architecture {architecture.name}. "
        f"Download path: \"{download_root}\" Delete downloaded file: {delete_downloaded_file}"
    )
    strategy = get_download_strategy(distribution, progress_callback=progress_callback)
    return strategy.download(distribution, download_root, architecture, properties, delete_downloaded_file)
