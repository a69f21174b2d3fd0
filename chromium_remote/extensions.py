import hashlib
import os
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional
from chromium_remote.logging.logger import logger
from chromium_remote.errors import ChecksumMismatchError, DownloadError
from chromium_remote.helpers.file_download import FileDownloader
from chromium_remote import config as cfg


@dataclass(frozen=True)
class Extension:
    """A Chromium extension package (.crx) fetched from *download_url*."""
    id: str
    name: str
    description: str
    download_url: str
    sha256_checksum: Optional[str] = None

    @property
    def file_name(self) -> str:
        return f"{self.id}{cfg.EXTENSION_FILE_SUFFIX}"


class CommonExtension(Enum):
    UBLOCK_ORIGIN_LITE = (
        "chromium-remote-ublock-origin-lite",
        "uBlock Origin Lite",
        "The lite version of uBlock Origin.",
        cfg.UBLOCK_ORIGIN_LITE_URL_KEY,
        cfg.DEFAULT_UBLOCK_ORIGIN_LITE_URL,
    )

    def __init__(self, extension_id, display_name, description, url_key, default_url):
        self.extension_id = extension_id
        self.display_name = display_name
        self.description = description
        self.url_key = url_key
        self.default_url = default_url

    def to_extension(self, properties=None) -> Extension:
        """Build the Extension, applying a configured download URL override."""
        url = cfg.get_property(self.url_key, self.default_url, properties)
        return Extension(self.extension_id, self.display_name, self.description, url)


def sha256_of_file(path: str) -> str:
    digest = hashlib.sha256()
    with open(path, 'rb') as f:
        for block in iter(lambda: f.read(8192), b''):
            digest.update(block)
    return digest.hexdigest()


def verify_checksum(path: str, expected: Optional[str]):
    if not expected or not expected.strip():
        return
    actual = sha256_of_file(path)
    logger.info(f"Expected hash: {expected} Actual hash: {actual}")
    if actual.lower() != expected.strip().lower():
        raise ChecksumMismatchError(path, expected, actual)
    logger.info("SHA-256 checksum is valid.")


def get_extensions_directory(executable_path: str) -> str:
    return os.path.join(os.path.dirname(os.path.abspath(executable_path)), cfg.EXTENSIONS_DIRECTORY)


def obtain_extensions(extensions: Iterable[Extension], extensions_dir: str, reinstall: bool = False,
                      file_downloader: FileDownloader = None) -> List[str]:
    """
    Make sure every extension has a local .crx file in *extensions_dir*.

    Existing files are reused unless *reinstall* is set. Returns the file
    paths in the order of *extensions*. Download and checksum failures
    propagate.
    """
    os.makedirs(extensions_dir, exist_ok=True)
    downloader = file_downloader
    paths = []

    for extension in extensions:
        logger.info(f"Try to obtain extension \"{extension.name}\". ID: \"{extension.id}\"")
        path = os.path.join(extensions_dir, extension.file_name)

        if os.path.isfile(path) and not reinstall:
            logger.info(f"The extension is already installed (path \"{path}\"). Skip download.")
        else:
            if os.path.isfile(path):
                os.remove(path)
                logger.info(f"Deleted existing extension file (path \"{path}\").")

            if downloader is None:
                downloader = FileDownloader()
            logger.info(f"Try to download extension \"{extension.id}\" from {logger.truncate_url(extension.download_url)}")
            try:
                downloader.download_file(extension.download_url, path)
                verify_checksum(path, extension.sha256_checksum)
            except (DownloadError, ChecksumMismatchError):
                # partial or tampered files are never reused
                if os.path.isfile(path):
                    os.remove(path)
                raise

        paths.append(path)
    return paths
