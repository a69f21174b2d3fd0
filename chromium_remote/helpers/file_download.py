import os
import time
from typing import Callable, Optional
import requests
import certifi
from urllib3 import Retry
from requests.adapters import HTTPAdapter
from requests.exceptions import RequestException
from chromium_remote.logging.logger import logger
from chromium_remote.errors import DownloadError
from chromium_remote import config as cfg

ProgressCallback = Callable[[int], None]

MIB = 1024 * 1024


def log_progress(total_bytes: int):
    logger.info(f"Downloaded {total_bytes // MIB} MiB...")


class FileDownloader:
    """Streams HTTP downloads to disk with periodic progress callbacks."""

    RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}

    def __init__(self, session: requests.Session = None,
                 chunk_size: int = None,
                 progress_interval: int = None):
        self.chunk_size = chunk_size or cfg.DOWNLOAD_BUFFER_SIZE
        self.progress_interval = progress_interval or cfg.DOWNLOAD_PROGRESS_INTERVAL
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        retries = Retry(
            total=cfg.MAX_RETRIES,
            backoff_factor=cfg.RETRY_BACKOFF,
            status_forcelist=list(self.RETRYABLE_STATUS_CODES),
            allowed_methods=["GET"],
            raise_on_status=False
        )
        adapter = HTTPAdapter(max_retries=retries)
        session.mount('http://', adapter)
        session.mount('https://', adapter)
        session.verify = certifi.where()
        return session

    def _get_headers(self) -> dict:
        return {
            "User-Agent": cfg.get_user_agent(),
            "Accept": "*/*",
        }

    def download_file(self, url: str, destination: str,
                      progress_callback: Optional[ProgressCallback] = None) -> int:
        """
        Download *url* into *destination*, following redirects.

        *progress_callback* receives the cumulative byte count each time it
        crosses another ``progress_interval`` bytes. Returns the total number
        of bytes written.

        Raises DownloadError for a non-200 status (the destination is not
        created) or for any I/O failure while streaming (a partial file may
        remain on disk).
        """
        if progress_callback is None:
            progress_callback = log_progress

        file_name = os.path.basename(destination)
        logger.info(f"Try to download \"{file_name}\" from {logger.truncate_url(url)}")

        try:
            response = self.session.get(
                url,
                headers=self._get_headers(),
                stream=True,
                allow_redirects=True,
                timeout=(cfg.CONNECTION_TIMEOUT, cfg.READ_TIMEOUT)
            )
        except RequestException as e:
            logger.error(f"Error downloading file \"{file_name}\": {e}")
            raise DownloadError(f"Failed to download file \"{file_name}\" from {url}: {e}", url=url) from e

        with response:
            if response.status_code != 200:
                logger.warning(f"Failed to download file \"{file_name}\". HTTP status code: {response.status_code}")
                raise DownloadError(
                    f"Failed to download file \"{file_name}\". HTTP status code: {response.status_code}",
                    url=url,
                    status_code=response.status_code
                )

            start = time.time()
            total_bytes = 0
            next_threshold = self.progress_interval
            logger.info(f"Starting download: {file_name}")
            try:
                with open(destination, 'wb') as f:
                    for chunk in response.iter_content(chunk_size=self.chunk_size):
                        if not chunk:
                            continue
                        f.write(chunk)
                        total_bytes += len(chunk)
                        if total_bytes >= next_threshold:
                            progress_callback(total_bytes)
                            next_threshold += self.progress_interval
            except (RequestException, OSError) as e:
                logger.error(f"Error downloading file \"{file_name}\" after {total_bytes} bytes: {e}")
                raise DownloadError(f"Failed to download file \"{file_name}\" from {url}: {e}", url=url) from e

        elapsed_ms = int((time.time() - start) * 1000)
        logger.info(f"Download of \"{file_name}\" completed. Total size: {total_bytes // MIB} MiB in {elapsed_ms}ms")
        return total_bytes


def download_file(url: str, destination: str, progress_callback: Optional[ProgressCallback] = None) -> int:
    return FileDownloader().download_file(url, destination, progress_callback)
