"""Error taxonomy for the installation pipeline and remote sessions."""
from typing import Optional


class ChromiumRemoteError(Exception):
    """Base class for every error raised by chromium_remote."""


class DownloadError(ChromiumRemoteError):
    """An HTTP download failed (non-200 status or an I/O error while streaming)."""

    def __init__(self, message: str, url: str = "", status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class ExtractionError(ChromiumRemoteError):
    """A ZIP archive could not be unpacked."""


class ResolutionError(ChromiumRemoteError):
    """A distribution could not be installed (unsupported platform, failed download or extraction)."""


class UnimplementedDistributionError(ResolutionError):
    """No download strategy is registered for the requested distribution."""


class ChecksumMismatchError(ChromiumRemoteError):
    """A downloaded extension's SHA-256 digest differs from the expected one."""

    def __init__(self, file_path: str, expected: str, actual: str):
        self.file_path = file_path
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid SHA-256 checksum for '{file_path}'. Expected: {expected} Actual: {actual}"
        )
