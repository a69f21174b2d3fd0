import os
from typing import Optional
from chromium_remote.logging.logger import logger

APP_BUNDLE_SUFFIX = ".app"


def find_file(directory: str, file_name: str) -> Optional[str]:
    """
    Search *directory* and its subdirectories for an entry named *file_name*.

    Returns the first match in directory-listing order, or None. A macOS
    application bundle (a directory ending in ``.app``) counts as a match too.
    """
    if not directory or not os.path.isdir(directory):
        logger.warning(f"Invalid directory path, nothing to search: {directory}")
        return None
    return _find_in(directory, file_name)


def _find_in(directory: str, file_name: str) -> Optional[str]:
    try:
        entries = os.listdir(directory)
    except OSError as e:
        logger.warning(f"Could not list directory {directory}: {e}")
        return None

    for entry in entries:
        path = os.path.join(directory, entry)
        if os.path.isdir(path):
            if entry.endswith(APP_BUNDLE_SUFFIX) and entry == file_name:
                return path
            found = _find_in(path, file_name)
            if found:
                return found
        elif entry == file_name:
            return path
    return None
