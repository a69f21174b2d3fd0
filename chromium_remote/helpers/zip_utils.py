import os
import shutil
import stat
import time
import zipfile
from chromium_remote.logging.logger import logger
from chromium_remote.errors import ExtractionError
from chromium_remote import config as cfg


def _target_path(destination_dir: str, entry_name: str) -> str:
    root = os.path.realpath(destination_dir)
    target = os.path.realpath(os.path.join(root, entry_name))
    try:
        escapes = os.path.commonpath([root, target]) != root
    except ValueError:
        # paths on different drives
        escapes = True
    if escapes:
        raise ExtractionError(f"Archive entry '{entry_name}' would be extracted outside of '{destination_dir}'")
    return target


def _restore_mode(info: zipfile.ZipInfo, path: str):
    # Upper 16 bits of external_attr hold the Unix mode when the archive was built on Unix
    mode = (info.external_attr >> 16) & 0o777
    if mode:
        os.chmod(path, mode | stat.S_IRUSR | stat.S_IWUSR)


def extract_zip(zip_file: str, destination_dir: str) -> None:
    """
    Extract *zip_file* entry by entry into *destination_dir*.

    Directories are recreated, files are copied with a small buffer and keep
    their Unix permission bits. Entries that resolve outside of
    *destination_dir* abort the extraction.
    """
    logger.info(f"Try to extract ZIP file \"{zip_file}\" to \"{destination_dir}\".")
    start = time.time()
    try:
        os.makedirs(destination_dir, exist_ok=True)
        with zipfile.ZipFile(zip_file, 'r') as archive:
            for info in archive.infolist():
                target = _target_path(destination_dir, info.filename)
                if info.is_dir():
                    os.makedirs(target, exist_ok=True)
                    continue

                parent = os.path.dirname(target)
                if parent:
                    os.makedirs(parent, exist_ok=True)
                with archive.open(info) as source, open(target, 'wb') as out:
                    shutil.copyfileobj(source, out, cfg.ZIP_BUFFER_SIZE)
                _restore_mode(info, target)
    except ExtractionError:
        raise
    except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
        logger.error(f"Failed to extract \"{zip_file}\": {e}")
        raise ExtractionError(f"Failed to extract ZIP file \"{zip_file}\" to \"{destination_dir}\": {e}") from e

    elapsed_ms = int((time.time() - start) * 1000)
    logger.info(f"Extracted ZIP file in {elapsed_ms}ms.")
