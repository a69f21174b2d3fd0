"""Tests for installation resolution."""
import os
import threading
import time

import pytest

from chromium_remote.errors import DownloadError, ExtractionError, ResolutionError
from chromium_remote.environment.distributions import ChromiumDistribution
from chromium_remote.environment.os_detection import OsArchitecture
from chromium_remote.environment.resolver import (
    get_distribution_installation_directory, get_installed_executable,
    is_default_installation_present, resolve,
)

from conftest import make_installation

DISTRIBUTION = ChromiumDistribution.LATEST_TRUNK_BUILD
LINUX = OsArchitecture.LINUX_X64


class StubStrategy:
    """Counts download attempts and installs a fake executable."""

    def __init__(self, executable="chrome", error=None):
        self.executable = executable
        self.error = error
        self.calls = 0

    def download(self, distribution, download_root, architecture, properties=None, delete_downloaded_file=True):
        self.calls += 1
        if self.error is not None:
            raise self.error
        directory = os.path.join(download_root, distribution.id)
        os.makedirs(directory, exist_ok=True)
        if self.executable:
            make_installation(download_root, distribution.id, self.executable)
        return directory


def test_existing_installation_is_reused(tmp_path):
    existing = make_installation(tmp_path)
    strategy = StubStrategy()

    result = resolve(DISTRIBUTION, install_root=str(tmp_path), architecture=LINUX, strategy=strategy,
                     status_callback=lambda s: None)

    assert result == existing
    assert strategy.calls == 0


def test_missing_installation_is_downloaded(tmp_path):
    strategy = StubStrategy()

    result = resolve(DISTRIBUTION, install_root=str(tmp_path), architecture=LINUX, strategy=strategy,
                     status_callback=lambda s: None)

    assert strategy.calls == 1
    assert result is not None and os.path.basename(result) == "chrome"


def test_overwrite_deletes_and_downloads_once(tmp_path):
    make_installation(tmp_path)
    marker = tmp_path / DISTRIBUTION.id / "stale-marker"
    marker.write_bytes(b"old")
    strategy = StubStrategy()

    result = resolve(DISTRIBUTION, overwrite=True, install_root=str(tmp_path), architecture=LINUX,
                     strategy=strategy, status_callback=lambda s: None)

    assert strategy.calls == 1
    assert not marker.exists()
    assert result is not None


def test_overwrite_without_prior_installation_downloads_once(tmp_path):
    strategy = StubStrategy()

    resolve(DISTRIBUTION, overwrite=True, install_root=str(tmp_path), architecture=LINUX,
            strategy=strategy, status_callback=lambda s: None)

    assert strategy.calls == 1


def test_second_resolution_downloads_nothing(tmp_path):
    strategy = StubStrategy()
    kwargs = dict(install_root=str(tmp_path), architecture=LINUX, strategy=strategy, status_callback=lambda s: None)

    first = resolve(DISTRIBUTION, **kwargs)
    second = resolve(DISTRIBUTION, **kwargs)

    assert first == second
    assert strategy.calls == 1


def test_directory_without_executable_triggers_download(tmp_path):
    (tmp_path / DISTRIBUTION.id / "leftover").mkdir(parents=True)
    strategy = StubStrategy()

    resolve(DISTRIBUTION, install_root=str(tmp_path), architecture=LINUX, strategy=strategy,
            status_callback=lambda s: None)

    assert strategy.calls == 1


def test_missing_executable_after_download_returns_none(tmp_path):
    messages = []
    strategy = StubStrategy(executable=None)

    result = resolve(DISTRIBUTION, install_root=str(tmp_path), architecture=LINUX, strategy=strategy,
                     status_callback=messages.append)

    assert result is None
    assert any("Unable to find Chromium installation" in m for m in messages)


@pytest.mark.parametrize("error", [
    DownloadError("boom", url="https://example.com", status_code=500),
    ExtractionError("broken archive"),
])
def test_download_failures_become_resolution_errors(tmp_path, error):
    with pytest.raises(ResolutionError) as exc_info:
        resolve(DISTRIBUTION, install_root=str(tmp_path), architecture=LINUX,
                strategy=StubStrategy(error=error), status_callback=lambda s: None)
    assert exc_info.value.__cause__ is error


def test_unsupported_platform_fails_with_real_strategy(tmp_path):
    with pytest.raises(ResolutionError):
        resolve(DISTRIBUTION, install_root=str(tmp_path), architecture=OsArchitecture.UNSUPPORTED,
                status_callback=lambda s: None)


def test_status_messages_cover_each_step(tmp_path):
    messages = []

    resolve(DISTRIBUTION, overwrite=True, install_root=str(tmp_path), architecture=LINUX,
            strategy=StubStrategy(), status_callback=messages.append)

    assert messages[0].startswith("Overwrite is enabled")
    assert messages[1].startswith("Deletion attempt was completed")
    assert any("Try to download Chromium" in m for m in messages)
    assert any("download was completed" in m for m in messages)
    assert messages[-1].startswith("The Chromium installation was found")


def test_windows_executable_name_is_used(tmp_path):
    strategy = StubStrategy(executable="chrome.exe")

    result = resolve(DISTRIBUTION, install_root=str(tmp_path), architecture=OsArchitecture.WINDOWS_X64,
                     strategy=strategy, status_callback=lambda s: None)

    assert result.endswith("chrome.exe")


def test_installation_helpers(tmp_path):
    assert get_distribution_installation_directory(DISTRIBUTION, str(tmp_path)) == os.path.join(
        str(tmp_path), "latest-trunk-build")
    assert not is_default_installation_present(DISTRIBUTION, LINUX, root=str(tmp_path))
    assert get_installed_executable(DISTRIBUTION, LINUX, root=str(tmp_path)) is None

    path = make_installation(tmp_path)

    assert is_default_installation_present(DISTRIBUTION, LINUX, root=str(tmp_path))
    assert get_installed_executable(DISTRIBUTION, LINUX, root=str(tmp_path)) == path
    assert not is_default_installation_present(DISTRIBUTION, OsArchitecture.UNSUPPORTED, root=str(tmp_path))


def test_concurrent_resolutions_download_once(tmp_path):
    class SlowStrategy(StubStrategy):
        def download(self, *args, **kwargs):
            time.sleep(0.2)
            return super().download(*args, **kwargs)

    strategy = SlowStrategy()
    results = []

    def run():
        results.append(resolve(DISTRIBUTION, install_root=str(tmp_path), architecture=LINUX,
                               strategy=strategy, status_callback=lambda s: None))

    threads = [threading.Thread(target=run) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert strategy.calls == 1
    assert len(results) == 2
    assert results[0] is not None and results[0] == results[1]
