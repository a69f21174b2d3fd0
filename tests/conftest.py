"""Shared fakes for tests: no network and no real browser."""
import os
import zipfile

import pytest
import requests

from chromium_remote import config as cfg

OVERRIDE_KEYS = (
    cfg.LATEST_TRUNK_URL_WINDOWS_X86_KEY,
    cfg.LATEST_TRUNK_URL_WINDOWS_X64_KEY,
    cfg.LATEST_TRUNK_URL_LINUX_X86_KEY,
    cfg.LATEST_TRUNK_URL_LINUX_X64_KEY,
    cfg.UBLOCK_ORIGIN_LITE_URL_KEY,
)


@pytest.fixture(autouse=True)
def clean_overrides(monkeypatch):
    for key in OVERRIDE_KEYS:
        monkeypatch.delenv(key, raising=False)


class FakeResponse:
    def __init__(self, status_code=200, body=b"", fail_after=None):
        self.status_code = status_code
        self.body = body
        self.fail_after = fail_after
        self.closed = False

    def iter_content(self, chunk_size=1):
        for offset in range(0, len(self.body), chunk_size):
            if self.fail_after is not None and offset >= self.fail_after:
                raise requests.exceptions.ChunkedEncodingError("connection reset")
            yield self.body[offset:offset + chunk_size]

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        return self.response


class WritingFileDownloader:
    """FileDownloader stand-in that writes fixed bytes instead of fetching."""

    def __init__(self, payload=b"data"):
        self.payload = payload
        self.calls = []

    def download_file(self, url, destination, progress_callback=None):
        self.calls.append((url, destination))
        with open(destination, "wb") as f:
            f.write(self.payload)
        return len(self.payload)


def build_zip(path, entries):
    """Write a ZIP at *path*; *entries* maps names to bytes (None for directories)."""
    with zipfile.ZipFile(path, "w") as archive:
        for name, data in entries.items():
            if data is None:
                archive.writestr(name if name.endswith("/") else name + "/", b"")
            else:
                archive.writestr(name, data)
    return path


def make_installation(root, distribution_id="latest-trunk-build", executable="chrome"):
    directory = os.path.join(str(root), distribution_id, "chrome-linux")
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, executable)
    with open(path, "wb") as f:
        f.write(b"#!/bin/sh\n")
    return path
