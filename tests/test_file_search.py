"""Tests for recursive executable lookup."""
import os

from chromium_remote.helpers.file_search import find_file


def test_finds_file_at_top_level(tmp_path):
    target = tmp_path / "chrome"
    target.write_bytes(b"x")
    assert find_file(str(tmp_path), "chrome") == str(target)


def test_finds_file_in_nested_directory(tmp_path):
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)
    (nested / "chrome.exe").write_bytes(b"x")
    (tmp_path / "a" / "other.txt").write_bytes(b"y")

    found = find_file(str(tmp_path), "chrome.exe")
    assert found == str(nested / "chrome.exe")


def test_returns_none_when_missing(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "chromium").write_bytes(b"x")
    assert find_file(str(tmp_path), "chrome") is None


def test_nonexistent_directory_returns_none(tmp_path):
    assert find_file(str(tmp_path / "missing"), "chrome") is None


def test_file_instead_of_directory_returns_none(tmp_path):
    path = tmp_path / "file"
    path.write_bytes(b"x")
    assert find_file(str(path), "chrome") is None


def test_directory_with_same_name_is_not_a_match(tmp_path):
    (tmp_path / "chrome").mkdir()
    assert find_file(str(tmp_path), "chrome") is None


def test_app_bundle_directory_is_a_match(tmp_path):
    bundle = tmp_path / "out" / "Chromium.app"
    (bundle / "Contents").mkdir(parents=True)
    assert find_file(str(tmp_path), "Chromium.app") == str(bundle)
    assert os.path.isdir(find_file(str(tmp_path), "Chromium.app"))
