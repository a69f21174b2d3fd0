"""Tests for the command line entry point."""
from chromium_remote import cli
from chromium_remote.environment.os_detection import OsArchitecture

from conftest import make_installation


def test_path_prints_installed_executable(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("chromium_remote.environment.resolver.detect_os_architecture",
                        lambda: OsArchitecture.LINUX_X64)
    executable = make_installation(tmp_path)

    assert cli.main(["--root", str(tmp_path), "path"]) == 0
    assert capsys.readouterr().out.strip() == executable


def test_path_fails_when_not_installed(tmp_path, capsys):
    assert cli.main(["--root", str(tmp_path), "path"]) == 1
    assert capsys.readouterr().out == ""


def test_install_reports_resolution_errors(tmp_path, monkeypatch):
    monkeypatch.setattr("chromium_remote.environment.resolver.detect_os_architecture",
                        lambda: OsArchitecture.UNSUPPORTED)

    assert cli.main(["--root", str(tmp_path), "install"]) == 1


def test_launch_waits_again_after_earlier_shutdown(tmp_path, monkeypatch):
    from chromium_remote.environment.session import RemoteChromium

    seen = []

    def fake_create_instance(distribution, options, overwrite=False, install_root=None):
        seen.append(cli._shutdown.is_set())
        cli._shutdown.set()
        return RemoteChromium(None)

    monkeypatch.setattr(cli, "create_instance", fake_create_instance)
    monkeypatch.setattr("chromium_remote.cli.signal.signal", lambda *args: None)
    cli._shutdown.set()

    assert cli.main(["--root", str(tmp_path), "launch"]) == 0
    assert seen == [False]
