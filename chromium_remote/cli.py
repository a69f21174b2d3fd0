import argparse
import signal
import sys
import threading
from chromium_remote.logging.logger import logger
from chromium_remote.init_logging import configure_logging
from chromium_remote.errors import ChromiumRemoteError
from chromium_remote.environment.distributions import ChromiumDistribution
from chromium_remote.environment.resolver import resolve, get_installed_executable
from chromium_remote.environment.downloader import get_download_strategy
from chromium_remote.launcher import create_instance
from chromium_remote.options import LaunchOptions, with_headless_options
from chromium_remote import config as cfg

_shutdown = threading.Event()


def signal_handler(signum, frame):
    """Handle SIGINT (Ctrl+C) while a session is open."""
    if _shutdown.is_set():
        logger.warning("Force shutdown requested - exiting immediately")
        sys.exit(1)
    logger.warning("Shutdown signal received - closing Chromium...")
    _shutdown.set()


def _progress_strategy(distribution: ChromiumDistribution):
    key = f"download-{distribution.id}"

    def on_progress(total_bytes: int):
        logger.start_progress(key, f"Downloading {distribution.id}")
        logger.update_progress(key, total_bytes)

    strategy = get_download_strategy(distribution, progress_callback=on_progress)
    return strategy, key


def cmd_install(args) -> int:
    distribution = ChromiumDistribution.from_id(args.distribution)
    strategy, key = _progress_strategy(distribution)
    try:
        executable = resolve(distribution, overwrite=args.overwrite, install_root=args.root,
                             strategy=strategy, delete_downloaded_file=not args.keep_archive)
    finally:
        if logger.is_progress_active(key):
            logger.complete_progress(key)
    if executable is None:
        logger.error(f"Download finished but no Chromium executable was found for {distribution.id}")
        return 1
    logger.success(f"Chromium ready at: {executable}")
    print(executable)
    return 0


def cmd_path(args) -> int:
    distribution = ChromiumDistribution.from_id(args.distribution)
    executable = get_installed_executable(distribution, root=args.root)
    if executable is None:
        logger.warning(f"{distribution.id} is not installed")
        return 1
    print(executable)
    return 0


def cmd_launch(args) -> int:
    distribution = ChromiumDistribution.from_id(args.distribution)
    options = with_headless_options() if args.headless else LaunchOptions()
    if args.app:
        options = options.with_disabled_automation_warning().with_app(args.app)

    _shutdown.clear()
    signal.signal(signal.SIGINT, signal_handler)
    with create_instance(distribution, options, overwrite=args.overwrite, install_root=args.root) as session:
        if args.url:
            session.driver.get(args.url)
        version = session.get_version() if args.show_version else None
        if version:
            logger.success(f"Chromium version: {version.full_version}")
        logger.status("Chromium is running. Press Ctrl+C to close it.")
        while not _shutdown.wait(0.5):
            pass
    logger.success("Chromium closed")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chromium-remote",
                                     description="Download, install and launch remotely controllable Chromium builds.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show info-level log messages")
    parser.add_argument("--distribution", default=ChromiumDistribution.LATEST_TRUNK_BUILD.id,
                        choices=[d.id for d in ChromiumDistribution], help="Chromium distribution to use")
    parser.add_argument("--root", default=None,
                        help=f"Installation root (default: ~/{cfg.DEFAULT_USER_HOME_DOWNLOAD_DIRECTORY})")
    sub = parser.add_subparsers(dest="command", required=True)

    install = sub.add_parser("install", help="Install the distribution if it is missing")
    install.add_argument("--overwrite", action="store_true", help="Delete and reinstall an existing installation")
    install.add_argument("--keep-archive", action="store_true", help="Keep the downloaded ZIP file")
    install.set_defaults(func=cmd_install)

    path = sub.add_parser("path", help="Print the installed executable path")
    path.set_defaults(func=cmd_path)

    launch = sub.add_parser("launch", help="Install if needed and start a browser session")
    launch.add_argument("--overwrite", action="store_true")
    launch.add_argument("--headless", action="store_true")
    launch.add_argument("--app", default=None, help="Open URL in app mode")
    launch.add_argument("--url", default=None, help="Navigate to URL after start")
    launch.add_argument("--show-version", action="store_true", help="Read the version from chrome://version")
    launch.set_defaults(func=cmd_launch)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    cfg.VERBOSE = args.verbose
    configure_logging(args.verbose)
    try:
        return args.func(args)
    except ChromiumRemoteError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
