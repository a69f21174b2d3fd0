import os
from typing import Optional, Union
from chromium_remote.logging.logger import logger
from chromium_remote.errors import ResolutionError
from chromium_remote.environment.distributions import ChromiumDistribution
from chromium_remote.environment.resolver import resolve, StatusCallback
from chromium_remote.environment.session import RemoteChromium, SessionFactory, SeleniumSessionFactory
from chromium_remote.options import LaunchOptions


def create_instance(target: Union[ChromiumDistribution, str],
                    options: LaunchOptions = None,
                    overwrite: bool = False,
                    status_callback: Optional[StatusCallback] = None,
                    session_factory: SessionFactory = None,
                    install_root: str = None) -> RemoteChromium:
    """
    Start a remotely controllable Chromium.

    *target* is either a distribution, which is resolved (downloaded when
    missing or when *overwrite* is set) before launch, or the path of a
    Chromium executable that is launched as is. The binary location in
    *options* is always replaced by the resolved executable.
    """
    session_factory = session_factory or SeleniumSessionFactory()
    options = options or LaunchOptions()

    if isinstance(target, ChromiumDistribution):
        executable = resolve(target, overwrite=overwrite, status_callback=status_callback, install_root=install_root)
        if executable is None:
            raise ResolutionError(f"No Chromium executable found for distribution \"{target.id}\".")
    else:
        executable = os.fspath(target)
        if not os.path.exists(executable):
            raise ResolutionError(f"Chromium executable does not exist: {executable}")

    logger.info(f"Launching Chromium executable: {executable}")
    return session_factory.launch(executable, options)
