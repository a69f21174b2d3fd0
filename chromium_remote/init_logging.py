import os
import logging
from absl import flags
from absl import logging as absl_logging
from chromium_remote.logging.logger import logger
from chromium_remote import config as cfg

def configure_logging(verbose: bool = None):
    """Configure logging for the CLI and for library users that want quiet third-party output."""
    if verbose is None:
        verbose = cfg.VERBOSE

    # absl expects parsed flags before its handler is touched
    if not flags.FLAGS.is_parsed():
        flags.FLAGS.mark_as_parsed()

    absl_logging.use_absl_handler()
    absl_logging.set_verbosity(absl_logging.ERROR)
    absl_logging.get_absl_handler().setFormatter(logging.Formatter(''))

    selenium_logger = logging.getLogger('selenium')
    selenium_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    urllib3_logger = logging.getLogger('urllib3')
    urllib3_logger.setLevel(logging.WARNING)

    # Chrome-specific environment variables
    os.environ.setdefault('CHROMIUM_LOG_LEVEL', '3')

    logger.set_verbose(verbose)
