import logging
import sys

from gw_dashboard.config.settings import LOG_LEVEL


def setup_logger(name: str = "gw_dashboard", level=None):
    """
    Sets up a logger that outputs to Console (stdout).
    Module loggers under the package propagate here, so one call at the
    entry point (CLI or API) is enough.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level or LOG_LEVEL)

    # Avoid duplicate logs if setup is called multiple times
    if logger.hasHandlers():
        return logger

    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    return logger
