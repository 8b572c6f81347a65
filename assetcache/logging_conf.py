import logging
import sys


def setup_logging(log_level: int | str = logging.INFO) -> None:
    """
    Configures the root logger for applications embedding assetcache.

    Args:
        log_level: A logging level or level name (e.g. ``settings.log_level``).
    """
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers to prevent duplication
    if root_logger.handlers:
        root_logger.handlers = []

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d - %(message)s"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Remote lookups go through requests; keep its connection chatter quiet.
    logging.getLogger("urllib3").setLevel(logging.WARNING)
