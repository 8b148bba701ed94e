import logging
import sys
import os
from logging.handlers import RotatingFileHandler


def setup_logger(name="pitchdeck"):
    """
    Configure a logger writing to a rotating file and stderr.
    NEVER stdout: the scan driver prints its results there.
    Module loggers under the `pitchdeck.` namespace propagate here.
    """
    log_dir = os.environ.get(
        "PITCHDECK_LOG_DIR", os.path.join(os.path.expanduser("~"), ".pitchdeck", "logs")
    )
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "pitchdeck.log")

    logger = logging.getLogger(name)
    logger.setLevel(os.environ.get("PITCHDECK_LOG_LEVEL", "INFO").upper())

    # Already configured (module re-import or repeated call)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Max 5MB, keep 3 backups
    file_handler = RotatingFileHandler(
        log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    return logger


logger = setup_logger()
