"""Package logging.

Every ``personapi.*`` logger hands its records to the ``personapi`` logger,
which owns one file handler and one stderr handler. Those handlers are
attached the first time :func:`get_logger` is called and replaced whenever
:func:`configure` runs again.
"""

import logging
import os
import sys
from pathlib import Path

from personapi.logging.config import load_log_level

PACKAGE_LOGGER = "personapi"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def log_file_path():
    log_dir = os.environ.get("PERSONAPI_LOG_DIR", "").strip()
    base = Path(log_dir).expanduser() if log_dir else Path.home() / ".personapi" / "logs"
    return base / "personapi.log"


def configure(level=None, console=True):
    """(Re)attach the package handlers and set the package level.

    ``level`` defaults to the persisted level, then to ``INFO``.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    path = log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    handlers = [logging.FileHandler(path, encoding="utf-8")]
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    if level is None:
        level = load_log_level()
    package_logger.setLevel(logging.INFO if level is None else level)
    package_logger.propagate = False
    return package_logger


def get_logger(name=PACKAGE_LOGGER):
    if not logging.getLogger(PACKAGE_LOGGER).handlers:
        configure()
    return logging.getLogger(name)


def configured_level():
    return logging.getLevelName(logging.getLogger(PACKAGE_LOGGER).getEffectiveLevel())
