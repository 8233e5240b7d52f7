"""
IcoQuick Logging

Every conversion step (file accepted or rejected, render size, bytes saved,
failures) goes to `icoquick.log` next to the settings file. When running
from a source checkout the same records also go to stderr.

Usage:  from logger import log
"""

import os
import sys
import logging
from logging.handlers import RotatingFileHandler

APP_DIR_NAME = "IcoQuick"
LOG_FILE_NAME = "icoquick.log"
LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUPS = 3


def get_app_dir():
    """%APPDATA%/IcoQuick on Windows, $XDG_CONFIG_HOME/IcoQuick elsewhere."""
    if os.name == 'nt':
        base = os.environ.get('APPDATA', os.path.expanduser('~'))
    else:
        base = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
    app_dir = os.path.join(base, APP_DIR_NAME)
    os.makedirs(app_dir, exist_ok=True)
    return app_dir


def _file_handler():
    handler = RotatingFileHandler(
        os.path.join(get_app_dir(), LOG_FILE_NAME),
        maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding='utf-8'
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)-7s] %(module)s.%(funcName)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    return handler


def setup_logger():
    """Return the `icoquick` logger, attaching handlers on first call only."""
    logger = logging.getLogger("icoquick")
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    try:
        logger.addHandler(_file_handler())
    except OSError:
        # Unwritable profile: console only
        pass

    # Frozen builds have no console
    if not getattr(sys, 'frozen', False):
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(logging.INFO)
        console.setFormatter(logging.Formatter("[%(levelname)-7s] %(funcName)s: %(message)s"))
        logger.addHandler(console)

    return logger


log = setup_logger()
