"""
IcoQuick Configuration Manager
Settings persisted as JSON next to the log file.
Corrupt files are backed up and ignored; state keys survive a reset.
"""

import os
import json
import shutil

from logger import log, get_app_dir, LOG_FILE_NAME


class Config:
    """Application configuration with sensible defaults."""

    APP_NAME = "IcoQuick"
    APP_VERSION = "1.0.0"

    # --- Output Size ---
    DEFAULT_WIDTH = 32
    DEFAULT_HEIGHT = 32
    MIN_DIMENSION = 1
    MAX_DIMENSION = 256
    PRESET_SIZES = [16, 24, 32, 48, 64, 128, 256]

    # --- Processing ---
    BACKGROUND_REMOVAL_DELAY_MS = 1500
    RESAMPLE_FILTER = "lanczos"   # "nearest", "bilinear", "bicubic", "lanczos"

    # --- Dialogs ---
    OPEN_FILE_FILTER = ("Images (*.png *.jpg *.jpeg *.webp);;"
                        "All Images (*.png *.jpg *.jpeg *.webp *.bmp *.gif *.tif *.tiff);;"
                        "All Files (*)")

    # --- Persisted State ---
    LAST_OPEN_DIR = ""
    LAST_SAVE_DIR = ""
    WINDOW_GEOMETRY = ""

    _STATE_KEYS = {"LAST_OPEN_DIR", "LAST_SAVE_DIR", "WINDOW_GEOMETRY"}

    def __init__(self):
        self._config_dir = get_app_dir()
        self._config_file = os.path.join(self._config_dir, "icoquick.json")
        self._load()

    def _get_saveable_keys(self):
        return [k for k in dir(self) if k.isupper() and not k.startswith('_')]

    def _load(self):
        if not os.path.exists(self._config_file):
            return
        try:
            with open(self._config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError:
            backup = self._config_file + ".corrupt"
            log.warning(f"Settings file is corrupt, backing up to {backup}")
            try:
                shutil.copy2(self._config_file, backup)
            except OSError as e:
                log.warning(f"Could not back up settings: {e}")
            return
        except OSError as e:
            log.warning(f"Could not read settings: {e}")
            return

        if not isinstance(data, dict):
            log.warning("Settings file does not hold an object, ignoring it")
            return
        for key, value in data.items():
            if not (hasattr(Config, key) and key.isupper()):
                continue
            default = getattr(Config, key)
            if type(value) is not type(default):
                log.warning(f"Ignoring setting {key}={value!r}: "
                            f"expected {type(default).__name__}")
                continue
            setattr(self, key, value)

    def save(self):
        data = {k: getattr(self, k) for k in self._get_saveable_keys()}
        tmp_path = self._config_file + ".tmp"
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self._config_file)
        except OSError as e:
            log.error(f"Could not save settings: {e}")

    def get_output_directory(self):
        if self.LAST_SAVE_DIR and os.path.isdir(self.LAST_SAVE_DIR):
            return self.LAST_SAVE_DIR
        desktop = os.path.expanduser("~/Desktop")
        if os.path.isdir(desktop):
            return desktop
        return os.path.expanduser("~")

    @property
    def config_file(self):
        return self._config_file

    @property
    def log_file(self):
        return os.path.join(self._config_dir, LOG_FILE_NAME)


# Global config instance
config = Config()
