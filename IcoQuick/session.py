"""
IcoQuick Converter Session
State machine behind the window: Idle -> Processing -> Ready, with Error
reachable from anywhere and reset returning to Idle.

Kept free of Qt so the flow can be driven and tested headless.
"""

import os
from enum import Enum

from config import config
from converter import check_image_file, convert_file, remove_background
from errors import (
    IcoQuickError, EncodingFailureError, InvalidInputTypeError,
    InvalidTransitionError, GENERATE_FAILED_MESSAGE
)
from ico_encoder import save_ico_bytes
from logger import log
from utils import clamp, download_filename

ICON_MIN = 1
ICON_MAX = 256


def _as_int(value, fallback):
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


class ProcessState(Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    READY = "ready"
    ERROR = "error"


class ConverterSession:
    """One image conversion from file pick to saved icon."""

    def __init__(self, default_width=None, default_height=None,
                 min_dimension=None, max_dimension=None):
        # An icon directory entry holds 1..256, whatever the settings file says
        self.min_dimension = clamp(_as_int(min_dimension or config.MIN_DIMENSION, ICON_MIN),
                                   ICON_MIN, ICON_MAX)
        self.max_dimension = clamp(_as_int(max_dimension or config.MAX_DIMENSION, ICON_MAX),
                                   self.min_dimension, ICON_MAX)
        self.default_width = self._coerce_dimension(default_width or config.DEFAULT_WIDTH)
        self.default_height = self._coerce_dimension(default_height or config.DEFAULT_HEIGHT)

        self.state = ProcessState.IDLE
        self.source_path = None
        self.error = None
        self.width = self.default_width
        self.height = self.default_height
        # Bumped on every reset so a pending processing step can tell it is stale
        self._generation = 0

    def __repr__(self):
        return (f"<ConverterSession {self.state.value} "
                f"{self.width}x{self.height} source={self.source_path!r}>")

    @property
    def size(self):
        return (self.width, self.height)

    def _require(self, *states):
        if self.state not in states:
            allowed = ", ".join(s.value for s in states)
            raise InvalidTransitionError(
                f"Not allowed in state {self.state.value} (needs {allowed})")

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------

    def load_file(self, path):
        """Accept a picked or dropped file.

        Returns a token for finish_processing(), or None if the file was
        rejected and the session moved to ERROR.
        """
        self._require(ProcessState.IDLE, ProcessState.READY, ProcessState.ERROR)
        if self.state is not ProcessState.IDLE:
            self.reset()

        try:
            check_image_file(path)
        except InvalidInputTypeError as e:
            self.fail(e.user_message)
            return None

        self.source_path = path
        self.error = None
        self.state = ProcessState.PROCESSING
        log.info(f"Processing {path}")
        return self._generation

    def finish_processing(self, token):
        """Complete the processing step started by load_file()."""
        if token != self._generation or self.state is not ProcessState.PROCESSING:
            log.debug(f"Ignoring stale processing result (token {token})")
            return False
        self.state = ProcessState.READY
        log.info(f"Ready: {os.path.basename(self.source_path)}")
        return True

    def fail(self, message=GENERATE_FAILED_MESSAGE):
        self.error = message
        self.state = ProcessState.ERROR
        log.warning(f"Session error: {message}")

    def reset(self):
        self.state = ProcessState.IDLE
        self.source_path = None
        self.error = None
        self.width = self.default_width
        self.height = self.default_height
        self._generation += 1

    # -------------------------------------------------------------------
    # Size
    # -------------------------------------------------------------------

    def _coerce_dimension(self, value):
        value = _as_int(value, self.min_dimension)
        return clamp(value, self.min_dimension, self.max_dimension)

    def set_width(self, value):
        self.width = self._coerce_dimension(value)

    def set_height(self, value):
        self.height = self._coerce_dimension(value)

    def apply_preset(self, size):
        self.set_width(size)
        self.set_height(size)

    # -------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------

    def download_name(self):
        return download_filename(self.source_path, self.width, self.height)

    def build_icon(self, remover=remove_background):
        """Render the source at the current size and return ICO bytes."""
        self._require(ProcessState.READY)
        try:
            return convert_file(self.source_path, self.width, self.height,
                                resample=config.RESAMPLE_FILTER, remover=remover)
        except IcoQuickError:
            log.error(f"Icon generation failed for {self.source_path}", exc_info=True)
            self.fail(GENERATE_FAILED_MESSAGE)
            raise

    def save_icon(self, path, remover=remove_background):
        """Build the icon and write it to `path`. Returns bytes written."""
        ico_bytes = self.build_icon(remover)
        try:
            save_ico_bytes(path, ico_bytes)
        except OSError as e:
            log.error(f"Could not write {path}: {e}")
            self.fail(GENERATE_FAILED_MESSAGE)
            raise EncodingFailureError(f"Could not write icon: {e}") from e
        log.info(f"Icon saved: {path} ({len(ico_bytes):,} bytes)")
        return len(ico_bytes)
