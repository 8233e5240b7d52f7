"""
IcoQuick Errors
Failures the conversion flow can hit. The UI shows one generic message per
kind and returns to the start screen on reset.
"""

INVALID_TYPE_MESSAGE = "Invalid file type. Please upload an image."
GENERATE_FAILED_MESSAGE = "Failed to generate ICO file. Please try again."


class IcoQuickError(Exception):
    """Base class for conversion errors."""

    user_message = GENERATE_FAILED_MESSAGE


class InvalidInputTypeError(IcoQuickError):
    """The chosen file is not an image."""

    user_message = INVALID_TYPE_MESSAGE


class EncodingFailureError(IcoQuickError):
    """Loading, rendering, PNG export or writing the icon failed."""


class InvalidTransitionError(IcoQuickError):
    """A session action was requested in a state that does not allow it."""
