"""
IcoQuick Shared Utilities
Small helpers used by the session and the window.
"""

import os
import mimetypes


def clamp(value, lo, hi):
    """Clamp a value between lo and hi."""
    return max(lo, min(hi, value))


def guess_mime_type(path):
    """MIME type guessed from the file name, or "" when unknown."""
    mime, _ = mimetypes.guess_type(os.path.basename(path))
    return mime or ""


def is_image_file(path):
    return guess_mime_type(path).startswith("image/")


def base_name(filename):
    """File name without its last extension, or "icon" if nothing is left.

    "photo.final.png" -> "photo.final", "README" -> "icon", ".png" -> "icon"
    """
    name = os.path.basename(filename or "")
    parts = name.split(".")
    return ".".join(parts[:-1]) or "icon"


def download_filename(original_name, width, height):
    """Suggested file name for the saved icon, e.g. "logo-32x32.ico"."""
    return f"{base_name(original_name)}-{width}x{height}.ico"
