"""
IcoQuick Converter
Loads a source image with Pillow, stretches it to the requested icon size,
exports PNG bytes and hands them to the ICO encoder.

Requires: Pillow
"""

import io

from PIL import Image

from errors import EncodingFailureError, InvalidInputTypeError
from ico_encoder import encode
from logger import log
from utils import is_image_file, guess_mime_type

RESAMPLE_FILTERS = {
    "nearest": Image.NEAREST,
    "bilinear": Image.BILINEAR,
    "bicubic": Image.BICUBIC,
    "lanczos": Image.LANCZOS,
}


def check_image_file(path):
    """Raise InvalidInputTypeError unless `path` names an image file."""
    if not is_image_file(path):
        mime = guess_mime_type(path) or "unknown"
        log.warning(f"Rejected {path}: type {mime} is not an image")
        raise InvalidInputTypeError(f"Not an image file: {path}")


def load_image(path):
    """Open and fully decode an image file."""
    try:
        img = Image.open(path)
        img.load()
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        log.error(f"Could not load {path}: {e}")
        raise EncodingFailureError(f"Could not load image: {e}") from e
    log.info(f"Loaded {path}: {img.size[0]}x{img.size[1]} {img.mode}")
    return img


def remove_background(img):
    """Background removal placeholder: the image passes through unchanged."""
    return img


def render_png(img, width, height, resample="lanczos"):
    """Draw `img` stretched to width x height and return it as PNG bytes."""
    resample_filter = RESAMPLE_FILTERS.get(resample)
    if resample_filter is None:
        log.warning(f"Unknown resample filter {resample!r}, using lanczos")
        resample_filter = Image.LANCZOS

    try:
        resized = img.convert("RGBA").resize((width, height), resample_filter)
        buf = io.BytesIO()
        resized.save(buf, format="PNG")
    except (OSError, ValueError) as e:
        log.error(f"Render to {width}x{height} failed: {e}")
        raise EncodingFailureError(f"Could not render image: {e}") from e

    png_bytes = buf.getvalue()
    if not png_bytes:
        raise EncodingFailureError("Could not create PNG data")
    log.debug(f"Rendered {width}x{height} PNG ({len(png_bytes):,} bytes)")
    return png_bytes


def convert_image(img, width, height, resample="lanczos"):
    """Render an already loaded image and wrap it as ICO bytes."""
    png_bytes = render_png(img, width, height, resample)
    ico_bytes = encode(png_bytes, width, height)
    log.info(f"Encoded {width}x{height} icon ({len(ico_bytes):,} bytes)")
    return ico_bytes


def convert_file(path, width, height, resample="lanczos",
                 remover=remove_background):
    """Full pipeline: type check, load, background step, render, encode."""
    check_image_file(path)
    img = remover(load_image(path))
    return convert_image(img, width, height, resample)
