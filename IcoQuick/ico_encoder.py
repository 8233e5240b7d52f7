"""
IcoQuick ICO Encoder
Packs a single PNG image into a minimal Windows .ico container.

Layout: 6-byte header, one 16-byte directory entry, then the PNG verbatim.
The PNG is treated as an opaque payload and is never inspected.
"""

import os
import struct

HEADER_SIZE = 6
DIR_ENTRY_SIZE = 16
PAYLOAD_OFFSET = HEADER_SIZE + DIR_ENTRY_SIZE
ICO_MIME_TYPE = "image/x-icon"

_HEADER = struct.Struct("<HHH")
_DIR_ENTRY = struct.Struct("<BBBBHHII")


def _dimension_byte(value):
    """Directory width/height byte. 0 stands for 256."""
    if value >= 256:
        return 0
    return value & 0xFF


def encode(png_bytes, width, height):
    """Wrap `png_bytes` in a single-entry ICO file and return the bytes.

    Never raises for well-typed input: the payload is not validated and
    width/height are not checked against it. Dimensions of 256 or more are
    stored as 0.
    """
    payload = bytes(png_bytes)

    header = _HEADER.pack(0, 1, 1)
    entry = _DIR_ENTRY.pack(
        _dimension_byte(width), _dimension_byte(height),
        0, 0,   # palette colors, reserved
        1, 32,  # color planes, bits per pixel
        len(payload), PAYLOAD_OFFSET
    )
    return header + entry + payload


def save_ico_bytes(path, data):
    """Write already encoded icon bytes, replacing any existing file atomically."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    tmp_path = path + ".tmp"
    with open(tmp_path, "wb") as f:
        f.write(data)
    os.replace(tmp_path, path)
    return path

