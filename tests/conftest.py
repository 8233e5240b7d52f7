import io
import os
import tempfile

import pytest

# Keep the log and settings files out of the real profile. Must run before
# logger/config are first imported.
_profile_dir = tempfile.mkdtemp(prefix="icoquick-tests-")
os.environ["XDG_CONFIG_HOME"] = _profile_dir
os.environ["APPDATA"] = _profile_dir

from PIL import Image  # noqa: E402


@pytest.fixture
def image_file(tmp_path):
    """Factory writing a solid-color image and returning its path."""
    def make(name="source.png", size=(40, 20), mode="RGB", color=(200, 80, 40)):
        path = tmp_path / name
        Image.new(mode, size, color).save(path)
        return str(path)
    return make


@pytest.fixture
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGBA", (16, 16), (0, 128, 255, 255)).save(buf, format="PNG")
    return buf.getvalue()
