import io
import json
import struct

import pytest
from PIL import Image

from errors import (
    EncodingFailureError, InvalidTransitionError,
    INVALID_TYPE_MESSAGE, GENERATE_FAILED_MESSAGE
)
from session import ConverterSession, ProcessState


@pytest.fixture
def session():
    return ConverterSession()


@pytest.fixture
def ready_session(session, image_file):
    token = session.load_file(image_file(name="logo.png", size=(64, 64)))
    assert session.finish_processing(token)
    return session


def test_starts_idle_with_default_size(session):
    assert session.state is ProcessState.IDLE
    assert session.size == (32, 32)
    assert session.source_path is None
    assert session.error is None


def test_happy_path(session, image_file):
    path = image_file()
    token = session.load_file(path)

    assert token is not None
    assert session.state is ProcessState.PROCESSING
    assert session.source_path == path

    assert session.finish_processing(token) is True
    assert session.state is ProcessState.READY


def test_non_image_moves_to_error(session, tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hi")

    assert session.load_file(str(path)) is None
    assert session.state is ProcessState.ERROR
    assert session.error == INVALID_TYPE_MESSAGE
    assert session.source_path is None


def test_load_while_processing_is_rejected(session, image_file):
    session.load_file(image_file())
    with pytest.raises(InvalidTransitionError):
        session.load_file(image_file(name="other.png"))


def test_load_from_error_resets_first(session, tmp_path, image_file):
    bad = tmp_path / "notes.txt"
    bad.write_text("hi")
    session.load_file(str(bad))

    token = session.load_file(image_file())
    assert session.state is ProcessState.PROCESSING
    assert session.error is None
    assert session.finish_processing(token)


def test_stale_completion_after_reset_is_ignored(session, image_file):
    token = session.load_file(image_file())
    session.reset()

    assert session.finish_processing(token) is False
    assert session.state is ProcessState.IDLE


def test_old_token_ignored_after_reload(session, image_file):
    old = session.load_file(image_file())
    session.reset()
    new = session.load_file(image_file(name="second.png"))

    assert session.finish_processing(old) is False
    assert session.state is ProcessState.PROCESSING
    assert session.finish_processing(new) is True


def test_reset_restores_defaults(ready_session):
    ready_session.apply_preset(128)
    ready_session.reset()
    assert ready_session.state is ProcessState.IDLE
    assert ready_session.size == (32, 32)
    assert ready_session.source_path is None


def test_fail_from_any_state(session):
    session.fail()
    assert session.state is ProcessState.ERROR
    assert session.error == GENERATE_FAILED_MESSAGE


@pytest.mark.parametrize("value, expected", [
    (48, 48),
    (0, 1),
    (-5, 1),
    (256, 256),
    (1000, 256),
    ("64", 64),
    ("", 1),
    (None, 1),
])
def test_dimension_clamping(session, value, expected):
    session.set_width(value)
    session.set_height(value)
    assert session.size == (expected, expected)


def test_apply_preset(session):
    session.set_width(20)
    session.apply_preset(16)
    assert session.size == (16, 16)


def test_custom_bounds():
    s = ConverterSession(default_width=16, default_height=24, max_dimension=64)
    assert s.size == (16, 24)
    s.set_width(100)
    assert s.width == 64


def test_download_name(ready_session):
    ready_session.set_width(48)
    ready_session.set_height(24)
    assert ready_session.download_name() == "logo-48x24.ico"


def test_build_icon_requires_ready(session):
    with pytest.raises(InvalidTransitionError):
        session.build_icon()


def test_build_icon(ready_session):
    ready_session.apply_preset(48)
    ico = ready_session.build_icon()

    assert ico[:6] == b"\x00\x00\x01\x00\x01\x00"
    assert ico[6] == 48
    with Image.open(io.BytesIO(ico)) as img:
        assert img.size == (48, 48)
    assert ready_session.state is ProcessState.READY


def test_build_failure_moves_to_error(ready_session):
    def broken(img):
        raise EncodingFailureError("surface unavailable")

    with pytest.raises(EncodingFailureError):
        ready_session.build_icon(remover=broken)
    assert ready_session.state is ProcessState.ERROR
    assert ready_session.error == GENERATE_FAILED_MESSAGE


def test_save_icon(ready_session, tmp_path):
    path = tmp_path / ready_session.download_name()
    written = ready_session.save_icon(str(path))

    data = path.read_bytes()
    assert written == len(data)
    assert struct.unpack_from("<I", data, 18)[0] == 22
    assert len(data) == 22 + struct.unpack_from("<I", data, 14)[0]


def test_save_icon_write_failure(ready_session, tmp_path):
    target = tmp_path / "taken"
    target.mkdir()
    with pytest.raises(EncodingFailureError):
        ready_session.save_icon(str(target))
    assert ready_session.state is ProcessState.ERROR


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    """Write a settings file and point the session module at a Config read from it."""
    import session as session_module
    from config import Config

    def write(values):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        monkeypatch.setenv("APPDATA", str(tmp_path))
        cfg = Config()
        with open(cfg.config_file, "w", encoding="utf-8") as f:
            json.dump(values, f)
        cfg = Config()
        monkeypatch.setattr(session_module, "config", cfg)
        return cfg
    return write


def test_bad_settings_cannot_widen_size_range(settings_file):
    settings_file({"MAX_DIMENSION": 1000, "MIN_DIMENSION": -4, "DEFAULT_WIDTH": "big"})
    s = ConverterSession()

    assert (s.min_dimension, s.max_dimension) == (1, 256)
    assert s.size == (32, 32)
    s.set_width(1000)
    s.set_height(0)
    assert s.size == (256, 1)


def test_out_of_range_defaults_are_clamped(settings_file):
    cfg = settings_file({"DEFAULT_WIDTH": 999, "DEFAULT_HEIGHT": 0})
    assert cfg.DEFAULT_WIDTH == 999
    s = ConverterSession()

    assert s.size == (256, 1)
    s.apply_preset(64)
    s.reset()
    assert s.size == (256, 1)


def test_unusable_bounds_fall_back(monkeypatch):
    import session as session_module
    monkeypatch.setattr(session_module.config, "MAX_DIMENSION", "huge")
    monkeypatch.setattr(session_module.config, "DEFAULT_WIDTH", "big")

    s = ConverterSession()
    assert s.max_dimension == 256
    assert s.width == 1
    s.set_width(5000)
    assert s.width == 256
