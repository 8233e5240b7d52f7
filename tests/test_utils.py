import pytest

from utils import clamp, base_name, download_filename, is_image_file, guess_mime_type


@pytest.mark.parametrize("filename, expected", [
    ("logo.png", "logo"),
    ("photo.final.jpeg", "photo.final"),
    ("README", "icon"),
    (".png", "icon"),
    ("", "icon"),
    (None, "icon"),
    ("/some/dir/app icon.webp", "app icon"),
])
def test_base_name(filename, expected):
    assert base_name(filename) == expected


def test_download_filename():
    assert download_filename("/tmp/logo.png", 32, 32) == "logo-32x32.ico"
    assert download_filename("noext", 256, 16) == "icon-256x16.ico"


@pytest.mark.parametrize("path, expected", [
    ("a.png", True),
    ("a.JPG", True),
    ("dir/a.gif", True),
    ("a.txt", False),
    ("a.pdf", False),
    ("a", False),
])
def test_is_image_file(path, expected):
    assert is_image_file(path) is expected


def test_guess_mime_type_unknown():
    assert guess_mime_type("mystery") == ""


def test_clamp():
    assert clamp(0, 1, 256) == 1
    assert clamp(300, 1, 256) == 256
    assert clamp(64, 1, 256) == 64
