import sys

from server_encoder.utils.module_updater import Modules


def exe(name):
    return f"{name}.exe" if sys.platform == "win32" else name


def test_configured_directory_wins(tmp_path):
    (tmp_path / exe("ffmpeg")).write_bytes(b"")
    assert Modules.get_ffmpeg_path(tmp_path) == str(tmp_path / exe("ffmpeg"))


def test_falls_back_to_path_when_missing_from_directory(tmp_path):
    assert Modules.get_ffprobe_path(tmp_path) == "ffprobe"


def test_falls_back_to_path_when_not_configured():
    assert Modules.get_ffmpeg_path(None) == "ffmpeg"
