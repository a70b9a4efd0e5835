import shutil
from pathlib import Path
from unittest.mock import MagicMock

import pytest

FFMPEG_AVAILABLE = shutil.which("ffmpeg") is not None and shutil.which("ffprobe") is not None

requires_ffmpeg = pytest.mark.skipif(not FFMPEG_AVAILABLE, reason="ffmpeg/ffprobe not installed")


@pytest.fixture
def work_dir(tmp_path):
    """Isolated directory for every temporary file a test creates."""
    directory = tmp_path / "work"
    directory.mkdir()
    return directory


@pytest.fixture
def error_dir(tmp_path):
    return tmp_path / "errors"


@pytest.fixture
def make_response():
    """Builds a mocked `requests` response usable as a context manager."""

    def _make(status_code=200, chunks=(b"audio", b"data"), url="https://cdn.example.com/clip.m4a", history=()):
        response = MagicMock()
        response.status_code = status_code
        response.url = url
        response.history = list(history)
        response.iter_content.return_value = iter(chunks)
        response.__enter__.return_value = response
        response.__exit__.return_value = False
        return response

    return _make


def list_files(directory: Path):
    return sorted(p.name for p in directory.iterdir())
