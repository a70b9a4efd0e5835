from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import list_files
from server_encoder.utils.temp_files import create_temp_file, owned_temp_file, remove_temp_file, reserve_temp_path


def test_create_temp_file_exists_with_suffix(work_dir):
    path = create_temp_file(".m4a", work_dir)
    assert path.is_file()
    assert path.suffix == ".m4a"
    assert path.name.startswith("server_encoder_")


def test_reserve_temp_path_does_not_create_file(work_dir):
    first = reserve_temp_path(".mp3", work_dir)
    second = reserve_temp_path(".mp3", work_dir)
    assert first != second
    assert not first.exists()
    assert list_files(work_dir) == []


def test_reserve_temp_path_creates_missing_directory(tmp_path):
    path = reserve_temp_path(".mp3", tmp_path / "nested" / "dir")
    assert path.parent.is_dir()


def test_owned_temp_file_removes_on_exception(work_dir):
    path = create_temp_file(".m4a", work_dir)
    with pytest.raises(ValueError):
        with owned_temp_file(path):
            raise ValueError("stage failed")
    assert not path.exists()


def test_owned_temp_file_removes_on_return(work_dir):
    def consume():
        with owned_temp_file(create_temp_file(".m4a", work_dir)) as path:
            return path

    assert not consume().exists()


def test_remove_missing_file_is_fine(work_dir):
    assert remove_temp_file(work_dir / "never-existed.mp3")
    assert remove_temp_file(None)


def test_remove_failure_is_logged_not_raised(work_dir):
    path = create_temp_file(".mp3", work_dir)
    with patch.object(Path, "unlink", side_effect=PermissionError("locked")):
        assert remove_temp_file(path) is False
    assert path.exists()
