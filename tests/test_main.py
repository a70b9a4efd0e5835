from unittest.mock import patch

import pytest

import main
from server_encoder.domain.exceptions import DownloadException
from server_encoder.domain.models import Credentials, EncodeResult

ARGS = ["--source-url", "https://cdn.example.com/Demo.m4a", "--bucket", "bucket", "--key", "key.mp3"]


@pytest.fixture
def mock_modules():
    with patch("main.Modules") as modules:
        modules.verify_ffmpeg.return_value = True
        yield modules


@patch("main.resolve_credentials", return_value=None)
@patch("main.EncodePipeline")
def test_success_prints_url(mock_pipeline, mock_resolve, mock_modules, capsys):
    mock_pipeline.return_value.encode.return_value = EncodeResult.success("https://s3.amazonaws.com/bucket/key.mp3")

    assert main.main(ARGS) == 0

    assert capsys.readouterr().out.strip() == "https://s3.amazonaws.com/bucket/key.mp3"
    request = mock_pipeline.return_value.encode.call_args.args[0]
    assert request.source_url == "https://cdn.example.com/Demo.m4a"
    assert request.target_bucket == "bucket"
    assert request.target_key == "key.mp3"


@patch("main.resolve_credentials", return_value=None)
@patch("main.EncodePipeline")
def test_failure_returns_one(mock_pipeline, mock_resolve, mock_modules, capsys):
    mock_pipeline.return_value.encode.return_value = EncodeResult.failure(DownloadException("nope"))
    assert main.main(ARGS) == 1
    assert capsys.readouterr().out == ""


@patch("main.EncodePipeline")
def test_explicit_flags_passed_to_resolution(mock_pipeline, mock_modules):
    mock_pipeline.return_value.encode.return_value = EncodeResult.success("https://s3.amazonaws.com/bucket/key.mp3")
    with patch("main.resolve_credentials") as mock_resolve:
        main.main(ARGS + ["--access-key-id", "AKIA", "--access-secret", "secret", "--profile", "work"])

    assert mock_resolve.call_args.kwargs["explicit"] == Credentials("AKIA", "secret")
    assert mock_resolve.call_args.kwargs["profile"] == "work"


@patch("main.EncodePipeline")
def test_missing_ffmpeg_aborts(mock_pipeline, mock_modules):
    mock_modules.verify_ffmpeg.return_value = False
    assert main.main(ARGS) == 1
    mock_pipeline.assert_not_called()


@patch("main.resolve_credentials", return_value=None)
@patch("main.EncodePipeline")
def test_skip_ffmpeg_check(mock_pipeline, mock_resolve, mock_modules):
    mock_pipeline.return_value.encode.return_value = EncodeResult.success("https://s3.amazonaws.com/bucket/key.mp3")
    assert main.main(ARGS + ["--skip-ffmpeg-check"]) == 0
    mock_modules.verify_ffmpeg.assert_not_called()


def test_missing_required_argument_exits():
    with pytest.raises(SystemExit):
        main.main(["--bucket", "bucket", "--key", "key.mp3"])
