import pytest

from server_encoder.domain.exceptions import DownloadException
from server_encoder.domain.models import Credentials, EncodeRequest, EncodeResult


def test_encode_result_success_has_only_url():
    result = EncodeResult.success("https://s3.amazonaws.com/bucket/key.mp3")
    assert result.ok
    assert result.url == "https://s3.amazonaws.com/bucket/key.mp3"
    assert result.error is None


def test_encode_result_failure_has_only_error():
    error = DownloadException("Could not retrieve file from https://x.com/a.m4a")
    result = EncodeResult.failure(error)
    assert not result.ok
    assert result.error is error
    assert result.url is None


def test_encode_result_rejects_both_or_neither():
    with pytest.raises(ValueError):
        EncodeResult()
    with pytest.raises(ValueError):
        EncodeResult(url="https://s3.amazonaws.com/b/k", error=DownloadException("boom"))


def test_credentials_require_both_halves():
    assert Credentials.from_optional("AKIA", "secret") == Credentials("AKIA", "secret")
    assert Credentials.from_optional("AKIA", None) is None
    assert Credentials.from_optional(None, "secret") is None
    assert Credentials.from_optional("", "") is None


def test_credentials_repr_hides_secret():
    assert "secret-value" not in repr(Credentials("AKIA", "secret-value"))


def test_encode_request_from_params():
    request = EncodeRequest.from_params(
        {
            "sourceUrl": "https://cdn.example.com/Demo.m4a",
            "targetBucket": "media/encoder/test",
            "targetKey": "testKey.mp3",
            "accessKeyId": "AKIA",
            "accessSecret": "secret",
        }
    )
    assert request.source_url == "https://cdn.example.com/Demo.m4a"
    assert request.target_bucket == "media/encoder/test"
    assert request.target_key == "testKey.mp3"
    assert request.credentials == Credentials("AKIA", "secret")


def test_encode_request_from_params_without_credentials():
    request = EncodeRequest.from_params(
        {"sourceUrl": "https://cdn.example.com/Demo.m4a", "targetBucket": "b", "targetKey": "k.mp3"}
    )
    assert request.credentials is None
