"""
Tests for the Publisher service. The boto3 session is mocked; no request leaves the process.
"""

from unittest.mock import patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from server_encoder.domain.exceptions import PublishException
from server_encoder.domain.models import Credentials
from server_encoder.services.publisher import Publisher


@pytest.fixture
def mp3_file(tmp_path):
    path = tmp_path / "encoded.mp3"
    path.write_bytes(b"ID3encoded")
    return path


@pytest.fixture
def mock_session():
    with patch("server_encoder.services.publisher.boto3.session.Session") as session_cls:
        yield session_cls


def put_object_mock(session_cls):
    return session_cls.return_value.client.return_value.put_object


def test_publish_puts_public_object_and_returns_url(mock_session, mp3_file):
    url = Publisher().publish(mp3_file, "bespoken-encoding-test", "testKey.mp3")

    assert url == "https://s3.amazonaws.com/bespoken-encoding-test/testKey.mp3"
    put_object_mock(mock_session).assert_called_once_with(
        Bucket="bespoken-encoding-test", Key="testKey.mp3", Body=b"ID3encoded", ACL="public-read"
    )


def test_bucket_prefix_moves_into_key(mock_session, mp3_file):
    url = Publisher().publish(mp3_file, "media/encoder/test", "testKey.mp3")

    assert url == "https://s3.amazonaws.com/media/encoder/test/testKey.mp3"
    kwargs = put_object_mock(mock_session).call_args.kwargs
    assert kwargs["Bucket"] == "media"
    assert kwargs["Key"] == "encoder/test/testKey.mp3"


def test_trailing_slash_bucket_url_matches_stored_object(mock_session, mp3_file):
    url = Publisher().publish(mp3_file, "media/encoded/", "k.mp3")

    kwargs = put_object_mock(mock_session).call_args.kwargs
    assert (kwargs["Bucket"], kwargs["Key"]) == ("media", "encoded/k.mp3")
    assert url == "https://s3.amazonaws.com/media/encoded/k.mp3"


def test_bare_bucket_with_trailing_slash(mock_session, mp3_file):
    url = Publisher().publish(mp3_file, "media/", "k.mp3")

    assert put_object_mock(mock_session).call_args.kwargs["Key"] == "k.mp3"
    assert url == "https://s3.amazonaws.com/media/k.mp3"


def test_explicit_credentials_bound_to_session(mock_session, mp3_file):
    Publisher(region="eu-west-1").publish(mp3_file, "bucket", "key.mp3", Credentials("AKIA", "secret"))

    mock_session.assert_called_once_with(
        aws_access_key_id="AKIA", aws_secret_access_key="secret", region_name="eu-west-1"
    )
    client_call = mock_session.return_value.client.call_args
    assert client_call.args == ("s3",)
    assert client_call.kwargs["config"].connect_timeout == 10


def test_without_credentials_uses_default_chain(mock_session, mp3_file):
    Publisher().publish(mp3_file, "bucket", "key.mp3")
    mock_session.assert_called_once_with(region_name="us-east-1")


def test_each_publish_builds_its_own_client(mock_session, mp3_file):
    publisher = Publisher()
    publisher.publish(mp3_file, "bucket", "a.mp3", Credentials("KEY_A", "SECRET_A"))
    publisher.publish(mp3_file, "bucket", "b.mp3", Credentials("KEY_B", "SECRET_B"))

    keys = [c.kwargs["aws_access_key_id"] for c in mock_session.call_args_list]
    assert keys == ["KEY_A", "KEY_B"]


def test_custom_host_in_url(mock_session, mp3_file):
    url = Publisher(host="storage.example.com").publish(mp3_file, "bucket", "key.mp3")
    assert url == "https://storage.example.com/bucket/key.mp3"


def test_rejected_upload_raises_store_message(mock_session, mp3_file):
    error = ClientError(
        {"Error": {"Code": "InvalidAccessKeyId", "Message": "The AWS Access Key Id you provided does not exist."}},
        "PutObject",
    )
    put_object_mock(mock_session).side_effect = error

    with pytest.raises(PublishException, match="InvalidAccessKeyId") as exc_info:
        Publisher().publish(mp3_file, "bucket", "key.mp3", Credentials("bad", "bad"))

    assert exc_info.value.__cause__ is error


def test_unreachable_store_raises(mock_session, mp3_file):
    put_object_mock(mock_session).side_effect = EndpointConnectionError(endpoint_url="https://s3.amazonaws.com")
    with pytest.raises(PublishException):
        Publisher().publish(mp3_file, "bucket", "key.mp3")


def test_missing_file_raises_before_any_upload(mock_session, tmp_path):
    with pytest.raises(PublishException, match="Unable to read file"):
        Publisher().publish(tmp_path / "gone.mp3", "bucket", "key.mp3")
    mock_session.assert_not_called()
