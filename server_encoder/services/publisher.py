"""
This module defines the Publisher service, the last stage of the encode pipeline.

It uploads the encoded file to Amazon S3 with a public-read ACL and returns
the object's public URL. Every call builds its own S3 client from the
credentials it was given, so concurrent requests with different credentials
never share configuration.
"""

from pathlib import Path
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from ..config.common import (
    PUBLIC_READ_ACL,
    STORAGE_HOST,
    STORAGE_REGION,
    UPLOAD_CONNECT_TIMEOUT_SECONDS,
    UPLOAD_READ_TIMEOUT_SECONDS,
)
from ..domain.exceptions import PublishException
from ..domain.models import Credentials
from ..utils.format_utils import formatted_size
from ..utils.url_utils import split_bucket, url_for_key


class Publisher:
    """
    Puts files into an S3 bucket and returns their public URLs.

    The returned URL is composed from the bucket and key only
    (`https://<host>/<bucket>/<key>`); it carries no signature and no expiry.

    A bucket may include a folder prefix ("bucket/folder"). The prefix is moved
    into the object key. The URL is built from the bucket name and key the
    object is actually stored under.

    Attributes:
        host (str): Host of the public URLs.
        region (str): Region of the S3 client.
    """

    def __init__(
        self,
        host: str = STORAGE_HOST,
        region: str = STORAGE_REGION,
        connect_timeout: float = UPLOAD_CONNECT_TIMEOUT_SECONDS,
        read_timeout: float = UPLOAD_READ_TIMEOUT_SECONDS,
    ):
        self.host = host
        self.region = region
        # A single attempt: failed uploads are reported, not retried.
        self.boto_config = Config(
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            retries={"total_max_attempts": 1},
        )

    def create_client(self, credentials: Optional[Credentials] = None):
        """
        Builds an S3 client for one request.

        Explicit credentials are bound to a dedicated boto3 session. Without
        them, the session resolves credentials through boto3's default chain
        (environment, shared credentials file, instance role).
        """
        if credentials:
            session = boto3.session.Session(
                aws_access_key_id=credentials.access_key_id,
                aws_secret_access_key=credentials.access_secret,
                region_name=self.region,
            )
        else:
            session = boto3.session.Session(region_name=self.region)
        return session.client("s3", config=self.boto_config)

    def publish(self, file_path: Path, bucket: str, key: str, credentials: Optional[Credentials] = None) -> str:
        """
        Uploads `file_path` to `bucket`/`key` with a public-read ACL.

        The whole file is read into memory; encoded voice clips are small.

        Args:
            file_path: The local file to upload.
            bucket: Target bucket, optionally with a folder prefix.
            key: Target object name.
            credentials: Explicit credentials, or None for the default chain.

        Returns:
            The public URL of the uploaded object.

        Raises:
            PublishException: The file could not be read, or the store rejected
                              or did not receive the upload. The message is the
                              store's error message.
        """
        file_path = Path(file_path)
        try:
            data = file_path.read_bytes()
        except OSError as e:
            logger.error(f"Unable to read {file_path} for upload: {e}")
            raise PublishException(f"Unable to read file {file_path}: {e}") from e

        bucket_name, prefix = split_bucket(bucket)
        object_key = f"{prefix}/{key}" if prefix else key
        logger.info(f"Uploading {file_path.name} ({formatted_size(len(data))}) to S3 {bucket_name}/{object_key}")

        try:
            client = self.create_client(credentials)
            client.put_object(Bucket=bucket_name, Key=object_key, Body=data, ACL=PUBLIC_READ_ACL)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Upload to {bucket_name}/{object_key} failed: {e}")
            raise PublishException(str(e)) from e

        url = url_for_key(self.host, bucket_name, object_key)
        logger.debug(f"Uploaded to {url}")
        return url
