"""
The encode pipeline: fetch -> transcode -> publish.

`EncodePipeline.encode()` runs the three stages strictly in sequence for one
request. Each stage's output file is owned by the pipeline and removed as soon
as the next stage has consumed it, on success and failure alike:

1. Fetch the source URL. On error, stop.
2. Transcode the download. The download is deleted whatever the outcome.
3. On transcode error, stop.
4. Publish the MP3 with a store client built for this request only.
5. Delete the MP3 whatever the publish outcome.
6. Report the URL or the first error.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from ..domain.exceptions import ServerEncoderException
from ..domain.models import EncodeRequest, EncodeResult
from ..services.fetcher import Fetcher
from ..services.publisher import Publisher
from ..services.transcoder import Transcoder
from ..utils.temp_files import owned_temp_file


class EncodePipeline:
    """
    Composes the Fetcher, Transcoder and Publisher services.

    The pipeline holds no per-request state, so one instance can serve any
    number of independent requests.

    Attributes:
        fetcher (Fetcher): Downloads the source file.
        transcoder (Transcoder): Converts it to the MP3 profile.
        publisher (Publisher): Uploads the MP3 and builds its URL.
    """

    def __init__(
        self,
        fetcher: Optional[Fetcher] = None,
        transcoder: Optional[Transcoder] = None,
        publisher: Optional[Publisher] = None,
        temp_dir: Optional[Path] = None,
    ):
        """
        Args:
            fetcher: Service override. Defaults to a `Fetcher` using `temp_dir`.
            transcoder: Service override. Defaults to a `Transcoder` using `temp_dir`.
            publisher: Service override. Defaults to a `Publisher`.
            temp_dir: Work directory for the default services; None keeps the
                      configured default.
        """
        temp_kwargs = {"temp_dir": temp_dir} if temp_dir is not None else {}
        self.fetcher = fetcher or Fetcher(**temp_kwargs)
        self.transcoder = transcoder or Transcoder(**temp_kwargs)
        self.publisher = publisher or Publisher()

    def download_and_transcode(self, source_url: Optional[str]) -> Path:
        """
        Fetches `source_url` and converts it, returning the MP3 path.

        The downloaded file is removed before returning or raising. The MP3
        belongs to the caller.

        Raises:
            FetchException: The source could not be validated or downloaded.
            TranscodeException: FFmpeg could not convert the download.
        """
        with owned_temp_file(self.fetcher.fetch(source_url), "downloaded file") as downloaded_path:
            return self.transcoder.transcode(downloaded_path)

    def encode(self, request: EncodeRequest) -> EncodeResult:
        """
        Runs the whole pipeline for one request.

        Failures of any stage are returned, not raised: the result carries
        either the public URL or the error of the first stage that failed.
        Errors that are not `ServerEncoderException`s indicate a bug and
        propagate (temporary files are still removed).

        Args:
            request: What to download and where to publish it.

        Returns:
            An `EncodeResult` with exactly one of `url` or `error` set.
        """
        logger.info(f"Encode request: {request.source_url} -> {request.target_bucket}/{request.target_key}")
        try:
            mp3_path = self.download_and_transcode(request.source_url)
            with owned_temp_file(mp3_path, "mp3 file"):
                url = self.publisher.publish(
                    mp3_path, request.target_bucket, request.target_key, request.credentials
                )
        except ServerEncoderException as e:
            logger.error(f"Encode of {request.source_url} failed: {type(e).__name__}: {e}")
            return EncodeResult.failure(e)

        logger.success(f"Encoded {request.source_url} -> {url}")
        return EncodeResult.success(url)


def encode(request: EncodeRequest) -> EncodeResult:
    """Runs one request through a pipeline built from the configured defaults."""
    return EncodePipeline().encode(request)
