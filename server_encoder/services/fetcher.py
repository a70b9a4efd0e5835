"""
This module defines the Fetcher service, the first stage of the encode pipeline.

It validates that a source location is a web URL, downloads it over HTTP
(following redirects) and saves the body to a uniquely named temporary file
whose suffix preserves the original file extension, since FFmpeg uses it as a
format hint.
"""

from pathlib import Path
from typing import Optional

import requests
from loguru import logger

from ..config.audio import FALLBACK_EXTENSION
from ..config.common import DOWNLOAD_CHUNK_SIZE, DOWNLOAD_TIMEOUT_SECONDS, TEMP_WORK_DIR
from ..domain.exceptions import DownloadException, ValidationException
from ..utils.format_utils import formatted_size
from ..utils.temp_files import create_temp_file, remove_temp_file
from ..utils.url_utils import get_extension, is_web_url


def download_error_message(url, cause) -> str:
    """Wraps the cause of any download failure with the location being fetched."""
    return f"Unable to download and save file at path {url}. Error: {cause}"


class Fetcher:
    """
    Downloads a remote file to a local temporary file.

    A path is only ever returned for a complete download: the temporary file is
    created after the server has answered with 200, and it is removed again if
    anything goes wrong while the body is being written.

    Attributes:
        temp_dir (Optional[Path]): Directory for the downloaded file. None means
                                   the platform temp directory.
        timeout (float): Connect and read timeout for the HTTP request, in seconds.
        session (Optional[requests.Session]): Session to issue the request on.
                                   When None, a plain `requests.get` is used.
    """

    def __init__(
        self,
        temp_dir: Optional[Path] = TEMP_WORK_DIR,
        timeout: float = DOWNLOAD_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.temp_dir = temp_dir
        self.timeout = timeout
        self.session = session

    def fetch(self, url: Optional[str]) -> Path:
        """
        Downloads `url` and returns the path of the saved temporary file.

        Args:
            url: The remote location of the file (http, https or ftp).

        Returns:
            The path of a complete local copy. The caller owns the file.

        Raises:
            ValidationException: `url` is empty or not a web URL. Nothing was
                                 requested and no file was created.
            DownloadException: The server did not answer 200, the request failed
                               at network level, or the body could not be saved.
        """
        if not is_web_url(url):
            logger.warning(f"Rejected source '{url}': not a supported web URL.")
            raise ValidationException(f"The url {url} is not a supported URI.")

        extension = get_extension(url, FALLBACK_EXTENSION)
        logger.info(f"Downloading {url}")

        get = self.session.get if self.session is not None else requests.get
        try:
            with get(url, stream=True, allow_redirects=True, timeout=self.timeout) as response:
                if response.status_code != 200:
                    logger.error(f"Could not retrieve file from {url}: HTTP {response.status_code}")
                    raise DownloadException(download_error_message(url, f"Could not retrieve file from {url}"))
                if response.history:
                    logger.debug(f"Followed {len(response.history)} redirect(s) to {response.url}")
                output_path = self._save(response, extension)
        except requests.RequestException as e:
            logger.error(f"Download of {url} failed: {e}")
            raise DownloadException(download_error_message(url, e)) from e

        logger.debug(f"Saved {url} to {output_path} ({formatted_size(output_path.stat().st_size)})")
        return output_path

    def _save(self, response: requests.Response, extension: str) -> Path:
        """
        Streams the response body into a new temporary file.

        The handle is flushed and closed before the path is returned. On any
        error the partial file is deleted.
        """
        try:
            output_path = create_temp_file(extension, self.temp_dir)
        except OSError as e:
            raise DownloadException(download_error_message(response.url, e)) from e

        try:
            with output_path.open("wb") as f:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
        except (OSError, requests.RequestException) as e:
            logger.error(f"Error while saving download to {output_path}: {e}")
            remove_temp_file(output_path, "partial download")
            raise DownloadException(download_error_message(response.url, e)) from e

        return output_path
