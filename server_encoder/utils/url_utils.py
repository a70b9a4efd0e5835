"""
Helpers for inspecting source URLs and building public object URLs.
"""

import re
from pathlib import PurePosixPath
from typing import Optional
from urllib.parse import urlsplit

# scheme://label.label[.label...][:port][/path][?query][#fragment]
# Only http, https and ftp are accepted; local paths and file:// URLs are not.
WEB_URL_PATTERN = re.compile(
    r"^(?:https?|ftp)://"
    r"(?:[\w-]+\.)+\w+"
    r"(?::\d{1,5})?"
    r"(?:[/?#]\S*)?$",
    re.IGNORECASE,
)

# A usable file suffix: a dot followed by word characters only.
_EXTENSION_PATTERN = re.compile(r"^\.\w+$")


def is_web_url(url: Optional[str]) -> bool:
    """
    Checks whether `url` has the shape of a downloadable web URL.

    Examples:
        >>> is_web_url("https://cdn.example.com/audio/clip.m4a?x=1")
        True
        >>> is_web_url("/home/me/clip.m4a")
        False
    """
    if not url or not isinstance(url, str):
        return False
    return WEB_URL_PATTERN.match(url) is not None


def get_extension(url: Optional[str], fallback: str) -> str:
    """
    Returns the file extension of the URL path, or `fallback` if it has none.

    Query strings and fragments are ignored, so
    "https://x.com/a.m4a?token=b.c" yields ".m4a". Suffixes containing anything
    other than word characters are not trusted as a filename suffix.
    """
    if not url:
        return fallback
    suffix = PurePosixPath(urlsplit(url).path).suffix
    if suffix and _EXTENSION_PATTERN.match(suffix):
        return suffix
    return fallback


def url_for_key(host: str, bucket: str, key: str) -> str:
    """Builds the public, unsigned URL of an object: https://<host>/<bucket>/<key>."""
    return f"https://{host}/{bucket}/{key}"


def split_bucket(bucket: str) -> tuple:
    """
    Splits a bucket given with a folder prefix into (bucket_name, prefix).

    "media/encoded/test" -> ("media", "encoded/test"); "media" -> ("media", "").
    """
    if "/" in bucket:
        bucket_name, prefix = bucket.split("/", 1)
        return bucket_name, prefix.strip("/")
    return bucket, ""
