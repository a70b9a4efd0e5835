"""
Resolution of object-store credentials.

Callers may depend on a fixed precedence when credentials come from several
places:

1. Credentials given explicitly with the request (e.g. CLI flags).
2. Environment variables: `AWS_KEY` / `AWS_SECRET`, then the standard
   `AWS_ACCESS_KEY_ID` / `AWS_SECRET_ACCESS_KEY`.
3. The `[default]` profile of the local AWS credentials file
   (`~/.aws/credentials`).

If none of these yields a complete key pair, `None` is returned and the S3
client falls back to boto3's own chain (for example an instance role).
"""
import configparser
import os
from pathlib import Path
from typing import Mapping, Optional

from loguru import logger

from ..domain.models import Credentials

# Environment variable pairs, checked in order.
ENV_CREDENTIAL_KEYS = (
    ("AWS_KEY", "AWS_SECRET"),
    ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY"),
)

DEFAULT_CREDENTIALS_FILE = Path.home() / ".aws" / "credentials"
DEFAULT_PROFILE = "default"


def credentials_from_env(environ: Optional[Mapping[str, str]] = None) -> Optional[Credentials]:
    """Returns the first complete key pair found in the environment, if any."""
    environ = os.environ if environ is None else environ
    for key_id_var, secret_var in ENV_CREDENTIAL_KEYS:
        credentials = Credentials.from_optional(environ.get(key_id_var), environ.get(secret_var))
        if credentials:
            logger.debug(f"Using object-store credentials from ${key_id_var}/${secret_var}.")
            return credentials
    return None


def credentials_from_file(
    credentials_file: Path = DEFAULT_CREDENTIALS_FILE, profile: str = DEFAULT_PROFILE
) -> Optional[Credentials]:
    """
    Reads a key pair from an AWS-style credentials file.

    The file is INI formatted:

        [default]
        aws_access_key_id = AKIA...
        aws_secret_access_key = ...

    A missing file, a missing profile or an unparsable file all yield None.
    """
    if not credentials_file.is_file():
        return None

    parser = configparser.ConfigParser()
    try:
        parser.read(credentials_file, encoding="utf-8")
    except configparser.Error as e:
        logger.warning(f"Could not parse credentials file '{credentials_file}': {e}")
        return None

    if not parser.has_section(profile):
        logger.debug(f"Profile [{profile}] not found in '{credentials_file}'.")
        return None

    credentials = Credentials.from_optional(
        parser.get(profile, "aws_access_key_id", fallback=None),
        parser.get(profile, "aws_secret_access_key", fallback=None),
    )
    if credentials:
        logger.debug(f"Using object-store credentials from profile [{profile}] in '{credentials_file}'.")
    return credentials


def resolve_credentials(
    explicit: Optional[Credentials] = None,
    environ: Optional[Mapping[str, str]] = None,
    credentials_file: Path = DEFAULT_CREDENTIALS_FILE,
    profile: str = DEFAULT_PROFILE,
) -> Optional[Credentials]:
    """
    Applies the precedence explicit > environment > credentials file.

    Args:
        explicit: Credentials supplied with the request.
        environ: Environment mapping to read (defaults to `os.environ`).
        credentials_file: Path of the AWS credentials file.
        profile: Profile section to read from the credentials file.

    Returns:
        The winning credentials, or None to defer to boto3's default chain.
    """
    if explicit:
        return explicit
    return credentials_from_env(environ) or credentials_from_file(credentials_file, profile)
