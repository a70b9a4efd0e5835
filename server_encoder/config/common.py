"""
Common configuration settings used throughout the application.

This module contains the globally shared settings of the Server Encoder: the
logging format, where temporary and error files go, how long each external
call may take and which object-store host the public URLs point at. Values can
be overridden by an optional 'config.user.yaml' file at the project root,
which allows deployments to tune the encoder without modifying the source code.
"""
from pathlib import Path
from typing import Any, Optional

import yaml
from loguru import logger

# --- User-Defined Configuration ---
# This block loads user-specific settings from a 'config.user.yaml' file located
# at the project root. Every key is optional; anything missing keeps its default.

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
USER_CONFIG_PATH = PROJECT_ROOT / "config.user.yaml"


def load_user_config(config_path: Path = USER_CONFIG_PATH) -> dict:
    """
    Reads the user configuration file and returns its content as a dictionary.

    A missing file is not an error: the application then relies on its defaults
    and on the system PATH for executables. An unreadable or malformed file is
    reported as a warning and treated as empty.

    Args:
        config_path: The YAML file to read.

    Returns:
        The parsed mapping, or an empty dict if nothing usable was found.
    """
    if not config_path.is_file():
        logger.debug(f"User config '{config_path}' not found. Using default settings.")
        return {}
    try:
        with config_path.open("r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not load or parse '{config_path}': {e}")
        return {}
    if not isinstance(loaded, dict):
        logger.warning(f"User config '{config_path}' is not a mapping. Ignoring it.")
        return {}
    return loaded


def get_setting(config: dict, section: str, key: str, default: Any = None) -> Any:
    """Returns `config[section][key]`, or `default` when either level is missing."""
    section_values = config.get(section) or {}
    if not isinstance(section_values, dict):
        return default
    value = section_values.get(key)
    return default if value is None else value


_user_config = load_user_config()


# --- External Tool Paths ---

# The directory containing the FFmpeg executable. If not provided, the
# application assumes the executable is available in the system's PATH.
_ffmpeg_dir = get_setting(_user_config, "paths", "ffmpeg_dir")
MODULE_PATH: Optional[Path] = Path(_ffmpeg_dir) if _ffmpeg_dir else None


# --- Logging Configuration ---

# The format string for the Loguru logger.
LOGGER_FORMAT = (
    "<green>{time:MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "{process} - <level>{message}</level>"
)


# --- Directory and File Management ---

# Where downloaded and transcoded files are placed while a request is running.
# None means the platform temp directory (see `tempfile.gettempdir()`).
_temp_dir = get_setting(_user_config, "paths", "temp_dir")
TEMP_WORK_DIR: Optional[Path] = Path(_temp_dir) if _temp_dir else None

# The directory where operator-facing diagnostics (FFmpeg stderr of failed
# encodes) are appended. These details are never returned to callers.
BASE_ERROR_DIR = Path(get_setting(_user_config, "paths", "error_log_dir", "encode_error")).resolve()

# Prefix for every temporary file created by the pipeline, so leftovers are
# easy to recognise.
TEMP_FILE_PREFIX = "server_encoder_"

# Size of each chunk written to disk while streaming a download.
DOWNLOAD_CHUNK_SIZE = 8192


# --- Timeouts ---
# Bounded waits for every blocking external call. A request that exceeds one of
# these fails with the error of the stage it was in.

DOWNLOAD_TIMEOUT_SECONDS: float = float(get_setting(_user_config, "timeouts", "download_seconds", 60))
ENCODE_TIMEOUT_SECONDS: float = float(get_setting(_user_config, "timeouts", "encode_seconds", 300))
UPLOAD_CONNECT_TIMEOUT_SECONDS: float = float(get_setting(_user_config, "timeouts", "upload_connect_seconds", 10))
UPLOAD_READ_TIMEOUT_SECONDS: float = float(get_setting(_user_config, "timeouts", "upload_read_seconds", 60))


# --- Object Store ---

# Host used to build public object URLs: https://<host>/<bucket>/<key>.
STORAGE_HOST: str = str(get_setting(_user_config, "storage", "host", "s3.amazonaws.com"))

# Region handed to the S3 client. Path-style URLs on the global host resolve
# for buckets in any region, so this only affects where the request is signed.
STORAGE_REGION: str = str(get_setting(_user_config, "storage", "region", "us-east-1"))

# Canned ACL applied to every uploaded object.
PUBLIC_READ_ACL = "public-read"
