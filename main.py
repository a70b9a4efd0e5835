"""
Main entry point for the Server Encoder application.

This script parses command-line arguments, configures logging, resolves the
object-store credentials and runs one encode request through the pipeline.
It prints the public URL on success and exits with a non-zero status on failure.
"""

import sys
from typing import List, Optional

from loguru import logger

from server_encoder.cli import get_args
from server_encoder.config.common import LOGGER_FORMAT
from server_encoder.config.credentials import DEFAULT_CREDENTIALS_FILE, resolve_credentials
from server_encoder.domain.models import Credentials, EncodeRequest
from server_encoder.pipeline.encode_pipeline import EncodePipeline
from server_encoder.utils.module_updater import Modules


# Configure the logger for initial setup.
# The level might be overridden later by command-line arguments.
logger.remove()
logger.add(sys.stderr, level="INFO", format=LOGGER_FORMAT)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Runs a single encode request from the command line.

    Steps:
    1. Parse command-line arguments and re-configure the logger.
    2. Verify FFmpeg is available (unless skipped).
    3. Resolve credentials: flags > environment > credentials file.
    4. Run the pipeline and report the URL or the error.

    Returns:
        The process exit status: 0 on success, 1 on failure.
    """
    args = get_args(argv)

    effective_log_level = "DEBUG" if args.debug_mode else args.log_level
    logger.remove()
    logger.add(sys.stderr, level=effective_log_level, format=LOGGER_FORMAT)
    logger.debug(f"Parsed arguments: source={args.source_url} bucket={args.bucket} key={args.key}")

    if not args.skip_ffmpeg_check and not Modules.verify_ffmpeg():
        logger.error("FFmpeg is required to encode files. Aborting.")
        return 1

    credentials = resolve_credentials(
        explicit=Credentials.from_optional(args.access_key_id, args.access_secret),
        credentials_file=DEFAULT_CREDENTIALS_FILE,
        profile=args.profile,
    )
    if credentials is None:
        logger.info("No explicit credentials found; relying on the default AWS credential chain.")

    request = EncodeRequest(args.source_url, args.bucket, args.key, credentials)
    result = EncodePipeline(temp_dir=args.temp_work_dir).encode(request)

    if not result.ok:
        logger.error(f"Encoding failed: {result.error}")
        return 1

    print(result.url)
    logger.success("Server Encoder process finished.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
