"""
Command-Line Interface (CLI) setup for the Server Encoder.

This module uses Python's `argparse` to define and parse the command-line
arguments for a single encode request.
"""
import argparse
from pathlib import Path
from typing import List, Optional


def get_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parses command-line arguments for the Server Encoder.

    Args:
        argv: Arguments to parse; defaults to `sys.argv[1:]`.

    Returns:
        argparse.Namespace: The parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Download an audio file, encode it to the voice MP3 profile and publish it to S3."
    )
    parser.add_argument(
        "--source-url", required=True, help="Remote URL (http, https or ftp) of the audio file to encode."
    )
    parser.add_argument(
        "--bucket", required=True, help="Target S3 bucket, optionally with a folder prefix (bucket/folder)."
    )
    parser.add_argument("--key", required=True, help="Name of the encoded object in the bucket.")
    parser.add_argument(
        "--access-key-id", default=None,
        help="S3 access key ID. Overrides $AWS_KEY and ~/.aws/credentials."
    )
    parser.add_argument(
        "--access-secret", default=None,
        help="S3 secret access key. Overrides $AWS_SECRET and ~/.aws/credentials."
    )
    parser.add_argument(
        "--profile", default="default",
        help="Profile of ~/.aws/credentials to fall back to when no other credentials are given."
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO", choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set the logging level."
    )
    parser.add_argument(
        "--debug-mode", action="store_true", help="Shortcut for --log-level DEBUG."
    )
    parser.add_argument(
        "--temp-work-dir", type=str, default=None,
        help="Directory for temporary files. Useful for pointing to a RAM disk."
    )
    parser.add_argument(
        "--skip-ffmpeg-check", action="store_true",
        help="Do not run `ffmpeg -version` before encoding."
    )

    args = parser.parse_args(argv)

    if args.temp_work_dir:
        temp_dir_path = Path(args.temp_work_dir)
        if not temp_dir_path.is_dir():
            try:
                temp_dir_path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                parser.error(
                    f"The specified temporary working directory '{args.temp_work_dir}' "
                    f"is not a valid directory and could not be created: {e}"
                )
        args.temp_work_dir = temp_dir_path.resolve()

    return args
