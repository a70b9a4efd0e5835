"""
This module provides the operator-facing error log.

Console and application logging go through loguru. In addition, diagnostics
that must never reach the caller but that an operator needs to investigate a
failed request (FFmpeg's stderr above all) are appended to a plain text file,
one block per event.
"""

from datetime import datetime
from pathlib import Path

from loguru import logger


class ErrorLog:
    """
    Appends human-readable error reports to a plain text file.

    Each call to `write()` adds a timestamped block, making the file a
    chronological record of failed requests. The directory is only created
    when something is actually written.
    """

    DEFAULT_ERROR_FILENAME = "error.txt"

    # Separator line closing every block.
    linesep_marker: str = "=" * 50

    def __init__(self, error_log_dir: Path, filename: str = DEFAULT_ERROR_FILENAME):
        """
        Args:
            error_log_dir: The log directory. If it has a file suffix, its
                           parent directory is used instead.
            filename: Name of the log file inside the directory.
        """
        error_log_dir = Path(error_log_dir)
        if error_log_dir.suffix and not error_log_dir.is_dir():
            error_log_dir = error_log_dir.parent
        self.log_dir: Path = error_log_dir.resolve()
        self.log_file_path: Path = self.log_dir / filename

    def write(self, *error_messages: str):
        """
        Writes one or more error messages to the log file.

        The messages are joined with newlines, prefixed with a timestamp and
        followed by a separator line. If the file cannot be written, the
        messages are sent to the application logger instead so they are not lost.
        """
        if not error_messages:
            return

        timestamp = datetime.now().isoformat(timespec="seconds")
        content_to_write = f"[{timestamp}]\n" + "\n".join(error_messages) + "\n" + self.linesep_marker + "\n"

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            with self.log_file_path.open("a", encoding="utf-8") as f:
                f.write(content_to_write)
        except OSError as e:
            logger.error(f"Failed to write to error log {self.log_file_path}: {e}")
            logger.error("Original error messages attempted to log:")
            for msg in error_messages:
                logger.error(f"  - {msg}")
