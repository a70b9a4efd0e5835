"""
This module provides a robust function for running external command-line tools
such as FFmpeg and capturing their output for diagnostics.
"""

import os
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from ..services.logging_service import ErrorLog


def format_cmd(cmd_list: List[str]) -> str:
    """Returns a shell-quoted, display-friendly version of a command list."""
    if os.name == "nt":
        return subprocess.list2cmdline(cmd_list)
    return shlex.join(cmd_list)


def run_cmd(
    cmd_parts: List[Union[str, Path]],
    src_file_for_log: Path = Path(),
    error_log_dir_for_run_cmd: Optional[Path] = None,
    show_cmd: bool = False,
    timeout: Optional[float] = None,
) -> Optional[subprocess.CompletedProcess]:
    """
    Executes an external command safely and captures its output.

    This is a wrapper around Python's `subprocess.run` that adds logging and
    turns "could not run at all" conditions into a `None` result instead of an
    exception. A command that ran but failed still returns its
    `CompletedProcess`, so callers must check `returncode`.

    Args:
        cmd_parts: The command to execute as a list of arguments. Paths are
                   converted to strings; no shell is involved.
        src_file_for_log: The file being processed, used for logging context.
        error_log_dir_for_run_cmd: The directory where an `ErrorLog` entry is
                                   written if the command cannot be executed.
        show_cmd: If True, the command is logged at DEBUG level before execution.
        timeout: Maximum run time in seconds; None waits indefinitely.

    Returns:
        A `subprocess.CompletedProcess` with the return code, stdout and stderr,
        or `None` if the command could not be started, was empty or timed out.
    """
    # --- Step 1: Normalize the arguments to strings ---
    cmd_list = [str(part) for part in cmd_parts]
    if not cmd_list:
        logger.error("run_cmd received an empty command list.")
        return None

    display_cmd_str = format_cmd(cmd_list)
    if show_cmd:
        logger.debug(f"Executing command: {display_cmd_str}")

    def write_error_log(reason: str):
        if error_log_dir_for_run_cmd and src_file_for_log.name:
            ErrorLog(error_log_dir_for_run_cmd).write(
                f"Command execution error for: {src_file_for_log.name}",
                f"Command: {display_cmd_str}",
                f"Error: {reason}",
            )

    # --- Step 2: Execute the command and handle potential errors ---
    try:
        result = subprocess.run(
            cmd_list,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            shell=False,  # Never use shell=True with untrusted input.
            timeout=timeout,
        )
    except FileNotFoundError:
        # The executable (e.g. 'ffmpeg') is not installed or not on PATH.
        logger.error(
            f"Error: Command not found ('{cmd_list[0]}'). Ensure it's in your system's PATH or configured correctly."
        )
        write_error_log("Command not found (FileNotFoundError).")
        return None
    except subprocess.TimeoutExpired:
        logger.error(f"Error: Command timed out after {timeout}s. Command: {display_cmd_str}")
        write_error_log(f"Command timed out after {timeout}s.")
        return None
    except OSError as e:
        logger.error(f"An OS error occurred while executing command for {src_file_for_log.name or 'N/A'}: {e}")
        write_error_log(f"{type(e).__name__} - {e}")
        return None

    if result.stdout and len(result.stdout) > 500:
        logger.trace(f"Command stdout (truncated): {result.stdout[:500]}...")
    elif result.stdout:
        logger.trace(f"Command stdout: {result.stdout}")

    # FFmpeg writes progress and banners to stderr even on success.
    if result.stderr and result.returncode != 0:
        logger.debug(f"Command stderr (error, rc={result.returncode}): {result.stderr}")
    elif result.stderr:
        logger.trace(f"Command stderr (non-error, rc={result.returncode}): {result.stderr}")

    return result
