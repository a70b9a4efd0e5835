"""
This module provides the Modules class to locate and verify the external
tools required by the application: FFmpeg and ffprobe.
"""
import subprocess
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from ..config.common import MODULE_PATH


class Modules:
    """
    Locates and verifies external executables.

    The FFmpeg location comes from `paths.ffmpeg_dir` in the user's
    `config.user.yaml`, with a fallback to the system PATH.
    """

    @staticmethod
    def _get_executable_path(tool_name: str, module_path: Optional[Path] = MODULE_PATH) -> str:
        """
        Determines the executable of an FFmpeg suite tool ('ffmpeg', 'ffprobe').

        The configured directory takes priority. If it is not set, or does not
        contain the executable, the bare tool name is returned so the system
        PATH is used. The executable name is platform-specific ('.exe' on Windows).

        Returns:
            The command name or absolute path of the executable.
        """
        exe_name = f"{tool_name}.exe" if sys.platform == "win32" else tool_name

        if module_path and module_path.is_dir():
            configured_path = module_path / exe_name
            if configured_path.is_file():
                logger.trace(f"Using {tool_name} from configured path: '{configured_path}'")
                return str(configured_path)
            logger.warning(
                f"`ffmpeg_dir` is configured, but '{exe_name}' was not found there. Falling back to system PATH."
            )

        return tool_name

    @staticmethod
    def get_ffmpeg_path(module_path: Optional[Path] = MODULE_PATH) -> str:
        return Modules._get_executable_path("ffmpeg", module_path)

    @staticmethod
    def get_ffprobe_path(module_path: Optional[Path] = MODULE_PATH) -> str:
        return Modules._get_executable_path("ffprobe", module_path)

    @staticmethod
    def verify_ffmpeg() -> bool:
        """
        Verifies that FFmpeg is installed, accessible and can be executed.

        Runs `ffmpeg -version` and logs the first line of its output. A failure
        is logged in detail; the caller decides whether it is fatal.

        Returns:
            True if FFmpeg ran successfully, False otherwise.
        """
        ffmpeg_cmd = Modules.get_ffmpeg_path()

        try:
            result = subprocess.run(
                [ffmpeg_cmd, "-version"],
                check=True,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=30,
            )
        except subprocess.CalledProcessError as e:
            logger.error(f"FFmpeg version command failed (return code {e.returncode}):\n{e.stderr}")
            return False
        except FileNotFoundError:
            logger.error(
                "FFmpeg command not found. Please ensure FFmpeg is installed and accessible.\n"
                "You can either add it to your system's PATH or specify its location in the 'config.user.yaml' file."
            )
            return False
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.error(f"An unexpected error occurred while checking FFmpeg version: {e}")
            return False

        version_output_lines = result.stdout.splitlines()
        first_line = version_output_lines[0] if version_output_lines else "(no output)"
        logger.info(f"FFmpeg version check successful. Output (first line):\n{first_line}")
        return True
