"""
This module defines the Transcoder service, the second stage of the encode pipeline.

It converts a local audio file into the fixed MP3 voice profile by running
FFmpeg as a subprocess:

    ffmpeg -i <input> -codec:a libmp3lame -b:a 48k -ar 16000 -af volume=3 <output>

Any failure is reported with one generic message. FFmpeg's own diagnostics are
kept for operators (application log and the error log file) and never returned.
"""

from pathlib import Path
from typing import List, Optional

from loguru import logger

from ..config.audio import (
    DEFAULT_AUDIO_ENCODER,
    ENCODED_FILE_EXTENSION,
    TARGET_BIT_RATE,
    TARGET_SAMPLE_RATE,
    VOLUME_FILTER,
)
from ..config.common import BASE_ERROR_DIR, ENCODE_TIMEOUT_SECONDS, TEMP_WORK_DIR
from ..domain.exceptions import TranscodeException
from ..domain.media import AudioFile
from ..utils.ffmpeg_utils import format_cmd, run_cmd
from ..utils.format_utils import formatted_size
from ..utils.module_updater import Modules
from ..utils.temp_files import remove_temp_file, reserve_temp_path
from .logging_service import ErrorLog

TRANSCODE_ERROR_MESSAGE = "Unable to encode the file to mp3."


class Transcoder:
    """
    Encodes audio files to the device MP3 profile.

    The profile (codec, bitrate, sample rate and gain) is fixed and not
    configurable per request; see `server_encoder.config.audio`.

    Contract:
    - On success, `transcode()` returns the path of a complete, non-empty file.
    - On failure it raises `TranscodeException` and no output file remains.

    Attributes:
        temp_dir (Optional[Path]): Directory for the output file.
        timeout (float): Maximum FFmpeg run time in seconds.
        error_log_dir (Path): Directory of the operator error log.
        ffmpeg_path (str): FFmpeg executable to invoke.
        ffprobe_path (str): ffprobe executable used to check the output.
    """

    def __init__(
        self,
        temp_dir: Optional[Path] = TEMP_WORK_DIR,
        timeout: float = ENCODE_TIMEOUT_SECONDS,
        error_log_dir: Path = BASE_ERROR_DIR,
        ffmpeg_path: Optional[str] = None,
        ffprobe_path: Optional[str] = None,
    ):
        self.temp_dir = temp_dir
        self.timeout = timeout
        self.error_log_dir = error_log_dir
        self.ffmpeg_path = ffmpeg_path or Modules.get_ffmpeg_path()
        self.ffprobe_path = ffprobe_path or Modules.get_ffprobe_path()

    def build_command(self, input_path: Path, output_path: Path) -> List[str]:
        """Returns the FFmpeg argument list for one conversion."""
        return [
            self.ffmpeg_path,
            "-nostdin",
            "-y",
            "-i", str(input_path),
            "-codec:a", DEFAULT_AUDIO_ENCODER,
            "-b:a", TARGET_BIT_RATE,
            "-ar", str(TARGET_SAMPLE_RATE),
            "-af", VOLUME_FILTER,
            str(output_path),
        ]

    def transcode(self, input_path: Path) -> Path:
        """
        Converts `input_path` into a new temporary MP3 file.

        Args:
            input_path: The local audio file to convert. It is not modified or deleted.

        Returns:
            The path of the encoded file. The caller owns it.

        Raises:
            TranscodeException: FFmpeg could not be run, exited with an error,
                                timed out or produced no output.
        """
        input_path = Path(input_path)
        output_path = reserve_temp_path(ENCODED_FILE_EXTENSION, self.temp_dir)
        cmd = self.build_command(input_path, output_path)

        logger.info(f"Encoding {input_path.name} to {DEFAULT_AUDIO_ENCODER} {TARGET_BIT_RATE} {TARGET_SAMPLE_RATE} Hz")
        result = run_cmd(
            cmd,
            src_file_for_log=input_path,
            error_log_dir_for_run_cmd=self.error_log_dir,
            show_cmd=True,
            timeout=self.timeout,
        )

        failure_reason = None
        if result is None:
            failure_reason = "FFmpeg could not be executed."
        elif result.returncode != 0:
            failure_reason = f"FFmpeg exited with return code {result.returncode}."
            ErrorLog(self.error_log_dir).write(
                f"Encode error for: {input_path.name}",
                f"Command: {format_cmd(cmd)}",
                f"Return code: {result.returncode}",
                f"stderr:\n{result.stderr}",
            )
        elif not output_path.is_file() or output_path.stat().st_size == 0:
            failure_reason = "FFmpeg reported success but the output file is missing or empty."
        else:
            failure_reason = self._verify_output(output_path)

        if failure_reason:
            logger.error(f"Error thrown while encoding {input_path}: {failure_reason}")
            remove_temp_file(output_path, "partial mp3 file")
            raise TranscodeException(TRANSCODE_ERROR_MESSAGE)

        logger.debug(f"Encoded {input_path.name} -> {output_path} ({formatted_size(output_path.stat().st_size)})")
        return output_path

    def _verify_output(self, output_path: Path) -> Optional[str]:
        """Probes the encoded file. Returns a failure reason, or None if it is a readable MP3."""
        try:
            encoded = AudioFile(output_path, ffprobe_path=self.ffprobe_path)
        except TranscodeException as e:
            return f"Encoded output could not be verified: {e}"
        if encoded.codec_name != "mp3":
            return f"Encoded output has codec '{encoded.codec_name}' instead of mp3."
        logger.trace(
            f"Verified {output_path.name}: {encoded.sample_rate} Hz, {encoded.channels} channel(s), {encoded.duration}s"
        )
        return None
