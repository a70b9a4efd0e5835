"""
This module defines the `AudioFile` class, a thin wrapper around `ffprobe`
that exposes the properties of an audio file the pipeline cares about.
"""

from pathlib import Path
from pprint import pformat
from typing import Optional

import ffmpeg
from loguru import logger

from .exceptions import TranscodeException


class AudioFile:
    """
    Represents a local audio file and its probed stream information.

    Probing happens once, on construction. A file that ffprobe cannot read, or
    that has no audio stream, raises `TranscodeException`.

    Attributes:
        path (Path): Location of the file.
        probe (dict): The raw `ffmpeg.probe` output.
        audio_stream (dict): The first audio stream of the probe.
    """

    def __init__(self, path: Path, ffprobe_path: str = "ffprobe"):
        self.path = Path(path)
        self.probe: dict = {}
        self.audio_stream: dict = {}
        self.set_probe(ffprobe_path)

    def set_probe(self, ffprobe_path: str = "ffprobe"):
        """
        Probes the file with `ffmpeg.probe` and selects its first audio stream.

        Raises:
            TranscodeException: The file is missing, unreadable by ffprobe or
                                has no audio stream.
        """
        if not self.path.is_file():
            raise TranscodeException(f"{self.path} does not exist.")
        try:
            self.probe = ffmpeg.probe(str(self.path), cmd=ffprobe_path)
        except ffmpeg.Error as e:
            stderr = e.stderr.decode("utf-8", errors="replace") if isinstance(e.stderr, bytes) else e.stderr
            logger.error(f"ffmpeg.probe failed for {self.path}: {stderr}")
            raise TranscodeException(f"Unable to probe {self.path.name}.") from e
        except FileNotFoundError as e:
            logger.error(f"ffprobe executable '{ffprobe_path}' not found.")
            raise TranscodeException(f"Unable to probe {self.path.name}.") from e

        logger.trace(f"Probe data for {self.path.name}:\n{pformat(self.probe)}")
        audio_streams = [s for s in self.probe.get("streams", []) if s.get("codec_type") == "audio"]
        if not audio_streams:
            raise TranscodeException(f"No audio stream found in {self.path.name}.")
        self.audio_stream = audio_streams[0]

    @property
    def codec_name(self) -> Optional[str]:
        return self.audio_stream.get("codec_name")

    @property
    def sample_rate(self) -> Optional[int]:
        value = self.audio_stream.get("sample_rate")
        return int(value) if value else None

    @property
    def channels(self) -> Optional[int]:
        return self.audio_stream.get("channels")

    @property
    def duration(self) -> Optional[float]:
        value = self.audio_stream.get("duration") or self.probe.get("format", {}).get("duration")
        return float(value) if value else None
