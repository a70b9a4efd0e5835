"""
Configuration settings related to audio processing.

This module defines the single transcode profile applied to every request. The
values form a known-good profile for voice playback on a constrained smart
speaker device and are intentionally not exposed to callers.
"""

# ======================================================================================
# Audio Encoding Parameters
# ======================================================================================

# FFmpeg's LAME-based MP3 encoder.
DEFAULT_AUDIO_ENCODER = "libmp3lame"

# Target audio bitrate passed to `-b:a`.
TARGET_BIT_RATE = "48k"

# Target sample rate in Hz passed to `-ar`.
TARGET_SAMPLE_RATE = 16_000

# Audio filter passed to `-af`. Voice clips are usually mastered quietly, so
# the gain is raised threefold.
VOLUME_FILTER = "volume=3"

# Extension of the transcoded output.
ENCODED_FILE_EXTENSION = ".mp3"


# ======================================================================================
# Source File Identification
# ======================================================================================

# Suffix used for downloaded files whose URL path carries no extension.
FALLBACK_EXTENSION = ".tmp"
