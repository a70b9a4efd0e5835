"""
Utilities Package for the Server Encoder Application.

This package contains helper modules that support the pipeline services but are
not specific to any single stage.

Modules:
    - ffmpeg_utils.py: Runs external commands such as FFmpeg and captures output.
    - format_utils.py: Formats values like file sizes for log messages.
    - module_updater.py: Locates and verifies the FFmpeg executable.
    - temp_files.py: Creates, scopes and removes per-request temporary files.
    - url_utils.py: Validates source URLs, derives file extensions and builds
      public object URLs.
"""
