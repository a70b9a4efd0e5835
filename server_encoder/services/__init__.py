"""
Services Package for the Server Encoder Application.

This package contains the "service layer": one class per pipeline stage, each
performing a single high-level task with one external collaborator.

- **Fetcher (`fetcher.py`):** validates the source URL and downloads it to a
  temporary file with `requests`.

- **Transcoder (`transcoder.py`):** runs FFmpeg to convert the download into
  the fixed MP3 voice profile.

- **Publisher (`publisher.py`):** uploads the MP3 to S3 with `boto3` and
  returns its public URL.

- **Logging Service (`ErrorLog`):** appends operator diagnostics, such as
  FFmpeg's stderr, to a plain text file.

The pipeline in `server_encoder.pipeline` composes these services and owns
the temporary files passed between them.
"""
