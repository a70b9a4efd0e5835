"""
Configuration Package for the Server Encoder.

This package centralizes the static configuration settings for the application.
Keeping configuration apart from the pipeline code makes it possible to adjust
paths, timeouts and storage settings without touching the services themselves.

This package includes settings for:
- Common application settings like logging formats, temporary and error-log
  directories, network/subprocess timeouts and the object-store host.
- The fixed audio transcode profile expected by the playback device.
- Resolution of object-store credentials from the request, the environment and
  the local AWS credentials file.
"""
