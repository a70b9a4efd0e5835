"""
Defines custom exception types for the Server Encoder application.

Each stage of the pipeline raises its own exception type, so the orchestrator
and callers can tell where a request failed without parsing messages. Every
failure is terminal for its request; nothing here is retried.

All custom exceptions inherit from the base `ServerEncoderException`.
"""


class ServerEncoderException(Exception):
    """Base class for all custom exceptions in the Server Encoder application."""

    pass


# --- Fetch Stage Exceptions ---
class FetchException(ServerEncoderException):
    """Base class for exceptions raised while obtaining the source file."""

    pass


class ValidationException(FetchException):
    """
    Raised when the source location is not a supported web URL.

    This is checked before any network access or temporary file allocation,
    so a request failing with this exception has performed no I/O at all.
    Local filesystem paths are rejected this way.
    """

    pass


class DownloadException(FetchException):
    """
    Raised when the source file could not be downloaded and saved locally.

    Covers non-200 responses, network-level failures (DNS, refused or timed out
    connections, unsupported schemes) and errors while streaming the body to
    disk. The underlying cause is chained as `__cause__` when there is one.
    """

    pass


# --- Transcode Stage Exceptions ---
class TranscodeException(ServerEncoderException):
    """
    Raised when FFmpeg could not produce the MP3 output.

    The message is deliberately generic. Whether the input was an image, a
    corrupt file or the binary is missing, callers see the same error while
    the FFmpeg diagnostics go to the operator logs.
    """

    pass


# --- Publish Stage Exceptions ---
class PublishException(ServerEncoderException):
    """
    Raised when the object store rejected or could not receive the upload.

    The message is the store's own error message (bad credentials, missing
    bucket, network failure), and the SDK exception is chained as `__cause__`.
    """

    pass
