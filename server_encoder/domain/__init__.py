"""
This package contains the core domain models of the Server Encoder application.

The domain layer describes what a request is, what an audio file looks like and
how a request can fail.

Modules:
    exceptions.py: Defines the exception taxonomy, one type per pipeline stage,
                   so failures can be classified without parsing messages.
    models.py: Contains `EncodeRequest`, `Credentials` and `EncodeResult`, the
               transient values that flow through a single encode.
    media.py: Contains `AudioFile`, which wraps `ffmpeg.probe` to expose the
              codec, sample rate and duration of an audio file.
"""
