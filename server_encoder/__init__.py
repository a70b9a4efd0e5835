"""
Server Encoder.

Downloads a remote audio file, converts it to a voice-playback MP3 profile with
FFmpeg and publishes the result to an Amazon S3 bucket with a public URL.

The main entry points are re-exported here for convenience:

    from server_encoder import EncodeRequest, encode

    result = encode(EncodeRequest("https://example.com/a.m4a", "bucket", "a.mp3"))
    if result.ok:
        print(result.url)
"""
from .domain.models import Credentials, EncodeRequest, EncodeResult
from .pipeline.encode_pipeline import EncodePipeline, encode

__all__ = ["Credentials", "EncodePipeline", "EncodeRequest", "EncodeResult", "encode"]
