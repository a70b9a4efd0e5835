"""
Defines the request-scoped values passed through the encode pipeline.

None of these objects is persisted or shared between requests. An
`EncodeRequest` describes one job, and an `EncodeResult` reports its outcome.
"""

from typing import Optional


class Credentials:
    """
    An access key pair for the object store.

    Attributes:
        access_key_id (str): The access key ID.
        access_secret (str): The secret access key.
    """

    def __init__(self, access_key_id: str, access_secret: str):
        self.access_key_id = access_key_id
        self.access_secret = access_secret

    @classmethod
    def from_optional(cls, access_key_id: Optional[str], access_secret: Optional[str]) -> Optional["Credentials"]:
        """
        Builds credentials only when both halves are present.

        A key ID without a secret (or the reverse) cannot sign anything, so it is
        treated the same as no credentials at all and the ambient credential
        chain is used instead.
        """
        if access_key_id and access_secret:
            return cls(access_key_id, access_secret)
        return None

    def __eq__(self, other):
        if not isinstance(other, Credentials):
            return NotImplemented
        return self.access_key_id == other.access_key_id and self.access_secret == other.access_secret

    def __repr__(self):
        # Never print the secret.
        return f"Credentials(access_key_id={self.access_key_id!r}, access_secret='***')"


class EncodeRequest:
    """
    One encode job: where the audio comes from and where the MP3 goes.

    Attributes:
        source_url (str): Remote location of the original audio file.
        target_bucket (str): Object-store bucket, optionally with a folder
                             prefix (e.g. "bucket/encoded").
        target_key (str): Name of the encoded object inside the bucket.
        credentials (Optional[Credentials]): Explicit store credentials. When
                             None, the ambient credential chain applies.
    """

    def __init__(
        self,
        source_url: str,
        target_bucket: str,
        target_key: str,
        credentials: Optional[Credentials] = None,
    ):
        self.source_url = source_url
        self.target_bucket = target_bucket
        self.target_key = target_key
        self.credentials = credentials

    @classmethod
    def from_params(cls, params: dict) -> "EncodeRequest":
        """
        Builds a request from the flat parameter mapping used by external callers:
        `sourceUrl`, `targetBucket`, `targetKey` and the optional `accessKeyId`
        and `accessSecret`.
        """
        return cls(
            source_url=params.get("sourceUrl"),
            target_bucket=params.get("targetBucket"),
            target_key=params.get("targetKey"),
            credentials=Credentials.from_optional(params.get("accessKeyId"), params.get("accessSecret")),
        )

    def __repr__(self):
        return (
            f"EncodeRequest(source_url={self.source_url!r}, target_bucket={self.target_bucket!r}, "
            f"target_key={self.target_key!r}, credentials={self.credentials!r})"
        )


class EncodeResult:
    """
    The outcome of an encode request: either a public URL or an error.

    Exactly one of `url` and `error` is set. Use the `success()` and `failure()`
    constructors; building a result with both or neither raises `ValueError`.
    """

    def __init__(self, url: Optional[str] = None, error: Optional[Exception] = None):
        if (url is None) == (error is None):
            raise ValueError("EncodeResult requires exactly one of 'url' or 'error'.")
        self.url = url
        self.error = error

    @classmethod
    def success(cls, url: str) -> "EncodeResult":
        return cls(url=url)

    @classmethod
    def failure(cls, error: Exception) -> "EncodeResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self):
        if self.ok:
            return f"EncodeResult(url={self.url!r})"
        return f"EncodeResult(error={self.error!r})"
