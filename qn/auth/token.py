"""Upload token signing.

A token has the form ``access_key:signature:encoded_policy`` where
``encoded_policy`` is the URL-safe base64 of the JSON put policy and
``signature`` is the URL-safe base64 of its HMAC-SHA1 under the secret key.
"""

import base64
import hashlib
import hmac
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from qn.auth.models import PutPolicy


def urlsafe_b64encode(data: bytes) -> str:
    """Base64 encode with ``-`` and ``_`` in place of ``+`` and ``/``."""
    return base64.urlsafe_b64encode(data).decode("ascii")


def urlsafe_b64decode(data: str) -> bytes:
    """Inverse of ``urlsafe_b64encode``. Missing padding is tolerated."""
    padded = data + "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


def coerce_policy(policy: PutPolicy | Mapping[str, Any] | None) -> PutPolicy:
    """Accept a PutPolicy, a plain mapping of directives, or None."""
    if policy is None:
        return PutPolicy()
    if isinstance(policy, PutPolicy):
        return policy
    return PutPolicy.model_validate(dict(policy))


@dataclass(frozen=True)
class UploadToken:
    """The three parts of a signed upload token."""

    access_key: str
    signature: str
    encoded_policy: str

    @classmethod
    def parse(cls, token: str) -> "UploadToken":
        """Split a token string.

        Raises:
            ValueError: If the token does not have exactly three parts
        """
        parts = token.split(":")
        if len(parts) != 3 or not all(parts):
            raise ValueError("Upload token must have the form access_key:signature:policy")
        return cls(*parts)

    @property
    def policy(self) -> PutPolicy:
        """Decode the embedded put policy."""
        data = json.loads(urlsafe_b64decode(self.encoded_policy).decode("utf-8"))
        return PutPolicy.model_validate(data)

    def __str__(self) -> str:
        return f"{self.access_key}:{self.signature}:{self.encoded_policy}"


class UploadTokenSigner:
    """Signs put policies with a single set of credentials.

    The signer is stateless apart from its credentials, so one instance can
    be shared by concurrent uploads.
    """

    def __init__(self, access_key: str, secret_key: str, bucket_name: str):
        """Initialize the signer.

        Args:
            access_key: Access key placed in front of every token
            secret_key: Key used for the HMAC signature
            bucket_name: Default scope for policies without one
        """
        self.access_key = access_key
        self._secret_key = secret_key.encode("utf-8")
        self.bucket_name = bucket_name

    def encode_policy(self, policy: PutPolicy) -> str:
        """Serialize and URL-safe encode a complete policy."""
        return urlsafe_b64encode(policy.to_json().encode("utf-8"))

    def sign_data(self, data: str) -> str:
        """Return the URL-safe base64 HMAC-SHA1 of ``data``."""
        digest = hmac.new(self._secret_key, data.encode("utf-8"), hashlib.sha1).digest()
        return urlsafe_b64encode(digest)

    def sign(
        self,
        policy: PutPolicy | Mapping[str, Any] | None = None,
        now: int | None = None,
    ) -> str:
        """Create an upload token.

        Args:
            policy: Put policy; scope defaults to the bucket and deadline to
                one hour from ``now``
            now: Current unix time, read from the clock when omitted

        Returns:
            The token string ``access_key:signature:encoded_policy``

        Raises:
            QiniuSerializationError: If the policy is not JSON-serializable
        """
        policy = coerce_policy(policy).with_defaults(self.bucket_name, now=now)
        encoded_policy = self.encode_policy(policy)
        signature = self.sign_data(encoded_policy)
        return str(UploadToken(self.access_key, signature, encoded_policy))

    def verify(self, token: str) -> bool:
        """Check that ``token`` was signed with these credentials."""
        try:
            parsed = UploadToken.parse(token)
        except ValueError:
            return False
        if parsed.access_key != self.access_key:
            return False
        expected = self.sign_data(parsed.encoded_policy)
        return hmac.compare_digest(expected, parsed.signature)
