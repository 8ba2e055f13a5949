"""Upload token signing for qn."""

from qn.auth.models import DEFAULT_TOKEN_TTL, PutPolicy
from qn.auth.token import UploadToken, UploadTokenSigner

__all__ = ["DEFAULT_TOKEN_TTL", "PutPolicy", "UploadToken", "UploadTokenSigner"]
