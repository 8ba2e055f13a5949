"""qn: a client for uploading files to Qiniu cloud storage."""

__version__ = "0.3.0"

# Core components
from qn.core.client import QiniuClient
from qn.core.exceptions import (
    QiniuError,
    QiniuConfigurationError,
    QiniuSerializationError,
    QiniuTransportError,
    QiniuResponseError,
    QiniuClientAuthError,
    QiniuServerError,
)
from qn.core.settings import DEFAULT_TIMEOUT_MS, UPLOAD_URL, QiniuSettings

# Auth components
from qn.auth.models import PutPolicy
from qn.auth.token import UploadToken, UploadTokenSigner

# Storage components
from qn.storage import (
    BytesContent,
    MultipartForm,
    StreamContent,
    TextContent,
    UploadOptions,
    UploadResult,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "QiniuClient",
    "QiniuSettings",
    "DEFAULT_TIMEOUT_MS",
    "UPLOAD_URL",
    "QiniuError",
    "QiniuConfigurationError",
    "QiniuSerializationError",
    "QiniuTransportError",
    "QiniuResponseError",
    "QiniuClientAuthError",
    "QiniuServerError",
    # Auth
    "PutPolicy",
    "UploadToken",
    "UploadTokenSigner",
    # Storage
    "BytesContent",
    "MultipartForm",
    "StreamContent",
    "TextContent",
    "UploadOptions",
    "UploadResult",
]
