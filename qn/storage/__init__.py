"""Form upload support for qn.

This module provides the upload content variants, the multipart form the
upload request is built from, and classification of upload responses.
"""

from qn.storage.content import (
    BytesContent,
    StreamContent,
    TextContent,
    UploadContent,
    as_content,
)
from qn.storage.form import MultipartForm
from qn.storage.uploads import CUSTOM_FIELD_PREFIX, UploadOptions, UploadResult

__all__ = [
    "BytesContent",
    "StreamContent",
    "TextContent",
    "UploadContent",
    "as_content",
    "MultipartForm",
    "CUSTOM_FIELD_PREFIX",
    "UploadOptions",
    "UploadResult",
]
