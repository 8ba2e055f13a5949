"""Form upload request assembly and response classification."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from qn.core.exceptions import (
    QiniuClientAuthError,
    QiniuError,
    QiniuResponseError,
    QiniuServerError,
)
from qn.storage.content import as_content
from qn.storage.form import MultipartForm

logger = logging.getLogger(__name__)

# Form fields with this prefix are exposed to callback templates as $(x:name)
CUSTOM_FIELD_PREFIX = "x:"

DEFAULT_FILENAME = "file"


class UploadOptions(BaseModel):
    """Per-upload options.

    Attributes:
        key: Key the object is stored under. Without it the service uses
            the content hash.
        filename: Filename of the file part; defaults to ``key`` or "file"
        content_type: MIME type of the file part (``contentType`` also accepted)
        size: Declared length of stream content in bytes
        timeout: Request timeout in milliseconds, overriding the client's;
            0 or None keeps the client default
        custom_fields: ``x:``-prefixed fields sent verbatim with the upload;
            values are sent as strings

    Top-level ``x:`` keys are folded into ``custom_fields`` so option dicts
    in the service's documented form validate as is. Other unknown keys are
    dropped and never reach the request.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    key: str | None = None
    filename: str | None = None
    content_type: str | None = Field(default=None, alias="contentType")
    size: int | None = Field(default=None, ge=0)
    timeout: int | None = Field(default=None, gt=0)
    custom_fields: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_prefixed_fields(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        prefixed = {
            name: value
            for name, value in data.items()
            if isinstance(name, str) and name.startswith(CUSTOM_FIELD_PREFIX)
        }
        if not prefixed:
            return data
        data = {name: value for name, value in data.items() if name not in prefixed}
        data["custom_fields"] = {**prefixed, **dict(data.get("custom_fields") or {})}
        return data

    @field_validator("timeout", mode="before")
    @classmethod
    def _falsy_timeout_is_unset(cls, value: Any) -> Any:
        return value or None

    @field_validator("custom_fields")
    @classmethod
    def _require_prefix(cls, value: dict[str, Any]) -> dict[str, str]:
        for name in value:
            if not name.startswith(CUSTOM_FIELD_PREFIX) or name == CUSTOM_FIELD_PREFIX:
                raise ValueError(
                    f"Custom field '{name}' must be named '{CUSTOM_FIELD_PREFIX}<name>'"
                )
        return {name: str(field_value) for name, field_value in value.items()}

    @property
    def resolved_filename(self) -> str:
        return self.filename or self.key or DEFAULT_FILENAME


def coerce_options(options: UploadOptions | Mapping[str, Any] | None) -> UploadOptions:
    """Accept UploadOptions, a plain mapping, or None."""
    if options is None:
        return UploadOptions()
    if isinstance(options, UploadOptions):
        return options
    return UploadOptions.model_validate(dict(options))


@dataclass
class UploadResult:
    """Outcome of one upload request.

    Attributes:
        error: The classified error, or None on success
        data: Parsed JSON response body, or None if there was none
        response: The raw HTTP response; None when the transport failed
    """

    error: QiniuError | None = None
    data: Any = None
    response: httpx.Response | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status_code(self) -> int | None:
        if self.response is None:
            return None
        return self.response.status_code

    def raise_for_error(self) -> Any:
        """Raise the classified error, or return the parsed body."""
        if self.error is not None:
            raise self.error
        return self.data


def build_upload_form(
    content: Any,
    options: UploadOptions,
    token: str,
) -> MultipartForm:
    """Assemble the multipart form for one upload.

    Args:
        content: Raw content or a content variant (see ``as_content``)
        options: Upload options
        token: Signed upload token

    Returns:
        A form with the file, token, key and custom fields attached
    """
    content = as_content(content, size=options.size)
    if isinstance(content, MultipartForm):
        form = content.copy()
    else:
        form = content.attach(
            MultipartForm(),
            "file",
            options.resolved_filename,
            options.content_type,
            options.size,
        )

    form.field("token", token)

    if options.key:
        form.field("key", options.key)

    for name, value in options.custom_fields.items():
        form.field(name, value)

    return form


def parse_response_body(response: httpx.Response) -> Any:
    """Decode a JSON response body, returning None if it is not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.debug(f"Upload response with status {response.status_code} is not JSON")
        return None


def classify_response(response: httpx.Response, data: Any) -> QiniuResponseError | None:
    """Map an HTTP response to an error, or None for success.

    The message is the body's ``error`` field when present, otherwise
    ``"status <code>"``.
    """
    status_code = response.status_code
    if status_code < 400:
        return None

    message = None
    if isinstance(data, Mapping):
        message = data.get("error")
    if not message:
        message = f"status {status_code}"

    if status_code < 500:
        return QiniuClientAuthError(str(message), status_code, data)
    return QiniuServerError(str(message), status_code, data)
