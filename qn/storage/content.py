"""Upload content variants.

Every upload body is one of ``BytesContent``, ``TextContent``,
``StreamContent`` or an already prepared ``MultipartForm``. The first three
know how to attach themselves to a form; a prepared form is sent as is.
"""

import io
from dataclasses import dataclass
from typing import IO, Any, Union

from qn.storage.form import MultipartForm


@dataclass(frozen=True)
class BytesContent:
    """In-memory binary content."""

    data: bytes

    def attach(
        self,
        form: MultipartForm,
        name: str,
        filename: str,
        content_type: str | None = None,
        size: int | None = None,
    ) -> MultipartForm:
        return form.buffer(name, self.data, filename, content_type)


@dataclass(frozen=True)
class TextContent:
    """Text content, encoded before sending."""

    text: str
    encoding: str = "utf-8"

    def attach(
        self,
        form: MultipartForm,
        name: str,
        filename: str,
        content_type: str | None = None,
        size: int | None = None,
    ) -> MultipartForm:
        return form.buffer(name, self.text.encode(self.encoding), filename, content_type)


@dataclass(frozen=True)
class StreamContent:
    """Content read from a binary file object while the request is sent.

    Attributes:
        stream: Readable binary file object
        size: Declared length in bytes, if known
    """

    stream: IO[bytes]
    size: int | None = None

    def attach(
        self,
        form: MultipartForm,
        name: str,
        filename: str,
        content_type: str | None = None,
        size: int | None = None,
    ) -> MultipartForm:
        declared = self.size if self.size is not None else size
        return form.stream(name, self.stream, filename, content_type, declared)


UploadContent = Union[BytesContent, TextContent, StreamContent, MultipartForm]


def as_content(value: Any, size: int | None = None) -> UploadContent:
    """Map a raw value to an upload content variant.

    Args:
        value: bytes-like, str, binary file object, MultipartForm, or a
            content variant
        size: Declared length used when ``value`` is a file object

    Returns:
        The matching content variant

    Raises:
        TypeError: If ``value`` is none of the supported shapes
    """
    if isinstance(value, (BytesContent, TextContent, StreamContent, MultipartForm)):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BytesContent(bytes(value))
    if isinstance(value, str):
        return TextContent(value)
    if callable(getattr(value, "read", None)):
        mode = getattr(value, "mode", "b")
        if isinstance(value, io.TextIOBase) or (isinstance(mode, str) and "b" not in mode):
            raise TypeError("File objects must be opened in binary mode")
        return StreamContent(value, size)
    raise TypeError(
        f"Cannot upload content of type {type(value).__name__}; expected bytes, "
        "str, a binary file object or a MultipartForm"
    )
