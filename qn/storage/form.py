"""Multipart form assembly for upload requests.

The form only collects parts. Encoding the ``multipart/form-data`` body is
left to httpx, which receives the parts through ``request_kwargs``.
"""

import io
import os
from dataclasses import dataclass
from typing import IO, Any


class _SizedStream:
    """Read-only wrapper reporting a declared size to the encoder.

    httpx probes a file's length with ``tell``/``seek`` before encoding.
    Non-seekable sources would otherwise force chunked transfer encoding.
    """

    def __init__(self, raw: IO[bytes], size: int):
        self._raw = raw
        self._size = size

    def read(self, n: int = -1) -> bytes:
        return self._raw.read(n)

    def tell(self) -> int:
        return 0

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        if whence == os.SEEK_END:
            return self._size + offset
        if offset == 0:
            return 0
        raise io.UnsupportedOperation("stream is not seekable")


@dataclass
class FilePart:
    """A file part of a multipart form."""

    name: str
    content: bytes | IO[bytes]
    filename: str
    content_type: str | None = None
    size: int | None = None

    def as_httpx(self) -> tuple[str, tuple[str, Any, str | None]]:
        content = self.content
        if self.size is not None and not isinstance(content, bytes):
            content = _SizedStream(content, self.size)
        return (self.name, (self.filename, content, self.content_type))


class MultipartForm:
    """Collects the fields and files of a ``multipart/form-data`` body.

    Methods return the form so calls can be chained.

    Example:
        form = MultipartForm().buffer("file", b"data", "a.txt", "text/plain")
        form.field("key", "docs/a.txt")
    """

    def __init__(self):
        self._fields: list[tuple[str, str]] = []
        self._files: list[FilePart] = []

    def field(self, name: str, value: str) -> "MultipartForm":
        """Add a plain text field."""
        self._fields.append((name, str(value)))
        return self

    def buffer(
        self,
        name: str,
        data: bytes,
        filename: str,
        content_type: str | None = None,
    ) -> "MultipartForm":
        """Add a file part whose content is already in memory."""
        self._files.append(FilePart(name, bytes(data), filename, content_type))
        return self

    def stream(
        self,
        name: str,
        stream: IO[bytes],
        filename: str,
        content_type: str | None = None,
        size: int | None = None,
    ) -> "MultipartForm":
        """Add a file part read from a binary file object.

        Args:
            name: Form field name
            stream: Readable binary file object
            filename: Filename reported for the part
            content_type: MIME type, guessed from the filename when omitted
            size: Declared length in bytes. Without it a non-seekable
                stream is sent with chunked transfer encoding.
        """
        self._files.append(FilePart(name, stream, filename, content_type, size))
        return self

    @property
    def fields(self) -> list[tuple[str, str]]:
        return list(self._fields)

    @property
    def files(self) -> list[FilePart]:
        return list(self._files)

    def has_field(self, name: str) -> bool:
        return any(field_name == name for field_name, _ in self._fields)

    def copy(self) -> "MultipartForm":
        """Return a form with the same parts that can be extended independently."""
        form = MultipartForm()
        form._fields = list(self._fields)
        form._files = list(self._files)
        return form

    def request_kwargs(self) -> dict[str, Any]:
        """Return the ``data`` and ``files`` arguments for an httpx request."""
        data: dict[str, str | list[str]] = {}
        for name, value in self._fields:
            if name not in data:
                data[name] = value
            elif isinstance(data[name], list):
                data[name].append(value)
            else:
                data[name] = [data[name], value]
        return {
            "data": data,
            "files": [part.as_httpx() for part in self._files],
        }

    def __repr__(self) -> str:
        names = [name for name, _ in self._fields] + [part.name for part in self._files]
        return f"MultipartForm(parts={names!r})"
