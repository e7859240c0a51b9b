"""Element-stream HTML writer."""

import io
from typing import TextIO

from markupsafe import escape


VOID_ELEMENTS = frozenset({"base", "link", "meta"})


class ResponseWriterError(Exception):
    """Raised when elements are written out of order."""


class HtmlResponseWriter:
    """Writes HTML markup element by element to a text stream.

    Start tags are kept open until the first content or child is written,
    so attributes can follow ``start_element``. Void elements never get an
    end tag. Output goes straight to the stream in call order.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize the writer.

        Args:
            stream: Target stream, an in-memory buffer when omitted.
        """
        self._stream = stream if stream is not None else io.StringIO()
        self._open: list[str] = []
        self._start_tag_pending = False

    def start_element(self, name: str) -> None:
        self._close_start_tag()
        self._stream.write(f"<{name}")
        self._open.append(name)
        self._start_tag_pending = True

    def write_attribute(self, name: str, value: str) -> None:
        if not self._start_tag_pending:
            msg = f"Attribute {name!r} written outside of a start tag"
            raise ResponseWriterError(msg)
        self._stream.write(f' {name}="{escape(value)}"')

    def write(self, text: str) -> None:
        self._close_start_tag()
        self._stream.write(text)

    def write_text(self, text: str) -> None:
        self._close_start_tag()
        self._stream.write(str(escape(text)))

    def end_element(self, name: str) -> None:
        if not self._open or self._open[-1] != name:
            current = self._open[-1] if self._open else None
            msg = f"Cannot end {name!r}, open element is {current!r}"
            raise ResponseWriterError(msg)
        self._open.pop()
        self._close_start_tag()
        if name not in VOID_ELEMENTS:
            self._stream.write(f"</{name}>")

    def getvalue(self) -> str:
        """Get the markup written so far when writing to a buffer."""
        if not isinstance(self._stream, io.StringIO):
            msg = "Writer is not backed by an in-memory buffer"
            raise ResponseWriterError(msg)
        return self._stream.getvalue()

    def _close_start_tag(self) -> None:
        if self._start_tag_pending:
            self._stream.write(">")
            self._start_tag_pending = False
