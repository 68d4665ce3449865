"""
StreamSource for mpegscan.

Adapts any binary file-like object (open file, io.BytesIO, socket.makefile)
to the ByteSource interface.
"""

from __future__ import annotations

from typing import BinaryIO

from mpegscan.sources.base import ByteSource


class StreamSource(ByteSource):
    """
    Reads from a binary stream exposing read(n).

    The stream is only closed by close() when owns_stream is True, so callers
    keep control of streams they opened themselves.
    """

    def __init__(self, stream: BinaryIO, owns_stream: bool = False) -> None:
        """
        Initialize stream source.

        Args:
            stream: Binary file-like object
            owns_stream: Close the stream when this source is closed

        Raises:
            TypeError: If stream has no read() method
        """
        if not callable(getattr(stream, "read", None)):
            raise TypeError(f"Stream must provide read(), got {type(stream).__name__}")
        self._stream = stream
        self._owns_stream = owns_stream

    @classmethod
    def open(cls, path: str) -> "StreamSource":
        """Open a file for reading and return a source that owns it."""
        return cls(open(path, "rb"), owns_stream=True)

    def read(self, size: int) -> bytes:
        data = self._stream.read(size)
        # Non-blocking streams return None when no data is ready
        if data is None:
            raise BlockingIOError("Stream has no data available")
        return bytes(data)

    def close(self) -> None:
        if self._owns_stream:
            self._stream.close()
