"""
BufferSource for mpegscan.

Serves bytes from an in-memory buffer, typically the view strip_tag() returns.
"""

from __future__ import annotations

from typing import Union

from mpegscan.sources.base import ByteSource


class BufferSource(ByteSource):
    """
    Reads sequentially from bytes, bytearray or memoryview without copying the
    whole buffer up front.
    """

    def __init__(self, buffer: Union[bytes, bytearray, memoryview]) -> None:
        self._view = memoryview(buffer)
        self._position = 0

    @property
    def position(self) -> int:
        """Number of bytes handed out so far."""
        return self._position

    @property
    def remaining(self) -> int:
        return len(self._view) - self._position

    def read(self, size: int) -> bytes:
        if size <= 0:
            return b""
        end = min(self._position + size, len(self._view))
        data = self._view[self._position:end].tobytes()
        self._position = end
        return data

    def close(self) -> None:
        self._position = len(self._view)
