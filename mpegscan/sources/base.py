"""
Base ByteSource interface for mpegscan.

All byte sources the frame reader consumes must implement this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ByteSource(ABC):
    """
    Base class for sequential byte sources.

    A source hands out bytes in order and never rewinds:
    - read() may deliver fewer bytes than requested (short read)
    - an empty result means end of stream
    - I/O failures are raised as OSError

    A source is owned by a single reader; sharing one between readers is
    undefined.
    """

    @abstractmethod
    def read(self, size: int) -> bytes:
        """
        Read up to size bytes.

        Args:
            size: Maximum number of bytes to return

        Returns:
            bytes: Between 1 and size bytes, or b"" at end of stream

        Raises:
            OSError: If the underlying source fails
        """
        pass

    def read_exact(self, size: int) -> bytes:
        """
        Read size bytes, looping over short reads.

        Stops early only at end of stream, so a result shorter than size means
        the stream ended (an empty result means it ended before any byte).

        Args:
            size: Number of bytes wanted

        Returns:
            bytes: Exactly size bytes, or fewer if the stream ended

        Raises:
            OSError: If the underlying source fails
        """
        if size <= 0:
            return b""
        chunks = []
        remaining = size
        while remaining > 0:
            chunk = self.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def close(self) -> None:
        """
        Release resources (file handles, etc.).

        Subclasses should override if cleanup is needed.
        """
        pass

    def __enter__(self) -> "ByteSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
