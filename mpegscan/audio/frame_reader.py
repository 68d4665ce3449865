"""
Frame reader: walks an MPEG audio stream frame by frame.

FrameReader pulls one 4-byte header at a time from a ByteSource, decodes it,
computes the frame length and reads exactly that many payload bytes. It never
peeks ahead, never rewinds and never resynchronizes: the first malformed
header, truncated frame or I/O failure stops the reader for good.

State machine:
- SCANNING: initial state, next_frame() reads the next frame
- EXHAUSTED: terminal, reached on clean end of stream or on any error;
  further next_frame() calls return None without touching the source
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Iterator, Optional, Union

from mpegscan.audio.header import HEADER_SIZE, FrameHeader, frame_size, parse_header
from mpegscan.errors import (
    FrameIOError,
    HeaderError,
    InvalidHeaderError,
    ScanError,
    TruncatedError,
    UnsupportedFreeFormatError,
)
from mpegscan.sources.base import ByteSource
from mpegscan.sources.stream_source import StreamSource

logger = logging.getLogger(__name__)


class ReaderState(Enum):
    SCANNING = "scanning"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Frame:
    """
    One MPEG audio frame.

    Attributes:
        header: Decoded frame header
        payload: Opaque frame bytes following the header (frame size - 4 bytes)
        offset: Position of the header in the stream, from the reader's first byte
    """
    header: FrameHeader
    payload: bytes
    offset: int = 0

    def __len__(self) -> int:
        return HEADER_SIZE + len(self.payload)


class FrameReader:
    """
    Sequential MPEG audio frame reader.

    Usage:
        reader = FrameReader(BufferSource(strip_tag(data)))
        while (frame := reader.next_frame()) is not None:
            ...

    or simply iterate: `for frame in reader`. Iteration ends at clean end of
    stream and lets errors propagate.

    The reader owns its source exclusively and is not thread-safe.
    """

    def __init__(self, source: Union[ByteSource, BinaryIO]) -> None:
        """
        Initialize frame reader.

        Args:
            source: A ByteSource, or a binary file-like object which is
                    wrapped in a StreamSource
        """
        if not isinstance(source, ByteSource):
            source = StreamSource(source)
        self._source = source
        self._state = ReaderState.SCANNING
        self._bytes_consumed = 0
        self._frames_read = 0

    @property
    def state(self) -> ReaderState:
        return self._state

    @property
    def exhausted(self) -> bool:
        return self._state is ReaderState.EXHAUSTED

    @property
    def bytes_consumed(self) -> int:
        """Total bytes taken from the source so far."""
        return self._bytes_consumed

    @property
    def frames_read(self) -> int:
        return self._frames_read

    def next_frame(self) -> Optional[Frame]:
        """
        Read the next frame.

        Returns:
            The next Frame, or None at clean end of stream (and on every call
            once the reader is exhausted)

        Raises:
            TruncatedError: If the stream ends inside a header or payload
            InvalidHeaderError: If the header does not parse
            UnsupportedFreeFormatError: If the header uses a free-format bitrate
            FrameIOError: If the source raises OSError

        Any other exception from the source propagates unchanged; the reader
        is EXHAUSTED afterwards either way.
        """
        if self._state is ReaderState.EXHAUSTED:
            return None

        offset = self._bytes_consumed
        try:
            frame = self._read_frame(offset)
        except ScanError as e:
            self._state = ReaderState.EXHAUSTED
            logger.warning(
                "Frame reader stopped at offset %d after %d frames: %s",
                offset,
                self._frames_read,
                e,
            )
            raise
        except Exception:
            # Not an I/O failure (e.g. ValueError from a closed file), but the
            # stream position is unknown from here on
            self._state = ReaderState.EXHAUSTED
            logger.warning(
                "Frame reader stopped at offset %d after %d frames on unexpected error",
                offset,
                self._frames_read,
            )
            raise

        if frame is None:
            self._state = ReaderState.EXHAUSTED
            logger.info(
                "End of stream: %d frames, %d bytes",
                self._frames_read,
                self._bytes_consumed,
            )
            return None

        self._frames_read += 1
        logger.debug(
            "Frame %d at offset %d: %d bytes, %s kbps, %d Hz",
            self._frames_read,
            offset,
            len(frame),
            frame.header.bitrate,
            frame.header.sampling_rate,
        )
        return frame

    def __iter__(self) -> Iterator[Frame]:
        while True:
            frame = self.next_frame()
            if frame is None:
                return
            yield frame

    def _read_frame(self, offset: int) -> Optional[Frame]:
        header_bytes = self._read(HEADER_SIZE)
        if not header_bytes:
            return None
        if len(header_bytes) < HEADER_SIZE:
            raise TruncatedError(
                f"Stream ended inside frame header at offset {offset} "
                f"({len(header_bytes)} of {HEADER_SIZE} bytes)",
                expected=HEADER_SIZE,
                received=len(header_bytes),
            )

        try:
            header = parse_header(header_bytes)
        except HeaderError as e:
            raise InvalidHeaderError(e, offset) from e

        size = frame_size(header)
        if size is None:
            raise UnsupportedFreeFormatError(header, offset)

        payload_size = size - HEADER_SIZE
        payload = self._read(payload_size)
        if len(payload) < payload_size:
            raise TruncatedError(
                f"Stream ended inside frame payload at offset {offset} "
                f"({len(payload)} of {payload_size} bytes)",
                expected=payload_size,
                received=len(payload),
            )

        return Frame(header=header, payload=payload, offset=offset)

    def _read(self, size: int) -> bytes:
        try:
            data = self._source.read_exact(size)
        except OSError as e:
            raise FrameIOError(f"Byte source failed: {e}") from e
        self._bytes_consumed += len(data)
        return data
