"""
Exception hierarchy for mpegscan.

Every failure the tag stripper, header codec or frame reader can hit is
raised as one of these. Nothing is retried or swallowed internally; the
caller decides whether to skip, log or abort.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from mpegscan.audio.header import FrameHeader


class Mp3Error(Exception):
    """Base class for all mpegscan errors."""
    pass


class TagNotFoundError(Mp3Error):
    """Buffer has neither a leading ID3v2 tag nor a trailing ID3v1 tag."""
    pass


class HeaderError(Mp3Error):
    """A 4-byte frame header failed validation."""
    pass


class BadSyncError(HeaderError):
    """The first 11 bits are not the frame sync word."""
    pass


class BadLayerError(HeaderError):
    """Layer bits are 00 (reserved)."""
    pass


class BadBitrateError(HeaderError):
    """Bitrate index is 15 (not tabulated)."""
    pass


class BadSamplingRateError(HeaderError):
    """Sampling-rate index is 3, or the version is reserved."""
    pass


class ScanError(Mp3Error):
    """Base class for errors raised while walking a stream frame by frame."""
    pass


class TruncatedError(ScanError):
    """
    Fewer bytes were available than a structural field requires.

    Attributes:
        expected: Number of bytes required
        received: Number of bytes actually available
    """

    def __init__(self, message: str, expected: int = 0, received: int = 0) -> None:
        super().__init__(message)
        self.expected = expected
        self.received = received


class InvalidHeaderError(ScanError):
    """
    The reader hit a header that does not parse.

    Attributes:
        reason: The underlying HeaderError
        offset: Stream offset of the rejected header
    """

    def __init__(self, reason: HeaderError, offset: int) -> None:
        super().__init__(f"Invalid frame header at offset {offset}: {reason}")
        self.reason = reason
        self.offset = offset


class UnsupportedFreeFormatError(ScanError):
    """
    The header is valid but uses a free-format bitrate, so its length is unknown.

    Attributes:
        header: The parsed header
        offset: Stream offset of the frame
    """

    def __init__(self, header: Optional["FrameHeader"], offset: int) -> None:
        super().__init__(f"Free-format bitrate at offset {offset} is not supported")
        self.header = header
        self.offset = offset


class FrameIOError(ScanError):
    """The underlying byte source raised an OSError."""
    pass
