"""
mpegscan: MPEG audio frame header decoding and frame-boundary scanning.

Locates every frame in an MP3 stream (after skipping ID3 tags) and decodes
its header, without touching the compressed audio payload.
"""

from mpegscan.audio import (
    BandsExtension,
    Emphasis,
    Frame,
    FrameHeader,
    FrameReader,
    Layer,
    Mode,
    ReaderState,
    StereoExtension,
    Version,
    frame_size,
    parse_header,
    strip_tag,
    strip_trailer,
)
from mpegscan.errors import (
    BadBitrateError,
    BadLayerError,
    BadSamplingRateError,
    BadSyncError,
    FrameIOError,
    HeaderError,
    InvalidHeaderError,
    Mp3Error,
    ScanError,
    TagNotFoundError,
    TruncatedError,
    UnsupportedFreeFormatError,
)
from mpegscan.sources import BufferSource, ByteSource, StreamSource

__version__ = "0.1.0"

__all__ = [
    "BadBitrateError",
    "BadLayerError",
    "BadSamplingRateError",
    "BadSyncError",
    "BandsExtension",
    "BufferSource",
    "ByteSource",
    "Emphasis",
    "Frame",
    "FrameHeader",
    "FrameIOError",
    "FrameReader",
    "HeaderError",
    "InvalidHeaderError",
    "Layer",
    "Mode",
    "Mp3Error",
    "ReaderState",
    "ScanError",
    "StereoExtension",
    "StreamSource",
    "TagNotFoundError",
    "TruncatedError",
    "UnsupportedFreeFormatError",
    "Version",
    "frame_size",
    "parse_header",
    "strip_tag",
    "strip_trailer",
]
