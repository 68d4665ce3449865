"""
MPEG audio frame parsing for mpegscan.

Provides tag stripping (strip_tag), the header codec (parse_header,
frame_size) and the sequential FrameReader.
"""

from mpegscan.audio.frame_reader import Frame, FrameReader, ReaderState
from mpegscan.audio.header import (
    BandsExtension,
    Emphasis,
    FrameHeader,
    Layer,
    Mode,
    StereoExtension,
    Version,
    frame_size,
    parse_header,
)
from mpegscan.audio.tag import strip_tag, strip_trailer

__all__ = [
    "BandsExtension",
    "Emphasis",
    "Frame",
    "FrameHeader",
    "FrameReader",
    "Layer",
    "Mode",
    "ReaderState",
    "StereoExtension",
    "Version",
    "frame_size",
    "parse_header",
    "strip_tag",
    "strip_trailer",
]
