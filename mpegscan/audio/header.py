"""
MPEG audio frame header codec.

Decodes the 4-byte header that starts every MPEG-1/2/2.5 audio frame into a
FrameHeader and derives the frame's byte length from it.

Header structure (4 bytes):
- Byte 0: 0xFF (sync)
- Byte 1: sync (bits 7-5) + version (bits 4-3) + layer (bits 2-1) + protection (bit 0)
- Byte 2: bitrate index (bits 7-4) + sampling-rate index (bits 3-2) + padding (bit 1) + private (bit 0)
- Byte 3: mode (bits 7-6) + mode extension (bits 5-4) + copyright (bit 3) + original (bit 2) + emphasis (bits 1-0)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from mpegscan.audio import tables
from mpegscan.errors import (
    BadBitrateError,
    BadLayerError,
    BadSamplingRateError,
    BadSyncError,
    TruncatedError,
)

HEADER_SIZE = 4

# Sync word: 0xFF + (next_byte & 0xE0 == 0xE0)
SYNC_BYTE_1 = 0xFF
SYNC_MASK = 0xE0


class Version(Enum):
    """MPEG version, valued by its two header bits."""
    MPEG2_5 = 0b00
    RESERVED = 0b01
    MPEG2 = 0b10
    MPEG1 = 0b11

    @property
    def number(self) -> Optional[float]:
        """1, 2 or 2.5; None for the reserved version."""
        return _VERSION_NUMBERS[self]


_VERSION_NUMBERS = {
    Version.MPEG1: 1,
    Version.MPEG2: 2,
    Version.MPEG2_5: 2.5,
    Version.RESERVED: None,
}


class Layer(Enum):
    """MPEG audio layer, valued by its two header bits (00 is invalid)."""
    LAYER_III = 0b01
    LAYER_II = 0b10
    LAYER_I = 0b11

    @property
    def number(self) -> int:
        return 4 - self.value


class Mode(Enum):
    """Channel mode."""
    STEREO = 0b00
    JOINT_STEREO = 0b01
    DUAL_CHANNEL = 0b10
    MONO = 0b11


class Emphasis(Enum):
    NONE = 0b00
    MS_50_15 = 0b01  # 50/15 ms
    RESERVED = 0b10
    CCITT_J17 = 0b11  # CCITT J.17


@dataclass(frozen=True)
class BandsExtension:
    """
    Layer I/II mode extension: joint stereo applies from subband `bound` to 31.

    Attributes:
        bound: First joint-stereo subband (4, 8, 12 or 16)
    """
    bound: int


@dataclass(frozen=True)
class StereoExtension:
    """
    Layer III mode extension.

    Attributes:
        intensity: Intensity stereo on
        ms: Mid/side stereo on
    """
    intensity: bool
    ms: bool


ModeExtension = Union[BandsExtension, StereoExtension]


def _mode_extension(layer: Layer, bits: int) -> ModeExtension:
    # |bits| Layer I & II   | Layer III intensity | Layer III MS |
    # | 00 | bands 4 to 31  | off                 | off          |
    # | 01 | bands 8 to 31  | on                  | off          |
    # | 10 | bands 12 to 31 | off                 | on           |
    # | 11 | bands 16 to 31 | on                  | on           |
    if layer is Layer.LAYER_III:
        return StereoExtension(intensity=bool(bits & 0b01), ms=bool(bits & 0b10))
    return BandsExtension(bound=4 * (bits + 1))


@dataclass(frozen=True)
class FrameHeader:
    """
    Decoded MPEG audio frame header.

    Immutable. Built by parse_header(); the mode_extension variant always
    matches the layer (StereoExtension for layer III, BandsExtension otherwise).

    Attributes:
        version: MPEG version
        layer: Audio layer
        protection: Raw protection bit
        bitrate: Bitrate in kbps, or None for a free-format bitrate
        sampling_rate: Sampling rate in Hz
        padding: Frame carries one extra slot
        private: Application-defined private bit
        mode: Channel mode
        mode_extension: Joint-stereo parameters
        copyright: Copyright bit
        original: Original-media bit
        emphasis: De-emphasis to apply
    """
    version: Version
    layer: Layer
    protection: bool
    bitrate: Optional[int]
    sampling_rate: int
    padding: bool
    private: bool
    mode: Mode
    mode_extension: ModeExtension
    copyright: bool
    original: bool
    emphasis: Emphasis

    def __post_init__(self) -> None:
        expected = StereoExtension if self.layer is Layer.LAYER_III else BandsExtension
        if not isinstance(self.mode_extension, expected):
            raise ValueError(
                f"{self.layer.name} header requires {expected.__name__}, "
                f"got {type(self.mode_extension).__name__}"
            )

    @property
    def free_format(self) -> bool:
        """True when the bitrate is free format (not tabulated)."""
        return self.bitrate is None

    @property
    def samples_per_frame(self) -> int:
        return 384 if self.layer is Layer.LAYER_I else 1152

    @property
    def channels(self) -> int:
        return 1 if self.mode is Mode.MONO else 2

    @property
    def frame_size(self) -> Optional[int]:
        """Frame length in bytes including the header; None for free format."""
        return frame_size(self)

    @property
    def duration(self) -> float:
        """Playback duration of one frame, in seconds."""
        return self.samples_per_frame / self.sampling_rate


def is_sync_word(b1: int, b2: int) -> bool:
    """
    Check if two bytes form a valid MP3 sync word.

    Sync word pattern: b1 == 0xFF and (b2 & 0xE0 == 0xE0)
    """
    return b1 == SYNC_BYTE_1 and (b2 & SYNC_MASK) == SYNC_MASK


def parse_header(data: bytes) -> FrameHeader:
    """
    Parse a 4-byte MPEG audio frame header.

    Fields are decoded in header order and the first invalid one fails the
    whole parse.

    Args:
        data: At least 4 bytes; only the first 4 are read

    Returns:
        FrameHeader

    Raises:
        TruncatedError: If fewer than 4 bytes are given
        BadSyncError: If the sync word is missing
        BadLayerError: If the layer bits are 00
        BadBitrateError: If the bitrate index is 15
        BadSamplingRateError: If the sampling-rate index is 3 or the version is reserved
    """
    if len(data) < HEADER_SIZE:
        raise TruncatedError(
            f"Header must be at least {HEADER_SIZE} bytes, got {len(data)}",
            expected=HEADER_SIZE,
            received=len(data),
        )
    b0, b1, b2, b3 = data[0], data[1], data[2], data[3]

    if not is_sync_word(b0, b1):
        raise BadSyncError(f"Invalid sync word: {b0:02X} {b1:02X}")

    version = Version((b1 >> 3) & 0x03)

    layer_bits = (b1 >> 1) & 0x03
    if layer_bits == 0:
        raise BadLayerError("Reserved layer bits: 00")
    layer = Layer(layer_bits)

    protection = bool(b1 & 0x01)

    bitrate_index = (b2 >> 4) & 0x0F
    if bitrate_index == tables.BAD_BITRATE_INDEX:
        raise BadBitrateError(f"Invalid bitrate index: {bitrate_index}")
    if bitrate_index == tables.FREE_FORMAT_INDEX:
        bitrate = None
    else:
        table = tables.bitrate_table(version is Version.MPEG1, layer.number)
        bitrate = table[bitrate_index]

    sampling_rate_index = (b2 >> 2) & 0x03
    if sampling_rate_index == tables.BAD_SAMPLING_RATE_INDEX:
        raise BadSamplingRateError(f"Invalid sampling-rate index: {sampling_rate_index}")
    if version is Version.RESERVED:
        raise BadSamplingRateError("Reserved MPEG version has no sampling rates")
    sampling_rate = tables.sampling_rate_table(version.number)[sampling_rate_index]

    padding = bool(b2 & 0x02)
    private = bool(b2 & 0x01)

    mode = Mode((b3 >> 6) & 0x03)
    mode_extension = _mode_extension(layer, (b3 >> 4) & 0x03)
    copyright = bool(b3 & 0x08)
    original = bool(b3 & 0x04)
    emphasis = Emphasis(b3 & 0x03)

    return FrameHeader(
        version=version,
        layer=layer,
        protection=protection,
        bitrate=bitrate,
        sampling_rate=sampling_rate,
        padding=padding,
        private=private,
        mode=mode,
        mode_extension=mode_extension,
        copyright=copyright,
        original=original,
        emphasis=emphasis,
    )


def frame_size(header: FrameHeader) -> Optional[int]:
    """
    Compute a frame's length in bytes, header included.

    frame_size = samples_per_frame * (kbps * 1000 // 8) // sampling_rate + padding_bytes
    where padding_bytes is one slot (4 bytes for layer I, 1 byte otherwise)
    when the padding bit is set. All divisions truncate, matching the
    encoder's slot accounting (ISO/IEC 11172-3).

    Args:
        header: Parsed frame header

    Returns:
        Frame size in bytes, or None if the bitrate is free format
    """
    if header.bitrate is None:
        return None

    byte_rate = header.bitrate * 1000 // 8
    base_size = header.samples_per_frame * byte_rate // header.sampling_rate

    if not header.padding:
        return base_size
    return base_size + (4 if header.layer is Layer.LAYER_I else 1)
