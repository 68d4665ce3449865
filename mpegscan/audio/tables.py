"""
MPEG audio lookup tables.

Bitrates (kbps) and sampling rates (Hz) from ISO/IEC 11172-3 and 13818-3.
Pure data plus the two selectors the header codec uses to pick a table.
"""

from __future__ import annotations

from typing import Tuple

# Bitrate tables, indexed by the 4-bit bitrate index from header byte 2.
# Index 0 is free format (no tabulated value); index 15 is invalid and
# not present.
#
# |bits| V1,L1 | V1,L2 | V1,L3 | V2,L1 | V2,L2&L3 |
# |0001|  32   |  32   |  32   |  32   |    8     |
# |0010|  64   |  48   |  40   |  48   |   16     |
# |0011|  96   |  56   |  48   |  56   |   24     |
# |0100| 128   |  64   |  56   |  64   |   32     |
# |0101| 160   |  80   |  64   |  80   |   40     |
# |0110| 192   |  96   |  80   |  96   |   48     |
# |0111| 224   | 112   |  96   | 112   |   56     |
# |1000| 256   | 128   | 112   | 128   |   64     |
# |1001| 288   | 160   | 128   | 144   |   80     |
# |1010| 320   | 192   | 160   | 160   |   96     |
# |1011| 352   | 224   | 192   | 176   |  112     |
# |1100| 384   | 256   | 224   | 192   |  128     |
# |1101| 416   | 320   | 256   | 224   |  144     |
# |1110| 448   | 384   | 320   | 256   |  160     |
BITRATE_MPEG1_L1: Tuple[int, ...] = (0, 32, 64, 96, 128, 160, 192, 224, 256, 288, 320, 352, 384, 416, 448)
BITRATE_MPEG1_L2: Tuple[int, ...] = (0, 32, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320, 384)
BITRATE_MPEG1_L3: Tuple[int, ...] = (0, 32, 40, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320)
BITRATE_MPEG2_L1: Tuple[int, ...] = (0, 32, 48, 56, 64, 80, 96, 112, 128, 144, 160, 176, 192, 224, 256)
BITRATE_MPEG2_L23: Tuple[int, ...] = (0, 8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160)

BITRATE_TABLES: Tuple[Tuple[int, ...], ...] = (
    BITRATE_MPEG1_L1,
    BITRATE_MPEG1_L2,
    BITRATE_MPEG1_L3,
    BITRATE_MPEG2_L1,
    BITRATE_MPEG2_L23,
)

FREE_FORMAT_INDEX = 0
BAD_BITRATE_INDEX = 15

# Sampling rates (Hz), indexed by the 2-bit index from header byte 2.
# Index 3 is reserved.
SAMPLING_RATE_MPEG1: Tuple[int, ...] = (44100, 48000, 32000)
SAMPLING_RATE_MPEG2: Tuple[int, ...] = (22050, 24000, 16000)
SAMPLING_RATE_MPEG2_5: Tuple[int, ...] = (11025, 12000, 8000)

SAMPLING_RATE_TABLES: Tuple[Tuple[int, ...], ...] = (
    SAMPLING_RATE_MPEG1,
    SAMPLING_RATE_MPEG2,
    SAMPLING_RATE_MPEG2_5,
)

BAD_SAMPLING_RATE_INDEX = 3


def bitrate_table(mpeg1: bool, layer: int) -> Tuple[int, ...]:
    """
    Select the bitrate table for a version/layer pair.

    Args:
        mpeg1: True for MPEG-1; MPEG-2 and MPEG-2.5 share the other tables
        layer: Layer number (1, 2 or 3)

    Returns:
        The 15-entry bitrate table

    Raises:
        ValueError: If layer is not 1, 2 or 3
    """
    if layer not in (1, 2, 3):
        raise ValueError(f"Invalid layer number: {layer}")
    if mpeg1:
        return BITRATE_TABLES[layer - 1]
    if layer == 1:
        return BITRATE_MPEG2_L1
    return BITRATE_MPEG2_L23


def sampling_rate_table(version_number: float) -> Tuple[int, ...]:
    """
    Select the sampling-rate table for an MPEG version (1, 2 or 2.5).

    Raises:
        ValueError: For any other version, including the reserved one
    """
    if version_number == 1:
        return SAMPLING_RATE_MPEG1
    if version_number == 2:
        return SAMPLING_RATE_MPEG2
    if version_number == 2.5:
        return SAMPLING_RATE_MPEG2_5
    raise ValueError(f"No sampling-rate table for MPEG version {version_number}")
