"""
Metadata tag stripping.

Finds where frame data starts and ends in a whole-file buffer by skipping a
leading ID3v2 tag or dropping a trailing ID3v1 tag. Tag contents are never
parsed; only the tag block's length matters.
"""

from __future__ import annotations

import logging
from typing import Union

from mpegscan.errors import TagNotFoundError, TruncatedError

logger = logging.getLogger(__name__)

ID3V2_MARKER = b"ID3"
ID3V2_HEADER_SIZE = 10
ID3V1_MARKER = b"TAG"
ID3V1_SIZE = 128

Buffer = Union[bytes, bytearray, memoryview]


def synchsafe_to_int(data: Buffer) -> int:
    """
    Decode a big-endian synchsafe integer (7 usable bits per byte).

    Args:
        data: Size bytes, most significant first

    Returns:
        Decoded integer
    """
    value = 0
    for byte in data:
        value = (value << 7) | (byte & 0x7F)
    return value


def strip_tag(buffer: Buffer) -> memoryview:
    """
    Return the part of buffer holding frame data, without its metadata tag.

    A leading "ID3" marker takes precedence: the view starts after the 10-byte
    tag header and the synchsafe tag size stored at bytes 6-9. Otherwise, if
    the last 128 bytes start with "TAG", the view ends before them.

    The returned memoryview shares memory with buffer; nothing is copied.

    Args:
        buffer: Whole-file bytes

    Returns:
        View over the frame data

    Raises:
        TagNotFoundError: If neither tag is present
        TruncatedError: If an ID3v2 tag header or body runs past the end of buffer
    """
    view = memoryview(buffer)
    length = len(view)

    if view[:3] == ID3V2_MARKER:
        if length < ID3V2_HEADER_SIZE:
            raise TruncatedError(
                f"ID3v2 header needs {ID3V2_HEADER_SIZE} bytes, buffer has {length}",
                expected=ID3V2_HEADER_SIZE,
                received=length,
            )
        tag_size = synchsafe_to_int(view[6:10])
        start = ID3V2_HEADER_SIZE + tag_size
        if start > length:
            raise TruncatedError(
                f"ID3v2 tag declares {tag_size} bytes, buffer has {length - ID3V2_HEADER_SIZE}",
                expected=start,
                received=length,
            )
        logger.debug("Skipping %d-byte ID3v2 tag", start)
        return view[start:]

    if has_id3v1_trailer(view):
        logger.debug("Dropping %d-byte ID3v1 trailer", ID3V1_SIZE)
        return view[:length - ID3V1_SIZE]

    raise TagNotFoundError("No ID3v2 header or ID3v1 trailer found")


def has_id3v1_trailer(buffer: Buffer) -> bool:
    """True if the last 128 bytes of buffer start with "TAG"."""
    view = memoryview(buffer)
    length = len(view)
    return length >= ID3V1_SIZE and view[length - ID3V1_SIZE:length - ID3V1_SIZE + 3] == ID3V1_MARKER


def strip_trailer(buffer: Buffer) -> memoryview:
    """
    Drop an ID3v1 trailer if buffer ends with one.

    Meant for the frame data left after strip_tag() skipped a leading ID3v2
    tag, since files often carry both tags.

    Args:
        buffer: Frame data, possibly followed by an ID3v1 trailer

    Returns:
        View over buffer without the trailer (the whole buffer if there is none)
    """
    view = memoryview(buffer)
    if has_id3v1_trailer(view):
        logger.debug("Dropping %d-byte ID3v1 trailer after ID3v2 tag", ID3V1_SIZE)
        return view[:len(view) - ID3V1_SIZE]
    return view
