"""
Byte sources for mpegscan.

Provides the ByteSource interface and its implementations (StreamSource, BufferSource).
"""

from mpegscan.sources.base import ByteSource
from mpegscan.sources.buffer_source import BufferSource
from mpegscan.sources.stream_source import StreamSource

__all__ = [
    "ByteSource",
    "BufferSource",
    "StreamSource",
]
