"""
Contract tests for FrameReader.

Covers clean end of stream, frame-by-frame reading of mixed streams,
truncation, I/O failure, invalid headers and free-format frames, and the
terminal EXHAUSTED state.
"""

import io
import logging

import pytest

from mpegscan.tests.contracts._builders import build_header, build_id3v2_tag, build_stream
from mpegscan.audio.frame_reader import Frame, FrameReader, ReaderState
from mpegscan.audio.header import HEADER_SIZE, Layer, parse_header
from mpegscan.audio.tag import strip_tag
from mpegscan.errors import (
    BadSyncError,
    FrameIOError,
    InvalidHeaderError,
    ScanError,
    TruncatedError,
    UnsupportedFreeFormatError,
)
from mpegscan.sources.base import ByteSource
from mpegscan.sources.buffer_source import BufferSource


class TrickleSource(ByteSource):
    """Delivers at most `step` bytes per read() call."""

    def __init__(self, data: bytes, step: int = 3) -> None:
        self._data = data
        self._pos = 0
        self._step = step
        self.reads = 0

    def read(self, size: int) -> bytes:
        self.reads += 1
        end = min(self._pos + min(size, self._step), len(self._data))
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk


class FailingSource(ByteSource):
    """Serves `data`, then raises OSError instead of reporting end of stream."""

    def __init__(self, data: bytes) -> None:
        self._inner = BufferSource(data)
        self.reads_after_failure = 0
        self._failed = False

    def read(self, size: int) -> bytes:
        if self._failed:
            self.reads_after_failure += 1
        chunk = self._inner.read(size)
        if not chunk:
            self._failed = True
            raise OSError("device unplugged")
        return chunk


class TestEndToEnd:

    def test_n_frames_then_none(self, mixed_stream):
        headers, data = mixed_stream
        reader = FrameReader(BufferSource(data))

        frames = []
        for _ in headers:
            frame = reader.next_frame()
            assert frame is not None
            frames.append(frame)

        assert reader.next_frame() is None
        assert reader.exhausted
        assert reader.frames_read == len(headers)
        assert reader.bytes_consumed == len(data)
        assert sum(len(f) for f in frames) == len(data)

    def test_headers_and_payloads_match_stream(self, mixed_stream):
        headers, data = mixed_stream
        frames = list(FrameReader(BufferSource(data)))

        assert [f.header for f in frames] == [parse_header(h) for h in headers]
        rebuilt = b"".join(h + f.payload for h, f in zip(headers, frames))
        assert rebuilt == data

    def test_offsets_are_frame_starts(self, mixed_stream):
        _, data = mixed_stream
        frames = list(FrameReader(BufferSource(data)))

        expected = 0
        for frame in frames:
            assert frame.offset == expected
            assert data[frame.offset] == 0xFF
            expected += len(frame)

    def test_payload_length_is_frame_size_minus_header(self, frame_128k_44k):
        frame = FrameReader(BufferSource(frame_128k_44k)).next_frame()

        assert len(frame.payload) == 417 - HEADER_SIZE
        assert len(frame) == 417
        assert frame.payload == frame_128k_44k[4:]

    def test_empty_stream(self):
        reader = FrameReader(BufferSource(b""))

        assert reader.next_frame() is None
        assert reader.state is ReaderState.EXHAUSTED
        assert reader.frames_read == 0

    def test_after_tag_strip(self, mixed_stream):
        headers, data = mixed_stream
        buffer = build_id3v2_tag(64) + data

        frames = list(FrameReader(BufferSource(strip_tag(buffer))))
        assert len(frames) == len(headers)

    def test_layer1_and_layer2_frames(self):
        headers = [
            build_header(layer_bits=0b11, bitrate_index=4, padding=1),
            build_header(layer_bits=0b10, bitrate_index=10),
            build_header(layer_bits=0b11, bitrate_index=14),
        ]
        frames = list(FrameReader(BufferSource(build_stream(headers))))

        assert [f.header.layer for f in frames] == [Layer.LAYER_I, Layer.LAYER_II, Layer.LAYER_I]
        assert len(frames[0]) == 143

    def test_short_reads_are_reassembled(self, mixed_stream):
        headers, data = mixed_stream
        source = TrickleSource(data, step=7)
        frames = list(FrameReader(source))

        assert len(frames) == len(headers)
        assert source.reads > len(headers) * 2

    def test_accepts_binary_file_object(self, mixed_stream):
        headers, data = mixed_stream
        frames = list(FrameReader(io.BytesIO(data)))

        assert len(frames) == len(headers)

    def test_reads_real_file(self, tmp_path, mixed_stream):
        headers, data = mixed_stream
        path = tmp_path / "stream.mp3"
        path.write_bytes(data)

        with open(path, "rb") as f:
            frames = list(FrameReader(f))

        assert len(frames) == len(headers)


class TestTruncation:

    @pytest.mark.parametrize("leftover", [1, 2, 3])
    def test_leftover_bytes_after_last_frame(self, frame_128k_44k, leftover):
        data = frame_128k_44k * 2 + b"\xFF\xFB\x90"[:leftover]
        reader = FrameReader(BufferSource(data))

        assert reader.next_frame() is not None
        assert reader.next_frame() is not None
        with pytest.raises(TruncatedError) as exc_info:
            reader.next_frame()
        assert exc_info.value.expected == 4
        assert exc_info.value.received == leftover
        assert reader.exhausted

    def test_two_leftover_bytes_is_not_clean_eof(self, frame_128k_44k):
        reader = FrameReader(BufferSource(frame_128k_44k + b"\x00\x00"))

        reader.next_frame()
        with pytest.raises(TruncatedError):
            reader.next_frame()

    def test_payload_cut_short(self, frame_128k_44k):
        reader = FrameReader(BufferSource(frame_128k_44k[:-10]))

        with pytest.raises(TruncatedError) as exc_info:
            reader.next_frame()
        assert exc_info.value.expected == 413
        assert exc_info.value.received == 403

    def test_truncated_is_a_scan_error(self):
        with pytest.raises(ScanError):
            FrameReader(BufferSource(b"\xFF")).next_frame()


class TestInvalidInput:

    def test_bad_header_is_not_resynchronized(self, frame_128k_44k):
        data = frame_128k_44k + b"\x00junk" + frame_128k_44k
        reader = FrameReader(BufferSource(data))

        assert reader.next_frame() is not None
        with pytest.raises(InvalidHeaderError) as exc_info:
            reader.next_frame()

        assert isinstance(exc_info.value.reason, BadSyncError)
        assert exc_info.value.__cause__ is exc_info.value.reason
        assert exc_info.value.offset == len(frame_128k_44k)
        assert reader.next_frame() is None

    def test_free_format_is_recoverable_error(self, frame_128k_44k):
        free = build_header(bitrate_index=0) + b"\x00" * 100
        reader = FrameReader(BufferSource(frame_128k_44k + free))

        assert reader.next_frame() is not None
        with pytest.raises(UnsupportedFreeFormatError) as exc_info:
            reader.next_frame()

        assert exc_info.value.header.free_format
        assert exc_info.value.offset == 417
        assert reader.exhausted

    def test_io_failure_wrapped(self, frame_128k_44k):
        reader = FrameReader(FailingSource(frame_128k_44k))

        assert reader.next_frame() is not None
        with pytest.raises(FrameIOError) as exc_info:
            reader.next_frame()
        assert isinstance(exc_info.value.__cause__, OSError)
        assert reader.exhausted


class TestExhaustedState:

    def test_calls_after_error_return_none_without_reading(self, frame_128k_44k):
        source = FailingSource(frame_128k_44k)
        reader = FrameReader(source)
        reader.next_frame()
        with pytest.raises(FrameIOError):
            reader.next_frame()

        for _ in range(3):
            assert reader.next_frame() is None
        assert source.reads_after_failure == 0

    def test_closed_stream_exhausts_reader(self, frame_128k_44k):
        stream = io.BytesIO(frame_128k_44k * 2)
        reader = FrameReader(stream)
        assert reader.next_frame() is not None

        stream.close()
        with pytest.raises(ValueError):
            reader.next_frame()

        assert reader.state is ReaderState.EXHAUSTED
        assert reader.next_frame() is None

    def test_calls_after_eof_keep_returning_none(self, frame_128k_44k):
        reader = FrameReader(BufferSource(frame_128k_44k))
        list(reader)

        assert reader.next_frame() is None
        assert reader.next_frame() is None
        assert list(reader) == []

    def test_initial_state_is_scanning(self):
        reader = FrameReader(BufferSource(b""))
        assert reader.state is ReaderState.SCANNING
        assert not reader.exhausted

    def test_iteration_propagates_errors(self, frame_128k_44k):
        reader = FrameReader(BufferSource(frame_128k_44k + b"\xFF"))
        seen = []
        with pytest.raises(TruncatedError):
            for frame in reader:
                seen.append(frame)
        assert len(seen) == 1


class TestLogging:

    def test_logs_end_of_stream(self, frame_128k_44k, caplog):
        with caplog.at_level(logging.INFO, logger="mpegscan.audio.frame_reader"):
            list(FrameReader(BufferSource(frame_128k_44k)))

        assert "End of stream: 1 frames, 417 bytes" in caplog.text

    def test_logs_warning_on_error(self, caplog):
        with caplog.at_level(logging.WARNING, logger="mpegscan.audio.frame_reader"):
            with pytest.raises(InvalidHeaderError):
                FrameReader(BufferSource(b"\x00\x00\x00\x00")).next_frame()

        records = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(records) == 1
        assert "offset 0" in records[0].getMessage()


class TestFrame:

    def test_frame_is_immutable(self, frame_128k_44k):
        frame = FrameReader(BufferSource(frame_128k_44k)).next_frame()
        with pytest.raises(AttributeError):
            frame.payload = b""

    def test_frame_equality(self, frame_128k_44k):
        a = FrameReader(BufferSource(frame_128k_44k)).next_frame()
        b = Frame(header=parse_header(frame_128k_44k), payload=frame_128k_44k[4:], offset=0)
        assert a == b
