"""
Shared pytest fixtures for mpegscan contract tests.

Builders live in mpegscan.tests.contracts._builders.
"""
import pytest

from mpegscan.tests.contracts._builders import VERSION_MPEG2, build_frame, build_header, build_stream


@pytest.fixture
def header_128k_44k():
    """FF FB 90 00: MPEG-1 Layer III, 128 kbps, 44100 Hz, no padding, stereo."""
    return bytes([0xFF, 0xFB, 0x90, 0x00])


@pytest.fixture
def frame_128k_44k(header_128k_44k):
    """Standard 417-byte frame (144 * 128000 / 44100 = 417.96, truncated)."""
    return build_frame(header_128k_44k, payload_seed=42)


@pytest.fixture
def mixed_stream():
    """Five frames with varying bitrate, sample rate and padding (VBR-like)."""
    headers = [
        build_header(bitrate_index=9),
        build_header(bitrate_index=9, padding=1),
        build_header(bitrate_index=14, sampling_rate_index=1),
        build_header(bitrate_index=1, sampling_rate_index=2, mode=3),
        build_header(version_bits=VERSION_MPEG2, bitrate_index=8, sampling_rate_index=1),
    ]
    return headers, build_stream(headers)
