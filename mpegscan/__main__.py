#!/usr/bin/env python3
"""
mpegscan command-line entry point.

Lists every frame header in an MP3 file: python3 -m mpegscan song.mp3

Exit codes:
    0: clean end of stream (or frame limit reached)
    1: the stream stopped on a scan error (bad header, truncation, free format, I/O)
    2: usage, configuration or tag error
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from mpegscan.audio.frame_reader import Frame, FrameReader
from mpegscan.audio.tag import ID3V2_MARKER, strip_tag, strip_trailer
from mpegscan.config import ScanConfig, load_config
from mpegscan.errors import ScanError, TagNotFoundError, TruncatedError
from mpegscan.sources.buffer_source import BufferSource

logger = logging.getLogger("mpegscan")

EXIT_OK = 0
EXIT_SCAN_ERROR = 1
EXIT_USAGE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mpegscan",
        description="List the MPEG audio frames in an MP3 file",
    )
    parser.add_argument("path", help="MP3 file to scan")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Stop after this many frames (overrides MPEGSCAN_MAX_FRAMES)",
    )
    parser.add_argument(
        "--require-tag",
        action="store_true",
        help="Fail if the file has no ID3v2 or ID3v1 tag (overrides MPEGSCAN_TAG_POLICY)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (overrides MPEGSCAN_LOG_LEVEL)",
    )
    return parser


def format_frame(index: int, frame: Frame) -> str:
    """Render one frame as a listing line."""
    header = frame.header
    return (
        f"{index:6d}  @{frame.offset:<10d} "
        f"MPEG-{header.version.number} {header.layer.name:<9s} "
        f"{header.bitrate:>3d} kbps {header.sampling_rate:>5d} Hz "
        f"{header.mode.name:<12s} {len(frame):>5d} bytes"
    )


def scan(data: bytes, config: ScanConfig, out: TextIO) -> int:
    """
    Strip the tag from data, list its frames on out and print a summary.

    Args:
        data: Whole-file bytes
        config: Effective configuration
        out: Text stream for the listing

    Returns:
        Exit code
    """
    try:
        frame_data = strip_tag(data)
        if data[:3] == ID3V2_MARKER:
            frame_data = strip_trailer(frame_data)
    except TagNotFoundError:
        if config.require_tag:
            logger.error("No ID3 tag found and tag policy is 'require'")
            return EXIT_USAGE
        logger.info("No ID3 tag found, scanning whole file")
        frame_data = memoryview(data)
    except TruncatedError as e:
        logger.error(f"Malformed ID3 tag: {e}")
        return EXIT_USAGE

    reader = FrameReader(BufferSource(frame_data))
    total_bits = 0
    total_seconds = 0.0
    exit_code = EXIT_OK

    try:
        for frame in reader:
            out.write(format_frame(reader.frames_read, frame) + "\n")
            total_bits += len(frame) * 8
            total_seconds += frame.header.duration
            if config.max_frames is not None and reader.frames_read >= config.max_frames:
                logger.info("Frame limit %d reached", config.max_frames)
                break
    except ScanError as e:
        out.write(f"error: {e}\n")
        exit_code = EXIT_SCAN_ERROR

    average_kbps = total_bits / total_seconds / 1000 if total_seconds else 0.0
    out.write(
        f"{reader.frames_read} frames, {total_seconds:.3f} s, "
        f"{average_kbps:.1f} kbps average\n"
    )
    return exit_code


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        config = load_config()
    except ValueError:
        return EXIT_USAGE

    if args.log_level is not None:
        config.log_level = args.log_level
    if args.limit is not None:
        config.max_frames = args.limit
    if args.require_tag:
        config.tag_policy = "require"

    try:
        config.validate()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_USAGE

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    try:
        with open(args.path, "rb") as f:
            data = f.read()
    except OSError as e:
        logger.error(f"Cannot read {args.path}: {e}")
        return EXIT_USAGE

    return scan(data, config, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())
