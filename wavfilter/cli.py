"""Filter the samples of a PCM WAV file through a cascade of biquads."""

from __future__ import annotations

import argparse
import math
import sys
from collections.abc import Sequence
from dataclasses import replace
from typing import BinaryIO

from wavfilter.iir import BiquadCascade
from wavfilter.wavheader import WavHeader, WavHeaderError

BLOCK_SIZE = 16
MAX_NUM_CHANNELS = 8

# Two second-order sections, laid out as (a0, a1, a2, b0, b1, b2).
DEFAULT_COEFFICIENTS: tuple[tuple[float, ...], ...] = (
    (1.5552e-05, 3.1104e-05, 1.5552e-05, 1.0, -1.7695, 0.7848),
    (1.0000, 2.0000, 1.0000, 1.0, -1.8886, 0.9049),
)

_SAMPLE_SCALE = float(1 << 31)
_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1


def _wrap_int32(value: int) -> int:
    return (value - _INT32_MIN) % (1 << 32) + _INT32_MIN


def _decode(raw: bytes, shift: int) -> float:
    value = int.from_bytes(raw, "little", signed=True)
    return _wrap_int32(value << shift) / _SAMPLE_SCALE


def _encode(value: float, shift: int, width: int) -> bytes:
    scaled = min(max(math.trunc(value * _SAMPLE_SCALE), _INT32_MIN), _INT32_MAX)
    sample = scaled >> shift
    return (sample & ((1 << (8 * width)) - 1)).to_bytes(width, "little")


def _processed_frames(total: int) -> int:
    """Frames handled by the block loop.

    When the frame count is an exact multiple of the block size the final
    block comes out empty, so its frames are neither read nor written.
    """
    if total and total % BLOCK_SIZE == 0:
        return total - BLOCK_SIZE
    return total


def _output_header(header: WavHeader) -> WavHeader:
    channels = header.fmt.num_channels
    fmt = replace(
        header.fmt,
        byte_rate=header.fmt.byte_rate // channels * channels,
        block_align=header.fmt.block_align // channels * channels,
    )
    data = replace(header.data, chunk_size=header.data.chunk_size // channels * channels)
    return WavHeader(riff=replace(header.riff), fmt=fmt, data=data)


def filter_stream(
    source: BinaryIO,
    destination: BinaryIO,
    coefficients: Sequence[Sequence[float]] = DEFAULT_COEFFICIENTS,
) -> WavHeader:
    """Filter every channel of the WAV in ``source`` into ``destination``.

    Returns the header written to ``destination``.
    """
    header = WavHeader.read(source)
    channels = header.fmt.num_channels
    bits = header.fmt.bits_per_sample
    if channels > MAX_NUM_CHANNELS:
        raise ValueError(
            f"at most {MAX_NUM_CHANNELS} channels are supported, got {channels}"
        )
    if not 8 <= bits <= 32:
        raise ValueError(f"unsupported sample width of {bits} bits")

    out_header = _output_header(header)
    out_header.write(destination)

    width = bits // 8
    shift = 32 - bits
    frame_size = channels * width
    total = header.data.chunk_size // frame_size
    filters = [BiquadCascade(coefficients) for _ in range(channels)]

    for _ in range(_processed_frames(total)):
        frame = source.read(frame_size)
        if len(frame) != frame_size:
            raise EOFError("stream ends inside the sample data")
        destination.write(
            b"".join(
                _encode(cascade.process(_decode(frame[pos:pos + width], shift)), shift, width)
                for cascade, pos in zip(filters, range(0, frame_size, width))
            )
        )
    destination.flush()
    return out_header


def filter_file(
    input_path: str,
    output_path: str,
    coefficients: Sequence[Sequence[float]] = DEFAULT_COEFFICIENTS,
) -> WavHeader:
    """Filter the WAV file at ``input_path`` into ``output_path``."""
    with open(input_path, "rb") as source, open(output_path, "wb") as destination:
        return filter_stream(source, destination, coefficients)


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        description="Filter a PCM WAV file through an IIR biquad cascade."
    )
    parser.add_argument("input", help="input WAV file")
    parser.add_argument("output", help="output WAV file")
    args = parser.parse_args(argv)
    try:
        filter_file(args.input, args.output)
    except OSError as exc:
        print(f"Cannot open file {exc.filename}", file=sys.stderr)
        return 1
    except (WavHeaderError, ValueError, EOFError) as exc:
        print(f"{args.input}: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())