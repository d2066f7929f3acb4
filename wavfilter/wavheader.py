"""Reading and writing canonical PCM WAV headers."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

_RIFF = struct.Struct("<4sI4s")
_FMT = struct.Struct("<4sIHHIIHH")
_DATA = struct.Struct("<4sI")

PCM = 1
_BASE_FMT_SIZE = 16


class WavHeaderError(ValueError):
    """Raised when a stream does not start with a usable PCM WAV header."""


@dataclass
class RiffChunk:
    """The RIFF container chunk."""

    chunk_size: int
    chunk_id: bytes = b"RIFF"
    format: bytes = b"WAVE"


@dataclass
class FmtChunk:
    """The ``fmt `` chunk describing the sample layout."""

    audio_format: int
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    chunk_size: int = _BASE_FMT_SIZE
    chunk_id: bytes = b"fmt "
    extra: bytes = b""


@dataclass
class DataChunk:
    """The header of the ``data`` chunk."""

    chunk_size: int
    chunk_id: bytes = b"data"


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    chunk = stream.read(size)
    if len(chunk) != size:
        raise WavHeaderError(f"stream ends inside the {what}")
    return chunk


@dataclass
class WavHeader:
    """A WAV header: RIFF chunk, format chunk and data chunk header."""

    riff: RiffChunk
    fmt: FmtChunk
    data: DataChunk

    @property
    def header_size(self) -> int:
        """Number of bytes the header occupies in a file."""
        return _RIFF.size + _FMT.size + len(self.fmt.extra) + _DATA.size

    @classmethod
    def read(cls, stream: BinaryIO) -> "WavHeader":
        """Read a header, leaving the stream at the first sample byte."""
        chunk_id, chunk_size, form = _RIFF.unpack(
            _read_exact(stream, _RIFF.size, "RIFF chunk")
        )
        riff = RiffChunk(chunk_size=chunk_size, chunk_id=chunk_id, format=form)
        (
            fmt_id,
            fmt_size,
            audio_format,
            num_channels,
            sample_rate,
            byte_rate,
            block_align,
            bits_per_sample,
        ) = _FMT.unpack(_read_exact(stream, _FMT.size, "fmt chunk"))

        if riff.chunk_id != b"RIFF" or riff.format != b"WAVE":
            raise WavHeaderError("not a RIFF/WAVE stream")
        if fmt_id != b"fmt ":
            raise WavHeaderError("missing fmt chunk")
        if audio_format != PCM:
            raise WavHeaderError(f"unsupported audio format {audio_format}")
        if not (bits_per_sample and num_channels and sample_rate and block_align):
            raise WavHeaderError("fmt chunk has zero-valued fields")

        extra = b""
        if fmt_size > _BASE_FMT_SIZE:
            extra = _read_exact(stream, fmt_size - _BASE_FMT_SIZE, "fmt chunk")
        fmt = FmtChunk(
            audio_format=audio_format,
            num_channels=num_channels,
            sample_rate=sample_rate,
            byte_rate=byte_rate,
            block_align=block_align,
            bits_per_sample=bits_per_sample,
            chunk_size=fmt_size,
            chunk_id=fmt_id,
            extra=extra,
        )

        data_id, data_size = _DATA.unpack(
            _read_exact(stream, _DATA.size, "data chunk header")
        )
        if data_id != b"data":
            raise WavHeaderError("data chunk does not follow the fmt chunk")
        if data_size == 0:
            raise WavHeaderError("data chunk is empty")
        return cls(riff=riff, fmt=fmt, data=DataChunk(chunk_size=data_size, chunk_id=data_id))

    def to_bytes(self) -> bytes:
        """Serialise the header."""
        riff, fmt, data = self.riff, self.fmt, self.data
        return b"".join(
            (
                _RIFF.pack(riff.chunk_id, riff.chunk_size, riff.format),
                _FMT.pack(
                    fmt.chunk_id,
                    fmt.chunk_size,
                    fmt.audio_format,
                    fmt.num_channels,
                    fmt.sample_rate,
                    fmt.byte_rate,
                    fmt.block_align,
                    fmt.bits_per_sample,
                ),
                fmt.extra,
                _DATA.pack(data.chunk_id, data.chunk_size),
            )
        )

    def write(self, stream: BinaryIO) -> None:
        """Write the header to ``stream`` and flush it."""
        stream.write(self.to_bytes())
        stream.flush()