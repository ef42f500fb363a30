"""Decoder for RIFF/WAVE files holding PCM integer or 32-bit float samples."""

from __future__ import annotations

import enum
import io
import math
import struct
from dataclasses import dataclass

from .sample import SampleFormat
from .source import SeekError, Source

_FORMAT_PCM = 0x0001
_FORMAT_IEEE_FLOAT = 0x0003
_FORMAT_EXTENSIBLE = 0xFFFE


class NotWaveError(ValueError):
    """Raised when the data is not a WAVE stream this decoder can read."""


class _Encoding(enum.Enum):
    INT = "int"
    FLOAT = "float"


@dataclass(frozen=True)
class _WavHeader:
    encoding: _Encoding
    channels: int
    sample_rate: int
    bits_per_sample: int
    container_bytes: int
    data_start: int
    data_len: int

    @property
    def num_samples(self):
        return self.data_len // self.container_bytes


def _wrap_i16(value):
    return ((value + 32768) % 65536) - 32768


def f32_to_i16(value):
    """Scale a float sample in [-1.0, 1.0] to 16 bits, clipping anything louder."""
    if math.isnan(value):
        return 0
    clamped = max(-1.0, min(1.0, value))
    return int(clamped * 32767.0)


def i8_to_i16(value):
    """Scale an 8-bit sample to 16 bits."""
    return value * 256


def i24_to_i16(value):
    """Reduce a 24-bit sample to 16 bits by dropping the low byte."""
    return _wrap_i16(value >> 8)


def i32_to_i16(value):
    """Reduce a 32-bit sample to 16 bits by dropping the low two bytes."""
    return _wrap_i16(value >> 16)


def _parse_fmt(body):
    if len(body) < 16:
        raise NotWaveError("fmt chunk is too short")
    tag, channels, sample_rate, _byte_rate, block_align, bits = struct.unpack(
        "<HHIIHH", body[:16]
    )
    if tag == _FORMAT_EXTENSIBLE:
        if len(body) < 40:
            raise NotWaveError("extensible fmt chunk is too short")
        valid_bits = struct.unpack("<H", body[18:20])[0]
        tag = struct.unpack("<H", body[24:26])[0]
        if valid_bits:
            bits = valid_bits

    if tag == _FORMAT_PCM:
        encoding = _Encoding.INT
    elif tag == _FORMAT_IEEE_FLOAT:
        encoding = _Encoding.FLOAT
    else:
        raise NotWaveError(f"unsupported format tag {tag:#06x}")

    if channels == 0:
        raise NotWaveError("zero channels")
    if sample_rate == 0:
        raise NotWaveError("zero sample rate")
    if block_align == 0 or block_align % channels:
        raise NotWaveError("invalid block alignment")
    container = block_align // channels
    if bits == 0 or bits > container * 8 or bits > 32:
        raise NotWaveError("invalid bits per sample")
    if encoding is _Encoding.FLOAT and bits != 32:
        raise NotWaveError("only 32-bit float samples are supported")
    return encoding, channels, sample_rate, bits, container


def _read_header(stream):
    head = stream.read(12)
    if len(head) < 12 or head[:4] != b"RIFF" or head[8:12] != b"WAVE":
        raise NotWaveError("missing RIFF/WAVE header")

    fmt = None
    while True:
        chunk = stream.read(8)
        if len(chunk) < 8:
            raise NotWaveError("no data chunk found")
        chunk_id, size = struct.unpack("<4sI", chunk)
        if chunk_id == b"fmt ":
            body = stream.read(size)
            if len(body) < size:
                raise NotWaveError("truncated fmt chunk")
            fmt = _parse_fmt(body)
            if size & 1:
                stream.read(1)
        elif chunk_id == b"data":
            if fmt is None:
                raise NotWaveError("data chunk before fmt chunk")
            encoding, channels, sample_rate, bits, container = fmt
            return _WavHeader(
                encoding=encoding,
                channels=channels,
                sample_rate=sample_rate,
                bits_per_sample=bits,
                container_bytes=container,
                data_start=stream.tell(),
                data_len=size,
            )
        else:
            stream.seek(size + (size & 1), io.SEEK_CUR)


def is_wave(data):
    """Tell whether ``data`` holds a WAVE stream, leaving its position unchanged."""
    position = data.tell()
    try:
        _read_header(data)
    except (NotWaveError, OSError, struct.error):
        return False
    finally:
        data.seek(position)
    return True


class WavDecoder(Source):
    """Source of 16-bit samples decoded from a seekable binary WAVE stream."""

    sample_format = SampleFormat.I16

    def __init__(self, data):
        position = data.tell()
        try:
            header = _read_header(data)
        except (NotWaveError, OSError, struct.error) as exc:
            data.seek(position)
            if isinstance(exc, NotWaveError):
                raise
            raise NotWaveError(str(exc)) from exc

        self._stream = data
        self._header = header
        self._len = header.num_samples
        self._samples_read = 0
        micros = (1_000_000 * self._len) // (header.sample_rate * header.channels)
        self._total_duration = micros / 1_000_000

    def _read_int(self):
        header = self._header
        size = header.container_bytes
        raw = self._stream.read(size)
        if len(raw) < size:
            return 0
        if size == 1:
            return raw[0] - 128
        value = int.from_bytes(raw, "little", signed=False)
        bits = header.bits_per_sample
        value &= (1 << bits) - 1
        if value >= 1 << (bits - 1):
            value -= 1 << bits
        return value

    def _read_float(self):
        size = self._header.container_bytes
        raw = self._stream.read(size)
        if len(raw) < 4:
            return 0.0
        return struct.unpack("<f", raw[:4])[0]

    def __next__(self):
        header = self._header
        spec = (header.encoding, header.bits_per_sample)
        if spec == (_Encoding.FLOAT, 32):
            convert, read = f32_to_i16, self._read_float
        elif spec == (_Encoding.INT, 8):
            convert, read = i8_to_i16, self._read_int
        elif spec == (_Encoding.INT, 16):
            convert, read = (lambda value: value), self._read_int
        elif spec == (_Encoding.INT, 24):
            convert, read = i24_to_i16, self._read_int
        elif spec == (_Encoding.INT, 32):
            convert, read = i32_to_i16, self._read_int
        else:
            raise ValueError(
                f"unsupported wav spec: {header.encoding.value}, {header.bits_per_sample}"
            )

        if self._samples_read >= self._len:
            raise StopIteration
        self._samples_read += 1
        return convert(read())

    def current_frame_len(self):
        return None

    def channels(self):
        return self._header.channels

    def sample_rate(self):
        return self._header.sample_rate

    def total_duration(self):
        return self._total_duration

    def size_hint(self):
        remaining = max(self._len - self._samples_read, 0)
        return (remaining, remaining)

    def seek(self, pos):
        """Jump to ``pos`` seconds, saturating at the end and keeping the channel order."""
        header = self._header
        file_frames = self._len // header.channels

        target = pos * header.sample_rate
        target = 0 if math.isnan(target) else max(0, int(target))
        target = min(target, file_frames)

        to_skip = self._samples_read % header.channels
        try:
            self._stream.seek(
                header.data_start + target * header.channels * header.container_bytes
            )
        except OSError as exc:
            raise SeekError(f"wav seek failed: {exc}") from exc
        self._samples_read = target * header.channels

        for _ in range(to_skip):
            next(self, None)

    def into_inner(self):
        """The underlying stream."""
        return self._stream