"""Decoding of audio files into sources of 16-bit samples."""

from __future__ import annotations

import enum
import io

from .sample import SampleFormat
from .source import SeekNotSupported, Source
from .wav import NotWaveError, WavDecoder


class DecoderError(Exception):
    """Raised when a decoder cannot be created."""


class UnrecognizedFormat(DecoderError):
    """Raised when the format of the data is not recognised."""

    def __init__(self):
        super().__init__("Unrecognized format")


class Mp4Type(enum.Enum):
    """The file extensions of the MP4 container family."""

    MP4 = "mp4"
    M4A = "m4a"
    M4P = "m4p"
    M4B = "m4b"
    M4R = "m4r"
    M4V = "m4v"
    MOV = "mov"

    @classmethod
    def parse(cls, text):
        """Parse an extension, ignoring case."""
        try:
            return cls(text.lower())
        except ValueError:
            raise ValueError(f"{text} is not a valid mp4 extension") from None

    def __str__(self):
        return self.value


def _open_inner(data):
    try:
        return WavDecoder(data)
    except NotWaveError:
        raise UnrecognizedFormat() from None


class Decoder(Source):
    """Source of samples decoded from a seekable binary stream.

    The format is detected automatically; WAVE is supported.
    """

    sample_format = SampleFormat.I16

    def __init__(self, data):
        self._inner = _open_inner(data)

    @classmethod
    def new_wav(cls, data):
        """Build a decoder that only accepts WAVE data."""
        return cls(data)

    @classmethod
    def new_looped(cls, data):
        """Build a decoder that starts again from the beginning when it ends."""
        return LoopedDecoder(cls(data))

    def __next__(self):
        return next(self._inner)

    def current_frame_len(self):
        return self._inner.current_frame_len()

    def channels(self):
        return self._inner.channels()

    def sample_rate(self):
        return self._inner.sample_rate()

    def total_duration(self):
        return self._inner.total_duration()

    def size_hint(self):
        return self._inner.size_hint()

    def seek(self, pos):
        self._inner.seek(pos)


class LoopedDecoder(Source):
    """A decoder that never ends: it restarts from the beginning of its stream."""

    sample_format = SampleFormat.I16

    def __init__(self, decoder):
        self._inner = decoder._inner

    def __next__(self):
        inner = self._inner
        if inner is None:
            raise StopIteration
        sample = next(inner, None)
        if sample is not None:
            return sample

        self._inner = None
        reader = inner.into_inner()
        try:
            reader.seek(0, io.SEEK_SET)
            restarted = WavDecoder(reader)
        except (OSError, NotWaveError):
            raise StopIteration from None
        self._inner = restarted
        sample = next(restarted, None)
        if sample is None:
            raise StopIteration
        return sample

    def current_frame_len(self):
        if self._inner is None:
            return 0
        return self._inner.current_frame_len()

    def channels(self):
        if self._inner is None:
            return 0
        return self._inner.channels()

    def sample_rate(self):
        if self._inner is None:
            return 1
        return self._inner.sample_rate()

    def total_duration(self):
        return None

    def size_hint(self):
        if self._inner is None:
            return (0, None)
        return self._inner.size_hint()

    def seek(self, pos):
        if self._inner is None:
            raise SeekNotSupported("DecoderImpl::None")
        self._inner.seek(pos)