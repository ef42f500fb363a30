"""The base interface shared by every stream of audio samples."""

from __future__ import annotations

import abc


class SeekError(Exception):
    """Raised when a source fails to seek."""


class SeekNotSupported(SeekError):
    """Raised by sources that cannot seek at all."""

    def __init__(self, underlying_source):
        super().__init__(f"Seeking is not supported by source: {underlying_source}")
        self.underlying_source = underlying_source


class Source(abc.ABC):
    """An iterator of interleaved samples with a known layout.

    Durations are expressed in seconds as floats.
    """

    def __iter__(self):
        return self

    @abc.abstractmethod
    def __next__(self):
        """Return the next sample or raise StopIteration."""

    @abc.abstractmethod
    def current_frame_len(self):
        """Samples left before channels or sample rate may change, or None."""

    @abc.abstractmethod
    def channels(self):
        """Number of interleaved channels."""

    @abc.abstractmethod
    def sample_rate(self):
        """Samples per second per channel."""

    @abc.abstractmethod
    def total_duration(self):
        """Total duration in seconds, or None when unknown."""

    def size_hint(self):
        """Lower and upper bound of the samples that remain."""
        return (0, None)

    def seek(self, pos):
        """Move playback to ``pos`` seconds from the start."""
        raise SeekNotSupported(type(self).__name__)