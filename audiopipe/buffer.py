"""A source of samples held in memory."""

from __future__ import annotations

import math

from .sample import SampleFormat
from .source import Source

_U64_MAX = 2**64 - 1


class SamplesBuffer(Source):
    """A list of interleaved samples treated as a source."""

    def __init__(self, channels, sample_rate, data, sample_format=SampleFormat.F32):
        if channels < 1:
            raise ValueError("channel count must be at least 1")
        if sample_rate < 1:
            raise ValueError("sample rate must be at least 1")

        self._data = list(data)
        self._pos = 0
        self._channels = channels
        self._sample_rate = sample_rate
        self.sample_format = sample_format

        total_ns = 1_000_000_000 * len(self._data)
        if total_ns > _U64_MAX:
            raise OverflowError("buffer is too long for its duration to be computed")
        duration_ns = total_ns // sample_rate // channels
        self._duration = duration_ns / 1_000_000_000

    def __next__(self):
        if self._pos >= len(self._data):
            raise StopIteration
        sample = self._data[self._pos]
        self._pos += 1
        return sample

    def current_frame_len(self):
        return None

    def channels(self):
        return self._channels

    def sample_rate(self):
        return self._sample_rate

    def total_duration(self):
        return self._duration

    def size_hint(self):
        length = len(self._data)
        return (length, length)

    def seek(self, pos):
        """Jump to ``pos`` seconds, keeping the channel order and saturating at the end."""
        current_channel = self._pos % self._channels
        target = pos * self._sample_rate * self._channels
        target = 0 if math.isnan(target) else max(0, int(target))
        target = min(target, len(self._data))
        target = -(-target // self._channels) * self._channels
        self._pos = max(target - current_channel, 0)