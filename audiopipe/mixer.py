"""Mixer that plays several sources at the same time."""

from __future__ import annotations

import threading

from .channels import ChannelCountConverter
from .sample import SampleFormat, _size_hint
from .sample_rate import SampleRateConverter
from .source import SeekNotSupported, Source


class _Take:
    """Yields at most ``limit`` samples from a source; no limit when ``limit`` is None."""

    def __init__(self, source, limit):
        self.source = source
        self._remaining = limit

    def __iter__(self):
        return self

    def __next__(self):
        if self._remaining is not None:
            if self._remaining <= 0:
                raise StopIteration
            self._remaining -= 1
        return next(self.source)

    def size_hint(self):
        low, high = _size_hint(self.source)
        if self._remaining is None:
            return (low, high)
        low = min(low, self._remaining)
        high = self._remaining if high is None else min(high, self._remaining)
        return (low, high)


class _UniformSource(Source):
    """Converts a source to a fixed channel count and sample rate, frame by frame."""

    def __init__(self, source, channels, sample_rate, sample_format):
        self._source = source
        self._channels = channels
        self._sample_rate = sample_rate
        self._format = sample_format
        self._chain = self._bootstrap()

    def _bootstrap(self):
        source = self._source
        taken = _Take(source, source.current_frame_len())
        resampled = SampleRateConverter(
            taken,
            source.sample_rate(),
            self._sample_rate,
            source.channels(),
            self._format,
        )
        return ChannelCountConverter(
            resampled, source.channels(), self._channels, self._format
        )

    def __next__(self):
        value = next(self._chain, None)
        if value is not None:
            return value
        self._chain = self._bootstrap()
        return next(self._chain)

    def current_frame_len(self):
        return None

    def channels(self):
        return self._channels

    def sample_rate(self):
        return self._sample_rate

    def total_duration(self):
        return self._source.total_duration()

    def size_hint(self):
        return self._chain.size_hint()


class Mixer:
    """The input side of a mixer: sources added here are mixed together."""

    def __init__(self, channels, sample_rate, sample_format=SampleFormat.F32):
        self.channels = channels
        self.sample_rate = sample_rate
        self.sample_format = sample_format
        self._lock = threading.Lock()
        self._pending = []
        self._has_pending = False

    def add(self, source):
        """Add a source to mix with the ones already playing."""
        uniform = _UniformSource(
            source, self.channels, self.sample_rate, self.sample_format
        )
        with self._lock:
            self._pending.append(uniform)
            self._has_pending = True


class MixerSource(Source):
    """The output side of a mixer: the sum of all sources playing."""

    def __init__(self, mixer_input):
        self._input = mixer_input
        self._current = []
        self._sample_count = 0

    def __next__(self):
        if self._input._has_pending:
            self._start_pending_sources()

        self._sample_count += 1
        total = self._sum_current_sources()

        if not self._current:
            raise StopIteration
        return total

    def _start_pending_sources(self):
        # Sources start only on a frame boundary so their channels line up.
        mixer_input = self._input
        with mixer_input._lock:
            still_pending = []
            for source in mixer_input._pending:
                if self._sample_count % source.channels() == 0:
                    self._current.append(source)
                else:
                    still_pending.append(source)
            mixer_input._pending = still_pending
            mixer_input._has_pending = bool(still_pending)

    def _sum_current_sources(self):
        sample_format = self._input.sample_format
        total = sample_format.zero_value()
        still_current = []
        for source in self._current:
            value = next(source, None)
            if value is not None:
                total = sample_format.saturating_add(total, value)
                still_current.append(source)
        self._current = still_current
        return total

    def current_frame_len(self):
        return None

    def channels(self):
        return self._input.channels

    def sample_rate(self):
        return self._input.sample_rate

    def total_duration(self):
        return None

    def size_hint(self):
        return (0, None)

    def seek(self, pos):
        raise SeekNotSupported(type(self).__name__)


def mixer(channels, sample_rate, sample_format=SampleFormat.F32):
    """Build a mixer; returns its input and its output source."""
    mixer_input = Mixer(channels, sample_rate, sample_format)
    return mixer_input, MixerSource(mixer_input)