"""Queue that plays sources one after the other."""

from __future__ import annotations

import threading

from .sample import SampleFormat, _size_hint
from .source import Source

THRESHOLD = 512


class _Empty(Source):
    """A source that yields nothing."""

    def __next__(self):
        raise StopIteration

    def current_frame_len(self):
        return None

    def channels(self):
        return 1

    def sample_rate(self):
        return 48000

    def total_duration(self):
        return 0.0

    def size_hint(self):
        return (0, 0)


class _Zero(Source):
    """A fixed number of silent samples."""

    def __init__(self, channels, sample_rate, num_samples, sample_format):
        self._channels = channels
        self._sample_rate = sample_rate
        self._remaining = num_samples
        self._value = sample_format.zero_value()

    def __next__(self):
        if self._remaining <= 0:
            raise StopIteration
        self._remaining -= 1
        return self._value

    def current_frame_len(self):
        return self._remaining

    def channels(self):
        return self._channels

    def sample_rate(self):
        return self._sample_rate

    def total_duration(self):
        return None

    def size_hint(self):
        return (self._remaining, self._remaining)


class SourcesQueueInput:
    """The input side of a queue: sources appended here play in order."""

    def __init__(self, keep_alive_if_empty, sample_format=SampleFormat.F32):
        self._lock = threading.Lock()
        self._next_sounds = []
        self._keep_alive_if_empty = keep_alive_if_empty
        self.sample_format = sample_format

    def append(self, source):
        """Add a source to the end of the queue."""
        with self._lock:
            self._next_sounds.append((source, None))

    def append_with_signal(self, source):
        """Add a source and return an event that is set once it has finished playing."""
        done = threading.Event()
        with self._lock:
            self._next_sounds.append((source, done))
        return done

    def set_keep_alive_if_empty(self, keep_alive_if_empty):
        """Set whether the queue plays silence instead of ending when it runs dry."""
        self._keep_alive_if_empty = keep_alive_if_empty

    def clear(self):
        """Remove every waiting source and return how many were removed."""
        with self._lock:
            count = len(self._next_sounds)
            self._next_sounds.clear()
        return count

    def _is_empty(self):
        with self._lock:
            return not self._next_sounds

    def _pop(self):
        with self._lock:
            if self._next_sounds:
                return self._next_sounds.pop(0)
        return None


class SourcesQueueOutput(Source):
    """The output side of a queue: plays the appended sources in turn."""

    def __init__(self, queue_input):
        self._input = queue_input
        self._current = _Empty()
        self._signal_after_end = None

    def __next__(self):
        while True:
            sample = next(self._current, None)
            if sample is not None:
                return sample
            if not self._go_next():
                raise StopIteration

    def _go_next(self):
        if self._signal_after_end is not None:
            self._signal_after_end.set()
            self._signal_after_end = None

        entry = self._input._pop()
        if entry is None:
            if not self._input._keep_alive_if_empty:
                return False
            # A short silence keeps the output alive without spinning.
            entry = (_Zero(1, 44100, THRESHOLD, self._input.sample_format), None)

        self._current, self._signal_after_end = entry
        return True

    def current_frame_len(self):
        value = self._current.current_frame_len()
        if value is not None:
            if value != 0:
                return value
            if self._input._keep_alive_if_empty and self._input._is_empty():
                return THRESHOLD

        lower, _ = _size_hint(self._current)
        if lower > 0:
            return lower
        return THRESHOLD

    def channels(self):
        return self._current.channels()

    def sample_rate(self):
        return self._current.sample_rate()

    def total_duration(self):
        return None

    def size_hint(self):
        return (_size_hint(self._current)[0], None)

    def seek(self, pos):
        """Seek within the source that is playing now."""
        self._current.seek(pos)


def queue(keep_alive_if_empty, sample_format=SampleFormat.F32):
    """Build a queue; returns its input and its output source.

    With ``keep_alive_if_empty`` the output plays silence while the queue is
    empty instead of ending.
    """
    queue_input = SourcesQueueInput(keep_alive_if_empty, sample_format)
    return queue_input, SourcesQueueOutput(queue_input)