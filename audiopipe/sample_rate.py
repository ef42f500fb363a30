"""Conversion between sample rates."""

from __future__ import annotations

import math

from .sample import SampleFormat, _size_hint


class SampleRateConverter:
    """Iterator that converts interleaved samples from one sample rate to another.

    Up-sampling uses linear interpolation between neighbouring frames;
    down-sampling drops frames.
    """

    def __init__(self, input, from_rate, to_rate, channels, sample_format=SampleFormat.F32):
        if channels < 1:
            raise ValueError("channel count must be at least 1")
        if from_rate < 1 or to_rate < 1:
            raise ValueError("sample rates must be at least 1")

        self._input = iter(input)
        self._channels = channels
        self._format = sample_format

        if from_rate == to_rate:
            first, following = [], []
        else:
            first = self._read_frame()
            following = self._read_frame()

        divisor = math.gcd(to_rate, from_rate)
        self._from = from_rate // divisor
        self._to = to_rate // divisor
        self._current_frame = first
        self._next_frame = following
        self._current_pos = 0
        self._next_output_pos = 0
        self._output_buffer = []

    def _read_frame(self):
        frame = []
        for _ in range(self._channels):
            sample = next(self._input, None)
            if sample is None:
                break
            frame.append(sample)
        return frame

    def _next_input_frame(self):
        self._current_pos += 1
        self._current_frame = self._next_frame
        self._next_frame = self._read_frame()

    def __iter__(self):
        return self

    def __next__(self):
        if self._from == self._to:
            return next(self._input)

        if self._output_buffer:
            return self._output_buffer.pop(0)

        if self._next_output_pos == self._to:
            self._next_output_pos = 0
            self._next_input_frame()
            while self._current_pos != self._from:
                self._next_input_frame()
            self._current_pos = 0
        else:
            req_left = (self._from * self._next_output_pos // self._to) % self._from
            while self._current_pos != req_left:
                self._next_input_frame()

        result = None
        numerator = (self._from * self._next_output_pos) % self._to
        for offset, (current, following) in enumerate(
            zip(self._current_frame, self._next_frame)
        ):
            sample = self._format.lerp(current, following, numerator, self._to)
            if offset == 0:
                result = sample
            else:
                self._output_buffer.append(sample)

        self._next_output_pos += 1

        if result is not None:
            return result
        if self._current_frame:
            first = self._current_frame.pop(0)
            self._output_buffer = self._current_frame
            self._current_frame = []
            return first
        raise StopIteration

    def size_hint(self):
        if self._from == self._to:
            return _size_hint(self._input)

        def apply(samples):
            after_chunk = samples
            if self._current_pos == self._from - 1:
                after_chunk += len(self._next_frame)
            unread = max(self._from - (self._current_pos + 2), 0) * self._channels
            after_chunk = max(after_chunk - unread, 0)
            after_chunk = after_chunk * self._to // self._from
            current_chunk = (self._to - self._next_output_pos) * self._channels
            return current_chunk + after_chunk + len(self._output_buffer)

        low, high = _size_hint(self._input)
        return (apply(low), None if high is None else apply(high))

    def __len__(self):
        low, high = self.size_hint()
        if high != low:
            raise TypeError("length of the input is not known exactly")
        return low

    def inner(self):
        """The wrapped iterator."""
        return self._input