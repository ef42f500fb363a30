"""Conversion between channel counts."""

from __future__ import annotations

import operator

from .sample import SampleFormat


def _size_hint(iterator):
    if hasattr(iterator, "size_hint"):
        return iterator.size_hint()
    n = operator.length_hint(iterator, -1)
    if n < 0:
        return (0, None)
    return (n, n)


class ChannelCountConverter:
    """Iterator that converts interleaved samples from one channel count to another.

    Extra input channels are dropped; when adding channels, the second
    output channel repeats the first input channel of a mono source and the
    rest are filled with silence.
    """

    def __init__(self, input, from_channels, to_channels, sample_format=SampleFormat.F32):
        if from_channels < 1 or to_channels < 1:
            raise ValueError("channel counts must be at least 1")
        self._input = iter(input)
        self._from = from_channels
        self._to = to_channels
        self._silence = sample_format.zero_value()
        self._repeat = None
        self._pos = 0

    def __iter__(self):
        return self

    def __next__(self):
        pos = self._pos
        if pos == 0:
            result = next(self._input, None)
            self._repeat = result
        elif pos < self._from:
            result = next(self._input, None)
        elif pos == 1:
            result = self._repeat
        else:
            result = self._silence

        if result is not None:
            self._pos += 1

        if self._pos == self._to:
            self._pos = 0
            for _ in range(self._from - self._to):
                next(self._input, None)

        if result is None:
            raise StopIteration
        return result

    def size_hint(self):
        low, high = _size_hint(self._input)
        consumed = min(self._from, self._pos)

        def calculate(size):
            return (size + consumed) // self._from * self._to - self._pos

        return (calculate(low), None if high is None else calculate(high))

    def __len__(self):
        low, high = self.size_hint()
        if high != low:
            raise TypeError("length of the input is not known exactly")
        return low

    def inner(self):
        """The wrapped iterator."""
        return self._input