"""Sample formats and conversion between them."""

from __future__ import annotations

import enum
import math
import operator

_I16_MIN, _I16_MAX = -32768, 32767
_U16_MAX = 65535


def _trunc_div(a, b):
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _saturating_cast(value, low, high):
    """Float to integer cast that truncates, saturates and maps NaN to zero."""
    if math.isnan(value):
        return 0
    if value <= low:
        return low
    if value >= high:
        return high
    return int(value)


def _wrap_i16(value):
    return ((value + 32768) % 65536) - 32768


def _size_hint(iterator):
    if hasattr(iterator, "size_hint"):
        return iterator.size_hint()
    n = operator.length_hint(iterator, -1)
    if n < 0:
        return (0, None)
    return (n, n)


class SampleFormat(enum.Enum):
    """The numeric representation of a single sample.

    I16 is silent at 0, U16 at 32768 and F32 at 0.0 in the range [-1.0, 1.0].
    """

    I16 = "i16"
    U16 = "u16"
    F32 = "f32"

    def lerp(self, first, second, numerator, denominator):
        """Linear interpolation ``first + (second - first) * numerator / denominator``."""
        if self is SampleFormat.F32:
            return first + (second - first) * numerator / denominator
        value = first + _trunc_div((second - first) * numerator, denominator)
        if self is SampleFormat.I16:
            return _wrap_i16(value)
        return value % 65536

    def amplify(self, value, factor):
        """Multiply a sample by ``factor``."""
        if self is SampleFormat.F32:
            return value * factor
        if self is SampleFormat.I16:
            return _saturating_cast(value * factor, _I16_MIN, _I16_MAX)
        return _saturating_cast(value * factor, 0, _U16_MAX)

    def to_f32(self, value):
        """Convert a sample to a float in [-1.0, 1.0]."""
        if self is SampleFormat.F32:
            return value
        if self is SampleFormat.I16:
            return value / 32768.0
        return (value - 32768.0) / 32768.0

    def from_f32(self, value):
        """Convert a float in [-1.0, 1.0] to a sample of this format."""
        if self is SampleFormat.F32:
            return value
        if self is SampleFormat.I16:
            return _saturating_cast(value * 32768.0, _I16_MIN, _I16_MAX)
        return _saturating_cast(value * 32768.0 + 32768.0, 0, _U16_MAX)

    def saturating_add(self, first, second):
        """Add two samples, clamping integer formats to their range."""
        total = first + second
        if self is SampleFormat.I16:
            return max(_I16_MIN, min(_I16_MAX, total))
        if self is SampleFormat.U16:
            return max(0, min(_U16_MAX, total))
        return total

    def zero_value(self):
        """The value that stands for silence."""
        if self is SampleFormat.U16:
            return 32768
        if self is SampleFormat.I16:
            return 0
        return 0.0

    def convert(self, value, target):
        """Convert a sample of this format into ``target`` format."""
        if target is self:
            return value
        if self is SampleFormat.I16 and target is SampleFormat.U16:
            return value + 32768
        if self is SampleFormat.U16 and target is SampleFormat.I16:
            return value - 32768
        return target.from_f32(self.to_f32(value))


class DataConverter:
    """Iterator that converts each sample from one format to another."""

    def __init__(self, input, source_format, target_format):
        self._input = iter(input)
        self.source_format = source_format
        self.target_format = target_format

    def __iter__(self):
        return self

    def __next__(self):
        return self.source_format.convert(next(self._input), self.target_format)

    def size_hint(self):
        return _size_hint(self._input)

    def inner(self):
        """The wrapped iterator."""
        return self._input