import pytest

from audiopipe.buffer import SamplesBuffer
from audiopipe.mixer import mixer
from audiopipe.sample import SampleFormat
from audiopipe.source import SeekNotSupported

I16 = SampleFormat.I16


def _buf(channels, rate, data):
    return SamplesBuffer(channels, rate, data, I16)


def test_basic():
    tx, rx = mixer(1, 48000, I16)
    tx.add(_buf(1, 48000, [10, -10, 10, -10]))
    tx.add(_buf(1, 48000, [5, 5, 5, 5]))

    assert rx.channels() == 1
    assert rx.sample_rate() == 48000
    assert list(rx) == [15, -5, 15, -5]


def test_channels_conv():
    tx, rx = mixer(2, 48000, I16)
    tx.add(_buf(1, 48000, [10, -10, 10, -10]))
    tx.add(_buf(1, 48000, [5, 5, 5, 5]))

    assert rx.channels() == 2
    assert rx.sample_rate() == 48000
    assert list(rx) == [15, 15, -5, -5, 15, 15, -5, -5]


def test_rate_conv():
    tx, rx = mixer(1, 96000, I16)
    tx.add(_buf(1, 48000, [10, -10, 10, -10]))
    tx.add(_buf(1, 48000, [5, 5, 5, 5]))

    assert rx.channels() == 1
    assert rx.sample_rate() == 96000
    assert list(rx) == [15, 5, -5, 5, 15, 5, -5]


def test_start_afterwards():
    tx, rx = mixer(1, 48000, I16)
    tx.add(_buf(1, 48000, [10, -10, 10, -10]))

    assert next(rx) == 10
    assert next(rx) == -10

    tx.add(_buf(1, 48000, [5, 5, 6, 6, 7, 7, 7]))

    assert next(rx) == 15
    assert next(rx) == -5
    assert next(rx) == 6
    assert next(rx) == 6

    tx.add(_buf(1, 48000, [2]))

    assert next(rx) == 9
    assert next(rx) == 7
    assert next(rx) == 7
    assert next(rx, None) is None


def test_empty_mixer_ends_immediately():
    _, rx = mixer(2, 44100, I16)
    assert list(rx) == []


def test_sum_saturates():
    tx, rx = mixer(1, 48000, I16)
    tx.add(_buf(1, 48000, [32000, -32000]))
    tx.add(_buf(1, 48000, [32000, -32000]))
    assert list(rx) == [32767, -32768]


def test_float_mixing():
    tx, rx = mixer(1, 100)
    tx.add(SamplesBuffer(1, 100, [0.25, 0.5]))
    tx.add(SamplesBuffer(1, 100, [0.25, 0.25]))
    assert list(rx) == [0.5, 0.75]


def test_seek_not_supported():
    tx, rx = mixer(1, 48000, I16)
    tx.add(_buf(1, 48000, [1, 2, 3]))
    with pytest.raises(SeekNotSupported):
        rx.seek(1.0)


def test_unknown_duration_and_frame_len():
    _, rx = mixer(1, 48000, I16)
    assert rx.total_duration() is None
    assert rx.current_frame_len() is None
    assert rx.size_hint() == (0, None)