import io
import struct
import wave

import pytest

from audiopipe.wav import (
    NotWaveError,
    WavDecoder,
    f32_to_i16,
    i8_to_i16,
    i24_to_i16,
    i32_to_i16,
    is_wave,
)


def make_wav(frames_bytes, channels=1, sample_rate=44100, sampwidth=2):
    out = io.BytesIO()
    with wave.open(out, "wb") as writer:
        writer.setnchannels(channels)
        writer.setsampwidth(sampwidth)
        writer.setframerate(sample_rate)
        writer.writeframes(frames_bytes)
    return io.BytesIO(out.getvalue())


def make_i16_wav(samples, channels=1, sample_rate=44100):
    data = struct.pack(f"<{len(samples)}h", *samples)
    return make_wav(data, channels, sample_rate, 2)


def make_raw_wav(tag, channels, sample_rate, bits, block_align, data):
    fmt = struct.pack(
        "<HHIIHH", tag, channels, sample_rate, sample_rate * block_align, block_align, bits
    )
    body = b"WAVE" + b"fmt " + struct.pack("<I", len(fmt)) + fmt
    body += b"data" + struct.pack("<I", len(data)) + data
    return io.BytesIO(b"RIFF" + struct.pack("<I", len(body)) + body)


def test_is_wave_detects_and_restores_position():
    stream = make_i16_wav([1, 2, 3])
    assert is_wave(stream) is True
    assert stream.tell() == 0


def test_is_wave_rejects_other_data():
    stream = io.BytesIO(b"definitely not audio data at all")
    stream.seek(3)
    assert is_wave(stream) is False
    assert stream.tell() == 3


def test_decoder_rejects_other_data_and_restores_position():
    stream = io.BytesIO(b"OggS" + bytes(40))
    with pytest.raises(NotWaveError):
        WavDecoder(stream)
    assert stream.tell() == 0


def test_i16_round_trip():
    samples = [0, 1, -1, 32767, -32768, 1234]
    decoder = WavDecoder(make_i16_wav(samples))
    assert list(decoder) == samples


def test_spec_and_duration():
    decoder = WavDecoder(make_i16_wav([0] * 8, channels=2, sample_rate=4))
    assert decoder.channels() == 2
    assert decoder.sample_rate() == 4
    assert decoder.current_frame_len() is None
    assert decoder.total_duration() == pytest.approx(1.0)


def test_size_hint_counts_down():
    decoder = WavDecoder(make_i16_wav([5, 6, 7]))
    assert decoder.size_hint() == (3, 3)
    next(decoder)
    assert decoder.size_hint() == (2, 2)
    list(decoder)
    assert decoder.size_hint() == (0, 0)


def test_8_bit_samples_are_scaled():
    decoder = WavDecoder(make_wav(bytes([128, 129, 127, 0]), sampwidth=1))
    assert list(decoder) == [0, 256, -256, -32768]


def test_24_bit_samples_drop_low_byte():
    values = [0x123456, -0x123456]
    data = b"".join(v.to_bytes(3, "little", signed=True) for v in values)
    decoder = WavDecoder(make_wav(data, sampwidth=3))
    assert list(decoder) == [i24_to_i16(v) for v in values]


def test_32_bit_samples_drop_low_bytes():
    values = [0x7FFFFFFF, -0x80000000, 0]
    data = struct.pack("<3i", *values)
    decoder = WavDecoder(make_wav(data, sampwidth=4))
    assert list(decoder) == [32767, -32768, 0]


def test_float_samples():
    data = struct.pack("<4f", 0.0, 1.0, -1.0, 2.0)
    decoder = WavDecoder(make_raw_wav(3, 1, 8000, 32, 4, data))
    assert list(decoder) == [0, 32767, -32767, 32767]


def test_64_bit_float_is_not_accepted():
    stream = make_raw_wav(3, 1, 8000, 64, 8, bytes(16))
    assert is_wave(stream) is False
    with pytest.raises(NotWaveError):
        WavDecoder(stream)


def test_unsupported_bit_depth_fails_on_read():
    decoder = WavDecoder(make_raw_wav(1, 1, 8000, 12, 2, bytes(4)))
    assert decoder.channels() == 1
    assert decoder.sample_rate() == 8000
    with pytest.raises(ValueError):
        next(decoder)


def test_seek_saturates_at_end():
    decoder = WavDecoder(make_i16_wav([1, 2, 3, 4], sample_rate=4))
    decoder.seek(100)
    assert list(decoder) == []
    decoder.seek(0)
    assert list(decoder) == [1, 2, 3, 4]


def test_into_inner_returns_stream():
    stream = make_i16_wav([1])
    decoder = WavDecoder(stream)
    assert decoder.into_inner() is stream


@pytest.mark.parametrize(
    "value, expected",
    [(1.0, 32767), (-1.0, -32767), (5.0, 32767), (-5.0, -32767), (0.0, 0), (float("nan"), 0)],
)
def test_f32_to_i16(value, expected):
    assert f32_to_i16(value) == expected


@pytest.mark.parametrize("value", [-128, -1, 0, 1, 127])
def test_i8_to_i16_is_monotonic_scaling(value):
    assert i8_to_i16(value) // 256 == value


def test_integer_reductions_stay_in_i16_range():
    assert i24_to_i16(8_388_607) == 32767
    assert i24_to_i16(-8_388_608) == -32768
    assert i32_to_i16(-1) == -1