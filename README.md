# audiopipe

A small library of composable audio sample sources. Every source is a Python
iterator over interleaved PCM samples. Each one also reports its channel
count, its sample rate and, when known, its total duration in seconds.

## What it provides

- `Source` (`audiopipe.source`) is the abstract base of all sources. It has
  `channels()`, `sample_rate()`, `total_duration()`, `current_frame_len()`,
  `size_hint()` and `seek(pos)`.
- `SampleFormat` and `DataConverter` (`audiopipe.sample`) handle the `I16`,
  `U16` and `F32` sample formats. They cover linear interpolation,
  amplification, saturating addition, silence values and conversion between
  formats.
- `SamplesBuffer` (`audiopipe.buffer`) turns a list of samples held in memory
  into a source that can seek.
- `ChannelCountConverter` (`audiopipe.channels`) converts interleaved samples
  from one channel count to another.
- `SampleRateConverter` (`audiopipe.sample_rate`) resamples. It uses linear
  interpolation when raising the rate and drops frames when lowering it.
- `mixer()` (`audiopipe.mixer`) returns a `Mixer` input and a `MixerSource`
  output, which plays several sources at the same time. Each source you add
  is first converted to the mixer's channel count and sample rate.
- `queue()` (`audiopipe.queue`) returns a `SourcesQueueInput` and a
  `SourcesQueueOutput`, which plays the appended sources one after the other.
  - `append_with_signal()` returns a `threading.Event`. The event is set when
    that source has finished playing.
  - With `keep_alive_if_empty`, the output plays silence instead of ending
    when the queue is empty.
- `WavDecoder` (`audiopipe.wav`) decodes WAVE data from a seekable binary
  file object into 16-bit samples. It reads PCM integer samples of 8, 16, 24
  or 32 bits and 32-bit float samples. `is_wave()` checks a stream without
  moving its position.
- `Decoder` and `LoopedDecoder` (`audiopipe.decoder`) detect the format and
  decode. `Decoder.new_looped()` gives a source that starts again from the
  beginning when it reaches the end. `Mp4Type` parses and names MP4-family
  file extensions.

## Installing

```
pip install .
```

## Examples

Mixing two buffers:

```python
from audiopipe.buffer import SamplesBuffer
from audiopipe.mixer import mixer
from audiopipe.sample import SampleFormat

controller, output = mixer(1, 48000, SampleFormat.I16)
controller.add(SamplesBuffer(1, 48000, [10, -10, 10, -10], SampleFormat.I16))
controller.add(SamplesBuffer(1, 48000, [5, 5, 5, 5], SampleFormat.I16))
print(list(output))  # [15, -5, 15, -5]
```

Queueing sounds:

```python
from audiopipe.buffer import SamplesBuffer
from audiopipe.queue import queue
from audiopipe.sample import SampleFormat

tx, rx = queue(False, SampleFormat.I16)
tx.append(SamplesBuffer(1, 48000, [1, 2, 3], SampleFormat.I16))
print(list(rx))  # [1, 2, 3]
```

Changing the channel count:

```python
from audiopipe.channels import ChannelCountConverter

print(list(ChannelCountConverter([1, 2, 3, 4], 1, 2)))  # [1, 1, 2, 2, 3, 3, 4, 4]
```

Decoding a WAV file:

```python
from audiopipe.decoder import Decoder

with open("sound.wav", "rb") as fh:
    decoder = Decoder(fh)
    print(decoder.channels(), decoder.sample_rate(), decoder.total_duration())
    samples = list(decoder)
```

## Seeking

`seek(pos)` takes a position in seconds. `SamplesBuffer` and `WavDecoder`
saturate the position at the end of the data. Both also keep the channel
order, so the next sample comes from the same channel as before the seek.
`SourcesQueueOutput` seeks only within the source that is playing now. A
source that cannot seek, such as `MixerSource`, raises `SeekNotSupported`,
which is a subclass of `SeekError`.

## Errors

- `Decoder` raises `UnrecognizedFormat`, a subclass of `DecoderError`, when
  the data is not WAVE.
- `WavDecoder` raises `NotWaveError` when the data is not WAVE or is a kind
  of WAVE it cannot read.
- Constructors raise `ValueError` for zero channels or a zero sample rate.

## What it does not do

- It does not play sound. There is no connection to an audio device and no
  playback controls such as volume, pause or a play position. The sources
  only produce samples for your own code to consume.
- WAVE is the only file format it decodes. MP3, FLAC, Ogg Vorbis and MP4/AAC
  data are reported as `UnrecognizedFormat`.

## Running the tests

```
pip install ".[test]"
pytest
```