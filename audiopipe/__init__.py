"""Composable audio sample sources: buffers, conversions, mixing, queueing and WAV decoding."""

__version__ = "0.1.0"
__all__ = [
    "buffer",
    "channels",
    "decoder",
    "mixer",
    "queue",
    "sample",
    "sample_rate",
    "source",
    "wav",
]