"""Time-synchronized waveform view with basic playback transport."""
from .config import Config, REFERENCE_BIT_DEPTH
from .errors import ArgumentError, DecodeError, DegenerateInputError, PlaybackError
from .waveform import reduce

__all__ = [
    "Config", "REFERENCE_BIT_DEPTH", "reduce",
    "ArgumentError", "DecodeError", "DegenerateInputError", "PlaybackError",
]
__version__ = "0.1.0"
