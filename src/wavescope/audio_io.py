from __future__ import annotations
import logging, wave
from dataclasses import dataclass
import numpy as np

from .errors import DecodeError, DegenerateInputError

logger = logging.getLogger(__name__)

_DTYPES = {1: np.uint8, 2: np.dtype("<i2"), 4: np.dtype("<i4")}


@dataclass(frozen=True)
class DecodedAudio:
    samples: np.ndarray     # int32, channel-interleaved
    bit_depth: int
    sample_rate: int
    channels: int = 1

    @property
    def frame_count(self) -> int:
        return len(self.samples) // self.channels

    @property
    def duration(self) -> float:
        if self.sample_rate <= 0:
            return 0.0
        return self.frame_count / float(self.sample_rate)

    def as_float_frames(self) -> np.ndarray:
        """(frames, channels) float32 in [-1, 1) for the output stream."""
        usable = self.frame_count * self.channels
        frames = self.samples[:usable].reshape(-1, self.channels).astype(np.float32)
        return frames / float(1 << (self.bit_depth - 1))


def _decode_24bit(data: bytes) -> np.ndarray:
    raw = np.frombuffer(data, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
    value = raw[:, 0] | (raw[:, 1] << 8) | (raw[:, 2] << 16)
    return np.where(value & 0x800000, value - 0x1000000, value).astype(np.int32)


def pcm_to_int(data: bytes, sample_width: int) -> np.ndarray:
    if sample_width == 3:
        return _decode_24bit(data)
    if sample_width not in _DTYPES:
        raise DecodeError(f"unsupported sample width: {sample_width} bytes")
    samples = np.frombuffer(data, dtype=_DTYPES[sample_width]).astype(np.int32)
    if sample_width == 1:
        # 8-bit WAV is unsigned, centred on 128
        samples -= 128
    return samples


def read_wav(path: str) -> DecodedAudio:
    """Decode a whole PCM WAV file up front. No streaming decode."""
    try:
        with wave.open(str(path), "rb") as wf:
            n, rate, ch, sw = wf.getnframes(), wf.getframerate(), wf.getnchannels(), wf.getsampwidth()
            data = wf.readframes(n)
    except (OSError, EOFError, wave.Error) as e:
        raise DecodeError(str(e) or e.__class__.__name__) from e

    if len(data) != n * ch * sw:
        raise DecodeError(f"truncated data chunk: expected {n * ch * sw} bytes, got {len(data)}")
    samples = pcm_to_int(data, sw)
    if samples.size == 0:
        raise DegenerateInputError(f"{path} contains no samples")
    logger.debug("decoded %s: %d frames, %d ch, %d bit, %d Hz", path, n, ch, sw * 8, rate)
    return DecodedAudio(samples=samples, bit_depth=sw * 8, sample_rate=rate, channels=ch)
