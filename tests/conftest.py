from __future__ import annotations
import io, logging, struct
from pathlib import Path

import numpy as np
import pytest

from wavescope.playback.base import Transport
from wavescope.render.base import Canvas

_PCM_DTYPES = {2: np.dtype("<i2"), 4: np.dtype("<i4")}


def int_to_pcm(samples, sample_width: int = 2) -> bytes:
    samples = np.asarray(samples, dtype=np.int64)
    if sample_width == 3:
        u = (samples & 0xFFFFFF).astype(np.uint32)
        out = np.stack([u & 0xFF, (u >> 8) & 0xFF, (u >> 16) & 0xFF], axis=1)
        return out.astype(np.uint8).tobytes()
    if sample_width == 1:
        return (samples + 128).astype(np.uint8).tobytes()
    return samples.astype(_PCM_DTYPES[sample_width]).tobytes()


def pack_wav(pcm_bytes: bytes, sample_rate: int, num_channels: int = 1,
             sample_width: int = 2) -> bytes:
    byte_rate = sample_rate * num_channels * sample_width
    block_align = num_channels * sample_width
    data_size = len(pcm_bytes)
    fmt_chunk_size = 16
    riff_chunk_size = 4 + (8 + fmt_chunk_size) + (8 + data_size)
    with io.BytesIO() as buf:
        buf.write(b"RIFF")
        buf.write(struct.pack("<I", riff_chunk_size))
        buf.write(b"WAVE")
        buf.write(b"fmt ")
        buf.write(struct.pack("<IHHIIHH", fmt_chunk_size, 1, num_channels,
                              sample_rate, byte_rate, block_align, sample_width * 8))
        buf.write(b"data")
        buf.write(struct.pack("<I", data_size))
        buf.write(pcm_bytes)
        return buf.getvalue()


@pytest.fixture(autouse=True)
def _fresh_package_logger():
    """Drop handlers bound to a previous test's captured stderr."""
    logger = logging.getLogger("wavescope")
    yield
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)


class FakeCanvas(Canvas):
    """Records draw calls; closes itself after ``max_frames`` presents."""

    def __init__(self, max_frames: int = 1, keys_per_frame=None):
        self.max_frames = max_frames
        self.keys_per_frame = list(keys_per_frame or [])
        self.presented = 0
        self.frames = []
        self._current = []
        self.background = None
        self.closed = False

    def clear(self, color):
        self.background = color
        self._current = []

    def draw_line(self, start, end, width, color):
        self._current.append((start, end, width, color))

    def present(self):
        self.frames.append(self._current)
        self.presented += 1

    def poll_keys(self):
        if self.keys_per_frame:
            return set(self.keys_per_frame.pop(0))
        return set()

    def should_close(self):
        return self.presented >= self.max_frames

    def close(self):
        self.closed = True


class FakeTransport(Transport):
    def __init__(self, duration: float = 10.0, elapsed: float = 0.0, playing: bool = False):
        self._duration = duration
        self._elapsed = elapsed
        self._playing = playing
        self.seeks = []
        self.updates = 0
        self.closed = False

    def play(self):
        self._playing = True

    def pause(self):
        self._playing = False

    def seek(self, seconds):
        self.seeks.append(seconds)
        self._elapsed = seconds

    @property
    def is_playing(self):
        return self._playing

    @property
    def elapsed(self):
        return self._elapsed

    @property
    def duration(self):
        return self._duration

    def update(self):
        self.updates += 1

    def close(self):
        self.closed = True


@pytest.fixture
def write_wav(tmp_path: Path):
    """Write integer samples to a PCM WAV file and return its path."""

    def _write(samples, sample_width: int = 2, sample_rate: int = 8000,
               channels: int = 1, name: str = "clip.wav") -> Path:
        path = tmp_path / name
        pcm = int_to_pcm(np.asarray(samples), sample_width)
        path.write_bytes(pack_wav(pcm, sample_rate, channels, sample_width))
        return path

    return _write
