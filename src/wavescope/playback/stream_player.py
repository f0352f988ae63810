from __future__ import annotations
import logging, threading
from typing import Callable, Optional
import numpy as np

from ..audio_io import DecodedAudio
from ..errors import PlaybackError
from .base import Transport

logger = logging.getLogger(__name__)


class StreamPlayer(Transport):
    """Plays decoded frames through a sounddevice output stream.

    The stream callback runs on the audio thread; the read position and
    play flag are only touched under ``_lock``.
    """

    def __init__(self, frames: np.ndarray, sample_rate: int, device=None,
                 loop: bool = False, stream_factory: Optional[Callable] = None):
        frames = np.asarray(frames, dtype=np.float32)
        if frames.ndim == 1:
            frames = frames.reshape(-1, 1)
        self.frames = frames
        self.rate = sample_rate
        self.device = device
        self.loop = loop
        self._stream_factory = stream_factory
        self._stream = None
        self._lock = threading.Lock()
        self._pos = 0
        self._playing = False
        self._finished = False
        self._end_reported = False

    @classmethod
    def from_audio(cls, audio: DecodedAudio, **kwargs) -> "StreamPlayer":
        return cls(audio.as_float_frames(), audio.sample_rate, **kwargs)

    # ---- stream lifecycle ----
    def open(self) -> "StreamPlayer":
        factory = self._stream_factory
        try:
            if factory is None:
                import sounddevice as sd  # type: ignore
                factory = sd.OutputStream
            self._stream = factory(
                samplerate=self.rate, channels=self.frames.shape[1], dtype="float32",
                callback=self._callback, device=self.device,
            )
            self._stream.start()
        except Exception as e:
            self._stream = None
            raise PlaybackError(f"cannot open audio output: {e}") from e
        logger.info("output stream open: %d Hz, %d ch, %.2fs",
                    self.rate, self.frames.shape[1], self.duration)
        return self

    def close(self) -> None:
        if self._stream is not None:
            self._stream.stop()
            self._stream.close()
            self._stream = None

    def _callback(self, outdata, frames, time_info, status):
        if status:
            logger.warning("%s", status)
        with self._lock:
            if not self._playing:
                outdata.fill(0)
                return
            written = 0
            while written < frames:
                chunk = self.frames[self._pos:self._pos + (frames - written)]
                n = len(chunk)
                outdata[written:written + n] = chunk
                written += n
                self._pos += n
                if self._pos >= len(self.frames):
                    if self.loop and len(self.frames):
                        self._pos = 0
                        continue
                    self._playing = False
                    self._finished = True
                    break
            outdata[written:] = 0

    # ---- transport ----
    def play(self) -> None:
        with self._lock:
            if self._pos >= len(self.frames):
                self._pos = 0
            self._playing = True
            self._finished = False
            self._end_reported = False

    def pause(self) -> None:
        with self._lock:
            self._playing = False

    def seek(self, seconds: float) -> None:
        target = min(max(seconds, 0.0), self.duration)
        with self._lock:
            self._pos = min(int(target * self.rate), len(self.frames))
            self._finished = False
            self._end_reported = False
        logger.debug("seek to %.2fs", target)

    @property
    def is_playing(self) -> bool:
        with self._lock:
            return self._playing

    @property
    def elapsed(self) -> float:
        if self.rate <= 0:
            return 0.0
        with self._lock:
            return self._pos / float(self.rate)

    @property
    def duration(self) -> float:
        return len(self.frames) / float(self.rate) if self.rate > 0 else 0.0

    def update(self) -> None:
        with self._lock:
            report = self._finished and not self._end_reported
            if report:
                self._end_reported = True
        if report:
            logger.info("end of track")
