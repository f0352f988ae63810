from __future__ import annotations
import logging, math
from dataclasses import dataclass
from typing import List, Sequence, Set

from .config import Color, Config
from .playback.base import Transport
from .render.base import Canvas, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChunkLine:
    start: Point
    end: Point
    color: Color


def build_lines(amplitudes: Sequence[float], width: int, height: int, color: Color) -> List[ChunkLine]:
    """One vertical segment per amplitude, centred in its column.

    ``a = +-1`` spans the full height, ``a = 0`` collapses to the midline.
    """
    n = len(amplitudes)
    if n == 0:
        return []
    column = width / float(n)
    lines = []
    for i, a in enumerate(amplitudes):
        x = (i + 0.5) * column
        y_top = (float(a) + 1.0) * height / 2.0
        lines.append(ChunkLine(start=(x, y_top), end=(x, height - y_top), color=color))
    return lines


def progress(elapsed: float, duration: float) -> float:
    # zero-length audio never advances
    if duration <= 0:
        return 0.0
    return min(max(elapsed / duration, 0.0), 1.0)


def last_revealed_index(elapsed: float, duration: float, n: int) -> int:
    """``floor(progress * n)``: 0 at the start, ``n`` at the very end."""
    return int(math.floor(progress(elapsed, duration) * n))


def seek_target(elapsed: float, delta: float, duration: float) -> float:
    return min(max(elapsed + delta, 0.0), max(duration, 0.0))


@dataclass(frozen=True)
class FrameState:
    elapsed: float = 0.0
    duration: float = 0.0
    last_revealed: int = 0


class PlaybackVisualizer:
    def __init__(self, lines: List[ChunkLine], chunk_width: float,
                 canvas: Canvas, transport: Transport, cfg: Config):
        self.lines = lines
        self.chunk_width = chunk_width
        self.canvas = canvas
        self.transport = transport
        self.cfg = cfg
        self.state = FrameState(duration=transport.duration)
        self.frames = 0

    def handle_input(self, keys: Set[str]) -> None:
        cfg, t = self.cfg, self.transport
        if cfg.play_pause_key in keys:
            if t.is_playing:
                t.pause()
            else:
                t.play()
            logger.debug("playing=%s", t.is_playing)
        if cfg.seek_back_key in keys:
            t.seek(seek_target(t.elapsed, -cfg.seek_step, t.duration))
        if cfg.seek_forward_key in keys:
            t.seek(seek_target(t.elapsed, cfg.seek_step, t.duration))

    def sync(self) -> FrameState:
        elapsed, duration = self.transport.elapsed, self.transport.duration
        return FrameState(
            elapsed=elapsed,
            duration=duration,
            last_revealed=last_revealed_index(elapsed, duration, len(self.lines)),
        )

    def draw(self, state: FrameState) -> None:
        self.canvas.clear(self.cfg.background_color)
        for i, line in enumerate(self.lines):
            color = line.color if i <= state.last_revealed else self.cfg.unplayed_color
            self.canvas.draw_line(line.start, line.end, self.chunk_width, color)
        self.canvas.present()

    def tick(self) -> FrameState:
        self.handle_input(self.canvas.poll_keys())
        self.state = self.sync()
        self.draw(self.state)
        self.transport.update()
        self.frames += 1
        return self.state

    def run(self) -> int:
        logger.info("%d columns, %.2fs of audio", len(self.lines), self.transport.duration)
        while not self.canvas.should_close():
            self.tick()
        logger.info("window closed after %d frames", self.frames)
        return self.frames
