from __future__ import annotations
import logging, time
from typing import List, Set, Tuple

import matplotlib

from ..config import Color
from .base import Canvas, Point

logger = logging.getLogger(__name__)

# matplotlib binds these to view navigation by default
_NAV_KEYMAPS = ("keymap.back", "keymap.forward")


def _rgb(color: Color) -> Tuple[float, float, float]:
    r, g, b = color[:3]
    return (r / 255.0, g / 255.0, b / 255.0)


class MplCanvas(Canvas):
    """Fixed-size matplotlib window drawn in screen pixels (y grows down)."""

    def __init__(self, width: int, height: int, title: str = "music visualizer",
                 fps: int = 60, backend: str | None = "TkAgg", dpi: int = 100):
        if backend:
            matplotlib.use(backend)
        import matplotlib.pyplot as plt
        from matplotlib.collections import LineCollection

        for name in _NAV_KEYMAPS:
            plt.rcParams[name] = [k for k in plt.rcParams[name] if k not in ("left", "right")]

        self._plt = plt
        self.width, self.height, self.dpi = width, height, dpi
        self._frame_time = 1.0 / max(1, fps)

        self.fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        manager = getattr(self.fig.canvas, "manager", None)
        if manager is not None:
            manager.set_window_title(title)
        self.ax = self.fig.add_axes([0, 0, 1, 1])
        self.ax.set_xlim(0, width)
        self.ax.set_ylim(height, 0)
        self.ax.set_axis_off()
        self._lines = LineCollection([], capstyle="butt")
        self.ax.add_collection(self._lines)

        self._segments: List[Tuple[Point, Point]] = []
        self._colors: List[Tuple[float, float, float]] = []
        self._widths: List[float] = []
        self._keys: Set[str] = set()
        self._held: Set[str] = set()
        self._closed = False
        self._last_flip = time.perf_counter()

        self.fig.canvas.mpl_connect("key_press_event", self._on_key)
        self.fig.canvas.mpl_connect("key_release_event", self._on_key_release)
        self.fig.canvas.mpl_connect("close_event", self._on_close)
        plt.show(block=False)
        logger.info("window open: %dx%d @ %d fps", width, height, fps)

    @staticmethod
    def _key_name(event):
        return "space" if event.key == " " else event.key

    def _on_key(self, event):
        if event.key is None:
            return
        key = self._key_name(event)
        # auto-repeat presses arrive without a release in between
        if key not in self._held:
            self._held.add(key)
            self._keys.add(key)

    def _on_key_release(self, event):
        if event.key is not None:
            self._held.discard(self._key_name(event))

    def _on_close(self, _event):
        self._closed = True

    def clear(self, color: Color) -> None:
        rgb = _rgb(color)
        self.fig.set_facecolor(rgb)
        self.ax.set_facecolor(rgb)
        self._segments, self._colors, self._widths = [], [], []

    def draw_line(self, start: Point, end: Point, width: float, color: Color) -> None:
        self._segments.append((start, end))
        self._colors.append(_rgb(color))
        # pixels -> points
        self._widths.append(width * 72.0 / self.dpi)

    def present(self) -> None:
        self._lines.set_segments(self._segments)
        self._lines.set_color(self._colors)
        self._lines.set_linewidth(self._widths)
        self.fig.canvas.draw_idle()
        remaining = self._frame_time - (time.perf_counter() - self._last_flip)
        # runs the GUI event loop, which is also where key/close events arrive
        self.fig.canvas.start_event_loop(max(remaining, 0.001))
        self._last_flip = time.perf_counter()

    def poll_keys(self) -> Set[str]:
        keys, self._keys = self._keys, set()
        return keys

    def should_close(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True
        self._plt.close(self.fig)
