from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Set, Tuple

from ..config import Color

Point = Tuple[float, float]


class Canvas(ABC):
    @abstractmethod
    def clear(self, color: Color) -> None:
        ...

    @abstractmethod
    def draw_line(self, start: Point, end: Point, width: float, color: Color) -> None:
        ...

    @abstractmethod
    def present(self) -> None:
        """Show what was drawn since ``clear`` and wait out the rest of the frame."""

    @abstractmethod
    def poll_keys(self) -> Set[str]:
        """Keys pressed since the previous call."""

    @abstractmethod
    def should_close(self) -> bool:
        ...

    def close(self) -> None:
        ...
