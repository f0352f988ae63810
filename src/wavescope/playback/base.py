from __future__ import annotations
from abc import ABC, abstractmethod


class Transport(ABC):
    """Clock and transport controls of a playing audio source."""

    @abstractmethod
    def play(self) -> None:
        ...

    @abstractmethod
    def pause(self) -> None:
        ...

    @abstractmethod
    def seek(self, seconds: float) -> None:
        ...

    @property
    @abstractmethod
    def is_playing(self) -> bool:
        ...

    @property
    @abstractmethod
    def elapsed(self) -> float:
        ...

    @property
    @abstractmethod
    def duration(self) -> float:
        ...

    def update(self) -> None:
        """Service the stream once per frame."""

    def close(self) -> None:
        ...
