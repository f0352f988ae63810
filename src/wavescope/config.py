from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

Color = Tuple[int, int, int]

# Samples are widened to this depth before normalization, whatever the file uses.
REFERENCE_BIT_DEPTH = 24

@dataclass
class Config:
    filename: str = ""
    group_count: int = 0

    width: int = 1200
    height: int = 300
    fps: int = 60
    title: str = "music visualizer"
    backend: str = "TkAgg"

    seek_step: float = 5.0            # seconds per LEFT/RIGHT press
    reference_bit_depth: int = REFERENCE_BIT_DEPTH

    played_color: Color = (230, 41, 55)
    unplayed_color: Color = (50, 50, 50)
    background_color: Color = (0, 0, 0)

    play_pause_key: str = "space"
    seek_back_key: str = "left"
    seek_forward_key: str = "right"

    device: Optional[int] = None      # sounddevice output index
    loop: bool = False
    autoplay: bool = True
    log_level: str = "INFO"
