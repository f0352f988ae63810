from __future__ import annotations
import argparse, logging, sys
from typing import Callable, List, Optional

from .audio_io import DecodedAudio, read_wav
from .config import Config
from .errors import (ArgumentError, DecodeError, PlaybackError,
                     EXIT_BAD_GROUP_COUNT, EXIT_MISSING_ARGS)
from .log import setup_logging
from .playback import StreamPlayer, Transport
from .render import Canvas
from .visualizer import PlaybackVisualizer, build_lines
from .waveform import reduce

logger = logging.getLogger(__name__)

CanvasFactory = Callable[[Config], Canvas]
PlayerFactory = Callable[[DecodedAudio, Config], Transport]


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise ArgumentError(f"{message}. Usage: {self.prog} [filename] [# of groups] [options]",
                            EXIT_MISSING_ARGS)


def parse_group_count(raw: str) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        value = 0
    if value < 1:
        raise ArgumentError(
            f"Invalid digit {raw}. Number of groups must be more than or equal to 1.",
            EXIT_BAD_GROUP_COUNT,
        )
    return value


def parse_args(argv: Optional[List[str]] = None) -> Config:
    p = _Parser(prog="wavescope", description="Waveform visualizer with playback")
    p.add_argument("filename", nargs="?")
    p.add_argument("groups", nargs="?", help="number of waveform columns")
    p.add_argument("--width", type=int, default=1200)
    p.add_argument("--height", type=int, default=300)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--seek-step", type=float, default=5.0)
    p.add_argument("--device", type=int, default=None)
    p.add_argument("--loop", action="store_true")
    p.add_argument("--no-autoplay", action="store_true")
    p.add_argument("--backend", type=str, default="TkAgg")
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="INFO")
    a = p.parse_args(argv)
    if a.filename is None or a.groups is None:
        raise ArgumentError(
            f"Not enough arguments. Usage: {p.prog} [filename] [# of groups]", EXIT_MISSING_ARGS)
    return Config(
        filename=a.filename, group_count=parse_group_count(a.groups),
        width=a.width, height=a.height, fps=a.fps, seek_step=a.seek_step,
        device=a.device, loop=a.loop, autoplay=not a.no_autoplay,
        backend=a.backend, log_level=a.log_level,
    )


def open_player(audio: DecodedAudio, cfg: Config) -> Transport:
    return StreamPlayer.from_audio(audio, device=cfg.device, loop=cfg.loop).open()


def open_canvas(cfg: Config) -> Canvas:
    from .render.mpl_canvas import MplCanvas
    return MplCanvas(cfg.width, cfg.height, title=cfg.title, fps=cfg.fps, backend=cfg.backend)


def main(argv: Optional[List[str]] = None, *,
         canvas_factory: Optional[CanvasFactory] = None,
         player_factory: Optional[PlayerFactory] = None) -> int:
    try:
        cfg = parse_args(argv)
    except ArgumentError as e:
        print(e, file=sys.stderr)
        return e.exit_code
    setup_logging(cfg.log_level)

    try:
        audio = read_wav(cfg.filename)
        amplitudes = reduce(audio.samples, audio.bit_depth, cfg.group_count, cfg.reference_bit_depth)
    except DecodeError as e:
        print(f"Failed parsing the .wav file: {e}", file=sys.stderr)
        return e.exit_code
    logger.info("%s: %d samples -> %d columns", cfg.filename, len(audio.samples), len(amplitudes))

    try:
        player = (player_factory or open_player)(audio, cfg)
    except PlaybackError as e:
        print(f"Failed opening audio playback: {e}", file=sys.stderr)
        return e.exit_code

    try:
        canvas = (canvas_factory or open_canvas)(cfg)
        try:
            lines = build_lines(amplitudes, cfg.width, cfg.height, cfg.played_color)
            viz = PlaybackVisualizer(lines, cfg.width / float(len(lines)), canvas, player, cfg)
            if cfg.autoplay:
                player.play()
            viz.run()
        finally:
            canvas.close()
    finally:
        player.close()
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
