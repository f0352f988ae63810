from __future__ import annotations

EXIT_MISSING_ARGS = 1
EXIT_BAD_GROUP_COUNT = 2
EXIT_DECODE_FAILED = 3
EXIT_PLAYBACK_FAILED = 4


class WaveScopeError(Exception):
    exit_code = 1


class ArgumentError(WaveScopeError):
    def __init__(self, message: str, exit_code: int = EXIT_MISSING_ARGS):
        super().__init__(message)
        self.exit_code = exit_code


class DecodeError(WaveScopeError):
    """The audio file could not be opened or its samples decoded."""
    exit_code = EXIT_DECODE_FAILED


class DegenerateInputError(DecodeError):
    """Decoding succeeded but left nothing to visualize (zero samples)."""


class PlaybackError(WaveScopeError):
    exit_code = EXIT_PLAYBACK_FAILED
