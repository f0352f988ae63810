from .base import Transport
from .stream_player import StreamPlayer

__all__ = ["Transport", "StreamPlayer"]
