# MplCanvas is imported from .mpl_canvas directly so that matplotlib
# is only loaded when a window is actually opened.
from .base import Canvas, Point

__all__ = ["Canvas", "Point"]
