"""
Render surfaces for the maze viewer.

This package provides the surface interface the engine drives, plus a
browser view streamed over HTTP/WebSocket, a terminal board and an
in-memory double for tests.
"""

from .headless import HeadlessCell, HeadlessSurface
from .surface import RenderSurface
from .text import TextSurface, render_board
from .web_surface import WebSurface

__all__ = [
    "RenderSurface",
    "HeadlessCell",
    "HeadlessSurface",
    "TextSurface",
    "render_board",
    "WebSurface",
]
