"""The graphical front end that shows the cache at work."""

from __future__ import annotations

from collections import deque
from typing import Any, Optional, Tuple

from cachesim.backend import Backend, Frontend
from cachesim.model import CacheAccess
from cachesim.render.assets import AssetManager
from cachesim.render.color import Color
from cachesim.render.engine import Engine
from cachesim.render.object import Object
from cachesim.render.transform import Transform

SCREEN_WIDTH = 1440
SCREEN_HEIGHT = 960

_SIDEBAR_COLOR = 0x181818FF
_BOTTOM_COLOR = 0x44475AFF


def _sidebar_on_resize(obj: Object, window: Tuple[int, int]) -> None:
    transform = obj.get_component("Transform")
    position = transform.position
    scale = transform.scale
    position[0] = window[0] - scale[0]
    scale[1] = window[1]
    transform.position = position
    transform.scale = scale


def _bottom_on_resize(obj: Object, window: Tuple[int, int]) -> None:
    transform = obj.get_component("Transform")
    scale = transform.scale
    scale[0] = window[0]
    transform.scale = scale


class Simulator(Frontend):
    """Window with a sidebar on the right and a panel along the bottom."""

    def __init__(self, engine: Optional[Any] = None, assets: Optional[AssetManager] = None) -> None:
        self.engine = engine if engine is not None else Engine(SCREEN_WIDTH, SCREEN_HEIGHT)
        self.assets = assets if assets is not None else AssetManager()
        self.last_access: Optional[CacheAccess] = None

        shader = self.assets.get_shader("2d")
        mesh = self.assets.get_mesh("square")

        self.sidebar = self.engine.object(shader, mesh)
        self.sidebar.add_component(
            Transform((1040, 0, 50.0), (400, 960, 1), (0, 0, 0))
        ).add_component(Color.from_hex(_SIDEBAR_COLOR))
        self.sidebar.on_resize = _sidebar_on_resize

        self.bottom = self.engine.object(shader, mesh)
        self.bottom.add_component(
            Transform((0, 0, 99.0), (1040, 250, 1), (0, 0, 0))
        ).add_component(Color.from_hex(_BOTTOM_COLOR))
        self.bottom.on_resize = _bottom_on_resize

    def tick(self, backend: Backend, addrs: deque) -> None:
        """Hand the address at the front of ``addrs`` to the back end and redraw."""
        addr = addrs[0]
        self.last_access = backend.process(addr)
        self.engine.update()

    def halted(self) -> bool:
        return self.engine.halted()