"""A small 2D renderer that draws objects grouped by shader and mesh."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

import numpy as np

from cachesim.render.mesh import Mesh
from cachesim.render.object import Object
from cachesim.render.shader import Shader, check_gl_errors

Z_NEAR = 0.0
Z_FAR = 100.0
_CLEAR_COLOR = (40 / 255.0, 42 / 255.0, 54 / 255.0, 1.0)
_TITLE = "2D Renderer"


def ortho(
    left: float, right: float, bottom: float, top: float, near: float, far: float
) -> np.ndarray:
    """Orthographic projection mapping the box onto [-1, 1] on each axis.

    Returned row-major, as a 4x4 float32 array.
    """
    m = np.eye(4, dtype=np.float32)
    m[0, 0] = 2.0 / (right - left)
    m[1, 1] = 2.0 / (top - bottom)
    m[2, 2] = -2.0 / (far - near)
    m[0, 3] = -(right + left) / (right - left)
    m[1, 3] = -(top + bottom) / (top - bottom)
    m[2, 3] = -(far + near) / (far - near)
    return m


def _projection(width: float, height: float) -> np.ndarray:
    return ortho(0.0, float(width), 0.0, float(height), Z_NEAR, -Z_FAR)


class Engine:
    """Owns the window and every object it draws.

    The window opens on the first call to ``update``. While drawing, the
    shader in use is available as ``shader`` so components can set uniforms.
    """

    def __init__(self, screen_width: int, screen_height: int) -> None:
        self.width = screen_width
        self.height = screen_height
        self.projection = _projection(screen_width, screen_height)
        self.shader: Optional[Shader] = None
        self._objects: Dict[Shader, Dict[Mesh, List[Object]]] = {}
        self._window: Any = None
        self._should_close = False

    def __enter__(self) -> "Engine":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __iter__(self) -> Iterator[Object]:
        for meshes in self._objects.values():
            for objs in meshes.values():
                yield from objs

    def __len__(self) -> int:
        return sum(len(objs) for meshes in self._objects.values() for objs in meshes.values())

    def object(self, shader: Shader, mesh: Mesh) -> Object:
        """Create, register and return a new object drawn with ``shader`` and ``mesh``."""
        obj = Object(shader, mesh)
        self._group(obj).append(obj)
        return obj

    def add_object(self, obj: Object) -> None:
        """Register an existing object, redrawing if the window is open."""
        self._group(obj).append(obj)
        if self._window is not None:
            self.update()

    def rmv_object(self, obj: Object) -> None:
        """Stop drawing ``obj``; objects that are not registered are ignored."""
        meshes = self._objects.get(obj.shader)  # type: ignore[arg-type]
        if meshes is None:
            return
        objs = meshes.get(obj.mesh)  # type: ignore[arg-type]
        if objs is None:
            return
        for i, candidate in enumerate(objs):
            if candidate is obj:
                del objs[i]
                break
        if not objs:
            del meshes[obj.mesh]  # type: ignore[arg-type]
            if not meshes:
                del self._objects[obj.shader]  # type: ignore[arg-type]

    def set_view(self, width: int, height: int) -> None:
        """Resize the view and let every object react to the new size."""
        self.width = width
        self.height = height
        if self._window is not None:
            from pyglet import gl

            fb_width, fb_height = self._window.get_framebuffer_size()
            gl.glViewport(0, 0, fb_width, fb_height)
        self.projection = _projection(width, height)
        size = (width, height)
        for obj in list(self):
            if obj.on_resize is not None:
                obj.on_resize(obj, size)

    def update(self) -> None:
        """Draw one frame and process pending window events."""
        if self._should_close:
            return
        from pyglet import gl

        window = self._open_window()
        window.switch_to()

        gl.glClearColor(*_CLEAR_COLOR)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)

        for shader, meshes in self._objects.items():
            self.shader = shader
            shader.bind(self)
            shader.set("m_projection", self.projection)
            for mesh, objs in meshes.items():
                mesh.bind(self)
                for obj in objs:
                    for component in obj.components.values():
                        component.bind(self)
                    mesh.draw()
                    check_gl_errors("Draw", shader.id, "N/A")
                    for component in obj.components.values():
                        component.unbind()
                mesh.unbind()
            shader.unbind()

        window.flip()
        window.dispatch_events()

    def halted(self) -> bool:
        """Whether the user asked for the window to close, or it was closed."""
        return self._should_close

    def close(self) -> None:
        """Close the window, if one is open, and halt."""
        self._should_close = True
        if self._window is not None:
            self._window.close()
            self._window = None

    def _group(self, obj: Object) -> List[Object]:
        if obj.shader is None or obj.mesh is None:
            raise ValueError("an object needs both a shader and a mesh to be drawn")
        return self._objects.setdefault(obj.shader, {}).setdefault(obj.mesh, [])

    def _open_window(self) -> Any:
        if self._window is not None:
            return self._window
        import pyglet
        from pyglet import gl

        config = gl.Config(
            major_version=3,
            minor_version=3,
            forward_compatible=True,
            double_buffer=True,
            depth_size=24,
        )
        window = pyglet.window.Window(
            width=self.width,
            height=self.height,
            caption=_TITLE,
            resizable=True,
            config=config,
        )
        self._window = window
        window.push_handlers(
            on_key_press=self._on_key_press,
            on_resize=self._on_resize,
            on_close=self._on_close,
        )

        fb_width, fb_height = window.get_framebuffer_size()
        gl.glViewport(0, 0, fb_width, fb_height)
        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glEnable(gl.GL_BLEND)
        gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE_MINUS_SRC_ALPHA)
        return window

    def _on_key_press(self, symbol: int, modifiers: int) -> bool:
        from pyglet.window import key

        if symbol == key.ESCAPE:
            self._should_close = True
        print(f"Key Pressed: {symbol}")
        return True

    def _on_resize(self, width: int, height: int) -> bool:
        self.set_view(width, height)
        return True

    def _on_close(self) -> bool:
        self._should_close = True
        return True