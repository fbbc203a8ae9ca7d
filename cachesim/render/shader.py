"""GLSL shader programs and uniform upload."""

from __future__ import annotations

import sys
from typing import Any, Optional

import numpy as np

from cachesim.render.component import Component

_GL_NO_ERROR = 0
_GL_ERROR_NAMES = {
    0x0500: "GL_INVALID_ENUM",
    0x0501: "GL_INVALID_VALUE",
    0x0502: "GL_INVALID_OPERATION",
    0x0505: "GL_OUT_OF_MEMORY",
    0x0506: "GL_INVALID_FRAMEBUFFER_OPERATION",
}

_ARRAY_KINDS = {
    (4, 4): "mat4",
    (3, 3): "mat3",
    (4,): "vec4",
    (3,): "vec3",
    (2,): "vec2",
}

_OPERATIONS = {
    "mat4": "glUniformMatrix4fv",
    "mat3": "glUniformMatrix3fv",
    "vec4": "glUniform4fv",
    "vec3": "glUniform3fv",
    "vec2": "glUniform2fv",
    "float": "glUniform1f",
    "int": "glUniform1i",
    "bool": "glUniform1i (for bool)",
}


def check_gl_errors(operation: str, shader_id: int, uniform_name: str) -> bool:
    """Drain the GL error flags, reporting each on stderr.

    Returns True when no error was pending.
    """
    from pyglet import gl

    had_error = False
    while (error := gl.glGetError()) != _GL_NO_ERROR:
        had_error = True
        description = _GL_ERROR_NAMES.get(error, f"Unknown error code {error}")
        print(
            f"OpenGL Error after operation '{operation}' for uniform "
            f"'{uniform_name}' in Shader Program {shader_id}: {description}",
            file=sys.stderr,
        )
    return not had_error


def _uniform_kind(data: Any) -> "tuple[str, Any]":
    if isinstance(data, (bool, np.bool_)):
        return "bool", int(data)
    if isinstance(data, (int, np.integer)):
        return "int", int(data)
    if isinstance(data, (float, np.floating)):
        return "float", float(data)
    try:
        arr = np.asarray(data, dtype=np.float32)
    except (TypeError, ValueError):
        raise TypeError(f"cannot send {type(data).__name__} as a uniform") from None
    kind = _ARRAY_KINDS.get(arr.shape)
    if kind is None:
        raise TypeError(f"cannot send an array of shape {arr.shape} as a uniform")
    if kind.startswith("mat"):
        # GL expects matrices column by column.
        return kind, tuple(arr.flatten(order="F").tolist())
    return kind, tuple(arr.tolist())


class Shader(Component):
    """A linked vertex and fragment program.

    The program is compiled on first use, once a GL context exists.
    """

    def __init__(self, vertex_src: str, frag_src: str) -> None:
        super().__init__("Shader")
        self.vertex_src = vertex_src
        self.frag_src = frag_src
        self._program: Optional[Any] = None

    def _linked(self) -> Any:
        if self._program is None:
            from pyglet.graphics.shader import Shader as _Stage
            from pyglet.graphics.shader import ShaderException, ShaderProgram

            try:
                vertex = _Stage(self.vertex_src, "vertex")
                fragment = _Stage(self.frag_src, "fragment")
                self._program = ShaderProgram(vertex, fragment)
            except ShaderException as exc:
                raise RuntimeError(f"shader build failed: {exc}") from exc
        return self._program

    @property
    def id(self) -> int:
        """The GL program name, compiling and linking it if needed."""
        return self._linked().id

    def bind(self, engine: Any) -> None:
        from pyglet import gl

        gl.glUseProgram(self.id)

    def unbind(self) -> None:
        from pyglet import gl

        gl.glUseProgram(0)

    def set(self, name: str, data: Any) -> bool:
        """Upload ``data`` to the uniform ``name``.

        Accepts bools, ints, floats, 2/3/4-vectors and 3x3/4x4 matrices given
        row-major. Returns False if the uniform is missing or GL reports an
        error; raises TypeError for data of any other kind.
        """
        kind, value = _uniform_kind(data)
        program = self._linked()
        if name not in program.uniforms:
            print(f"Error Shader.set({name}): location not found", file=sys.stderr)
            return False

        program[name] = value
        return check_gl_errors(_OPERATIONS[kind], program.id, name)