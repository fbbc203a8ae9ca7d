"""Indexed triangle meshes."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np

from cachesim.render.component import Component

_MAX_INDEX = 0xFFFF


class VertsMissing(ValueError):
    """The vertex list does not hold a whole number of 3D points."""


def index_vertices(vertices: Iterable[float]) -> Tuple[List[float], List[int]]:
    """Merge repeated points of a flat xyz list.

    Returns the distinct points, flattened in first-seen order, and for each
    input point the index of its distinct copy.
    """
    flat = [float(v) for v in vertices]
    if len(flat) % 3:
        raise VertsMissing(f"{len(flat)} coordinates is not a multiple of 3")

    seen: Dict[Tuple[float, float, float], int] = {}
    unique: List[float] = []
    indices: List[int] = []
    for point in zip(flat[0::3], flat[1::3], flat[2::3]):
        index = seen.get(point)
        if index is None:
            index = len(seen)
            if index > _MAX_INDEX:
                raise ValueError("mesh has more distinct vertices than 16-bit indices allow")
            seen[point] = index
            unique.extend(point)
        indices.append(index)
    return unique, indices


class Mesh(Component):
    """Triangle list drawn with 16-bit indices.

    GPU buffers are created the first time the mesh is bound, so a mesh can be
    built before a GL context exists.
    """

    def __init__(self, vertices: Iterable[float]) -> None:
        super().__init__("Mesh")
        unique, indices = index_vertices(vertices)
        self.vert_amount = len(indices)
        self.vertices = np.array(unique, dtype=np.float32)
        self.indices = np.array(indices, dtype=np.uint16)
        self._vao: Optional[int] = None
        self._shader_id: Optional[int] = None

    def bind(self, engine: Any) -> None:
        from pyglet import gl

        if self._vao is None:
            self._vao = self._upload(gl)
        gl.glBindVertexArray(self._vao)
        self._shader_id = engine.shader.id

    def unbind(self) -> None:
        from pyglet import gl

        gl.glBindVertexArray(0)

    def draw(self) -> None:
        """Draw the bound mesh as triangles."""
        from pyglet import gl

        gl.glDrawElements(gl.GL_TRIANGLES, len(self.indices), gl.GL_UNSIGNED_SHORT, 0)

    def _upload(self, gl: Any) -> int:
        # Out-parameters of pointer type accept an instance of the pointed type.
        vao, vbo, ebo = gl.GLuint(), gl.GLuint(), gl.GLuint()
        gl.glGenVertexArrays(1, vao)
        gl.glGenBuffers(1, vbo)
        gl.glGenBuffers(1, ebo)

        gl.glBindVertexArray(vao.value)

        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, vbo.value)
        gl.glBufferData(
            gl.GL_ARRAY_BUFFER,
            self.vertices.nbytes,
            self.vertices.tobytes(),
            gl.GL_STATIC_DRAW,
        )

        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, ebo.value)
        gl.glBufferData(
            gl.GL_ELEMENT_ARRAY_BUFFER,
            self.indices.nbytes,
            self.indices.tobytes(),
            gl.GL_STATIC_DRAW,
        )

        gl.glEnableVertexAttribArray(0)
        gl.glVertexAttribPointer(
            0, 3, gl.GL_FLOAT, gl.GL_FALSE, 3 * self.vertices.itemsize, 0
        )

        gl.glBindVertexArray(0)
        return vao.value