"""Position, scale and rotation of an object as a model matrix."""

from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np

from cachesim.render.component import Component


def _vec3(value: Sequence[float]) -> np.ndarray:
    arr = np.asarray(value, dtype=np.float32)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {arr.shape}")
    return arr.copy()


class Transform(Component):
    """Model transform built as translation * rotation * scale.

    Rotation is given in degrees; only its z component is used.
    """

    def __init__(
        self,
        position: Sequence[float],
        scale: Sequence[float],
        rotation: Sequence[float],
    ) -> None:
        super().__init__("Transform")
        self._position = _vec3(position)
        self._scale = _vec3(scale)
        self._rotation = _vec3(rotation)
        self._matrix = self._compose()

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value: Sequence[float]) -> None:
        new = _vec3(value)
        if not np.array_equal(new, self._position):
            self._position = new
            self._matrix = self._compose()

    @property
    def scale(self) -> np.ndarray:
        return self._scale.copy()

    @scale.setter
    def scale(self, value: Sequence[float]) -> None:
        new = _vec3(value)
        if not np.array_equal(new, self._scale):
            self._scale = new
            self._matrix = self._compose()

    @property
    def rotation(self) -> np.ndarray:
        return self._rotation.copy()

    @rotation.setter
    def rotation(self, value: Sequence[float]) -> None:
        new = _vec3(value)
        if not np.array_equal(new, self._rotation):
            self._rotation = new
            self._matrix = self._compose()

    @property
    def matrix(self) -> np.ndarray:
        """The 4x4 model matrix, row-major."""
        return self._matrix.copy()

    def move(self, delta: Sequence[float]) -> None:
        """Shift the position by ``delta``."""
        step = _vec3(delta)
        if not step.any():
            return
        self._position = self._position + step
        self._matrix = self._compose()

    def bind(self, engine: Any) -> None:
        engine.shader.set("m_model", self._matrix)

    def unbind(self) -> None:
        return None

    def _compose(self) -> np.ndarray:
        translation = np.eye(4, dtype=np.float32)
        translation[:3, 3] = self._position

        angle = math.radians(float(self._rotation[2]))
        c, s = math.cos(angle), math.sin(angle)
        rotation = np.eye(4, dtype=np.float32)
        rotation[0, 0], rotation[0, 1] = c, -s
        rotation[1, 0], rotation[1, 1] = s, c

        scaling = np.diag([*self._scale.tolist(), 1.0]).astype(np.float32)
        return translation @ rotation @ scaling