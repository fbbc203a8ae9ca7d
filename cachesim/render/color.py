"""Flat colour component."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from cachesim.render.component import Component


class Color(Component):
    """An RGBA colour, sent to the shader as the ``v_color`` uniform."""

    def __init__(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        super().__init__("Color")
        self.color = np.array([r, g, b, a], dtype=np.float32)

    @classmethod
    def from_hex(cls, value: int) -> "Color":
        """Build a colour from a 32-bit ``0xRRGGBBAA`` value."""
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"colour {value:#x} does not fit in 32 bits")
        channels = [(value >> shift) & 0xFF for shift in (24, 16, 8, 0)]
        return cls(*(channel / 255.0 for channel in channels))

    @classmethod
    def from_vec(cls, color: Sequence[float]) -> "Color":
        """Build a colour from a four-element RGBA sequence."""
        arr = np.asarray(color, dtype=np.float32)
        if arr.shape != (4,):
            raise ValueError(f"expected four colour channels, got shape {arr.shape}")
        return cls(*arr.tolist())

    def bind(self, engine: Any) -> None:
        engine.shader.set("v_color", self.color)

    def unbind(self) -> None:
        return None