"""Base class for the parts an on-screen object is built from."""

from __future__ import annotations

import abc
from typing import Any


class Component(abc.ABC):
    """A named piece of render state that is bound before an object is drawn.

    ``bind`` receives the engine doing the drawing; the engine exposes the
    shader currently in use as its ``shader`` attribute.
    """

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        """The name the owning object files this component under."""
        return self._name

    @abc.abstractmethod
    def bind(self, engine: Any) -> None:
        """Make this component's state current for the next draw."""

    @abc.abstractmethod
    def unbind(self) -> None:
        """Undo what ``bind`` did."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._name!r}>"


class Texture(Component):
    """Texture slot; it carries no state yet, so binding it does nothing."""

    def __init__(self) -> None:
        super().__init__("Texture")

    def bind(self, engine: Any) -> None:
        return None

    def unbind(self) -> None:
        return None