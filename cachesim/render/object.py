"""Drawable objects: a shader, a mesh and a set of named components."""

from __future__ import annotations

import types
from typing import Callable, Dict, Mapping, Optional, Tuple, Union

from cachesim.render.component import Component
from cachesim.render.mesh import Mesh
from cachesim.render.shader import Shader

ResizeHandler = Callable[["Object", Tuple[int, int]], None]

_SHADER = "Shader"
_MESH = "Mesh"


class Object:
    """Something the engine draws.

    The shader and mesh decide which draw group the object belongs to; every
    other component is bound, in insertion order, before the mesh is drawn.
    ``on_resize`` is called with the object and the new ``(width, height)``
    whenever the view changes size.
    """

    def __init__(self, shader: Optional[Shader], mesh: Optional[Mesh]) -> None:
        self.shader = shader
        self.mesh = mesh
        self.on_resize: Optional[ResizeHandler] = None
        self._components: Dict[str, Component] = {}

    @property
    def components(self) -> Mapping[str, Component]:
        """Read-only view of the components other than the shader and mesh."""
        return types.MappingProxyType(self._components)

    def add_component(self, component: Component) -> "Object":
        """Attach a component; a name already taken keeps its first component."""
        if component.name == _MESH:
            self.mesh = component  # type: ignore[assignment]
        elif component.name == _SHADER:
            self.shader = component  # type: ignore[assignment]
        else:
            self._components.setdefault(component.name, component)
        return self

    def rmv_component(self, component: Component) -> "Object":
        """Detach whatever component is filed under ``component``'s name."""
        self._components.pop(component.name, None)
        return self

    def set_component(self, name: Union[str, Component], newer: Component) -> "Object":
        """Replace the component filed under ``name``, adding it if absent.

        ``name`` may also be a component, whose name is then used.
        """
        key = name.name if isinstance(name, Component) else name
        if key == _SHADER:
            self.shader = newer  # type: ignore[assignment]
        elif key == _MESH:
            self.mesh = newer  # type: ignore[assignment]
        elif key in self._components:
            self._components[key] = newer
        else:
            self.add_component(newer)
        return self

    def get_component(self, name: str) -> Optional[Component]:
        """The component filed under ``name``, or None."""
        if name == _SHADER:
            return self.shader
        if name == _MESH:
            return self.mesh
        return self._components.get(name)

    def __repr__(self) -> str:
        names = ", ".join(self._components)
        return f"<Object shader={self.shader!r} mesh={self.mesh!r} [{names}]>"