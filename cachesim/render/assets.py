"""Loading and caching of shaders, meshes and textures from disk."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Union

from cachesim.render.component import Texture
from cachesim.render.mesh import Mesh
from cachesim.render.shader import Shader


class AssetNotFound(LookupError):
    """An asset file does not exist."""


class AssetNotImplemented(NotImplementedError):
    """The asset kind cannot be loaded from disk."""


def parse_mesh_csv(text: str) -> List[float]:
    """Read a flat list of coordinates separated by commas and newlines.

    Lines whose first non-blank character is ``#`` are comments; a leading
    ``+`` on a number is allowed.
    """
    values: List[float] = []
    for line in text.splitlines():
        if line.lstrip().startswith("#"):
            continue
        for token in line.split(","):
            token = token.strip()
            if not token:
                continue
            if token.startswith("+"):
                token = token[1:]
            try:
                values.append(float(token))
            except ValueError:
                raise ValueError(f"not a number in mesh data: {token!r}") from None
    return values


class AssetManager:
    """Hands out assets by name, loading each from ``root`` only once.

    Shaders live in ``root/shaders/<name>.vert`` and ``<name>.frag``, meshes in
    ``root/meshes/<name>.csv``.
    """

    def __init__(self, root: Optional[Union[str, Path]] = None) -> None:
        self.root = Path(root) if root is not None else Path.cwd() / "assets"
        self.textures: Dict[str, Texture] = {}
        self.shaders: Dict[str, Shader] = {}
        self.meshes: Dict[str, Mesh] = {}

    def get_texture(self, name: str) -> Texture:
        """A texture registered earlier under ``name``."""
        try:
            return self.textures[name]
        except KeyError:
            raise AssetNotImplemented(f"textures cannot be loaded yet: {name!r}") from None

    def get_shader(self, name: str) -> Shader:
        """The shader ``name``, read from its vertex and fragment sources."""
        shader = self.shaders.get(name)
        if shader is None:
            directory = self.root / "shaders"
            vertex = self._read(directory / f"{name}.vert")
            fragment = self._read(directory / f"{name}.frag")
            shader = self.shaders[name] = Shader(vertex, fragment)
        return shader

    def get_mesh(self, name: str) -> Mesh:
        """The mesh ``name``, read from its CSV vertex list."""
        mesh = self.meshes.get(name)
        if mesh is None:
            text = self._read(self.root / "meshes" / f"{name}.csv")
            mesh = self.meshes[name] = Mesh(parse_mesh_csv(text))
        return mesh

    @staticmethod
    def _read(path: Path) -> str:
        try:
            return path.read_text()
        except FileNotFoundError:
            raise AssetNotFound(f"asset file not found: {path}") from None