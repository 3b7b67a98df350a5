# Copyright 2025 Allard Peper (Dragon Ace / DragonAceNL)
# Licensed under the Apache License, Version 2.0 (see LICENSE).

"""
Plain triangle mesh value type.

A Mesh is just an ordered vertex array and an ordered triangle array.
The vertex order is the index space the triangles refer to.
"""

from dataclasses import dataclass, field

import numpy as np
import trimesh


def _as_rows(values, dtype, name: str) -> np.ndarray:
    array = np.asarray(values, dtype=dtype)
    if array.size == 0:
        return array.reshape(0, 3)
    if array.ndim != 2 or array.shape[1] != 3:
        raise ValueError(f"{name} must have shape (N, 3), got {array.shape}")
    return array


def _empty_vertices() -> np.ndarray:
    return np.zeros((0, 3), dtype=np.float64)


def _empty_triangles() -> np.ndarray:
    return np.zeros((0, 3), dtype=np.int64)


@dataclass
class Mesh:
    """
    Ordered vertex positions plus ordered triangles.

    Attributes:
        vertices: (N, 3) float64 array of positions
        triangles: (M, 3) int64 array of vertex indices, winding preserved

    Both arrays must be (N, 3) or empty; anything else raises ValueError.
    Index ranges are not checked; producers are responsible for
    keeping every triangle index below len(vertices).
    """

    vertices: np.ndarray = field(default_factory=_empty_vertices)
    triangles: np.ndarray = field(default_factory=_empty_triangles)

    def __post_init__(self):
        self.vertices = _as_rows(self.vertices, np.float64, "vertices")
        self.triangles = _as_rows(self.triangles, np.int64, "triangles")

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)

    def copy(self) -> "Mesh":
        """Return an independent copy."""
        return Mesh(vertices=self.vertices.copy(), triangles=self.triangles.copy())

    @classmethod
    def from_trimesh(cls, mesh: trimesh.Trimesh) -> "Mesh":
        """Create from a trimesh object without merging or reordering vertices."""
        return cls(
            vertices=np.array(mesh.vertices, dtype=np.float64),
            triangles=np.array(mesh.faces, dtype=np.int64),
        )

    def to_trimesh(self) -> trimesh.Trimesh:
        """Convert to a trimesh object, keeping vertex and face lists as-is."""
        return trimesh.Trimesh(
            vertices=self.vertices.copy(),
            faces=self.triangles.copy(),
            process=False,
        )
