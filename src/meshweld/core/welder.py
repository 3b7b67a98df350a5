# Copyright 2025 Allard Peper (Dragon Ace / DragonAceNL)
# Licensed under the Apache License, Version 2.0 (see LICENSE).

"""
Spatial vertex welding on a uniform grid.

Every vertex position is quantized to an integer grid cell with
floor(position * grid_scale). All vertices that land in the same cell
are fused into one canonical vertex, so "are these the same point"
becomes an exact lookup on an integer tuple instead of a tolerance
comparison.

Rules:
- A cell gets its canonical index on first occupancy and keeps it.
- Canonical indices are dense, in order of first occupancy.
- The position emitted for a cell is the first original position that
  landed in it. Later vertices are merged into it without moving it.
- A triangle whose corners fall into fewer than three distinct cells is
  dropped silently and allocates nothing.

Two near-coincident vertices on opposite sides of a cell boundary are
not merged. The merge radius is fixed by the cell edge (1 / grid_scale).

A SpatialWelder is a single merge session. It is not thread-safe:
canonical index order depends on the order of append_mesh calls.
"""

from dataclasses import dataclass
from typing import Iterable, NamedTuple
import logging
import math

import numpy as np

from .mesh import Mesh

logger = logging.getLogger(__name__)


# Grid cells per spatial unit (cell edge length 0.1)
GRID_SCALE = 10.0

GridCell = tuple[int, int, int]


class CellRecord(NamedTuple):
    """Canonical vertex index and representative position of an occupied cell."""
    index: int
    position: tuple[float, float, float]


@dataclass
class WeldStats:
    """Running counters for a welding session."""
    meshes_appended: int = 0
    input_vertices: int = 0
    input_triangles: int = 0
    triangles_kept: int = 0
    triangles_dropped: int = 0
    output_vertices: int = 0

    @property
    def merged_vertex_count(self) -> int:
        """Input vertices that did not become an output vertex of their own."""
        return self.input_vertices - self.output_vertices

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "meshes_appended": self.meshes_appended,
            "input_vertices": self.input_vertices,
            "input_triangles": self.input_triangles,
            "triangles_kept": self.triangles_kept,
            "triangles_dropped": self.triangles_dropped,
            "output_vertices": self.output_vertices,
            "merged_vertex_count": self.merged_vertex_count,
        }


class SpatialWelder:
    """
    Accumulates meshes into one welded mesh.

    Usage:
        welder = SpatialWelder()
        for mesh in meshes:
            welder.append_mesh(mesh)
        merged = welder.get_mesh()
    """

    def __init__(self, grid_scale: float = GRID_SCALE):
        """
        Initialize an empty welding session.

        Args:
            grid_scale: Grid cells per spatial unit; the cell edge is 1 / grid_scale

        Raises:
            ValueError: If grid_scale is not a positive finite number
        """
        if not math.isfinite(grid_scale) or grid_scale <= 0:
            raise ValueError(f"grid_scale must be a positive finite number, got {grid_scale}")

        self.grid_scale = float(grid_scale)
        self.stats = WeldStats()
        self._cells: dict[GridCell, CellRecord] = {}
        self._triangles: list[tuple[int, int, int]] = []

    @property
    def cell_size(self) -> float:
        return 1.0 / self.grid_scale

    @property
    def vertex_count(self) -> int:
        """Number of canonical vertices assigned so far."""
        return len(self._cells)

    @property
    def triangle_count(self) -> int:
        return len(self._triangles)

    def to_grid_cell(self, position) -> GridCell:
        """Quantize a single position to its grid cell."""
        cell = self._grid_cells(np.asarray(position, dtype=np.float64).reshape(1, 3))[0]
        return (int(cell[0]), int(cell[1]), int(cell[2]))

    def _grid_cells(self, vertices: np.ndarray) -> np.ndarray:
        return np.floor(vertices * self.grid_scale).astype(np.int64)

    def append_mesh(self, mesh: Mesh) -> None:
        """
        Weld one mesh into the session.

        Triangles are processed in order; each surviving triangle is
        appended with its corners remapped to canonical indices and its
        winding preserved. The input mesh is not modified.

        Args:
            mesh: Mesh whose triangle indices are valid for its own vertices
        """
        vertices = mesh.vertices
        triangles = mesh.triangles

        corner_cells = self._grid_cells(vertices)[triangles]
        distinct = (
            np.any(corner_cells[:, 0] != corner_cells[:, 1], axis=1)
            & np.any(corner_cells[:, 1] != corner_cells[:, 2], axis=1)
            & np.any(corner_cells[:, 2] != corner_cells[:, 0], axis=1)
        )

        kept_cells = corner_cells[distinct].tolist()
        kept_positions = vertices[triangles[distinct]].tolist()
        cells_before = len(self._cells)

        for cells, positions in zip(kept_cells, kept_positions):
            indices = []
            for cell, position in zip(cells, positions):
                key = (cell[0], cell[1], cell[2])
                record = self._cells.get(key)
                if record is None:
                    record = CellRecord(len(self._cells), (position[0], position[1], position[2]))
                    self._cells[key] = record
                indices.append(record.index)
            self._triangles.append((indices[0], indices[1], indices[2]))

        kept = len(kept_cells)
        dropped = len(triangles) - kept

        self.stats.meshes_appended += 1
        self.stats.input_vertices += len(vertices)
        self.stats.input_triangles += len(triangles)
        self.stats.triangles_kept += kept
        self.stats.triangles_dropped += dropped
        self.stats.output_vertices = len(self._cells)

        logger.debug(
            f"Appended mesh {self.stats.meshes_appended}: "
            f"{len(vertices)} vertices, {len(triangles)} triangles -> "
            f"{kept} kept, {dropped} degenerate, "
            f"{len(self._cells) - cells_before} new cells"
        )

    def get_mesh(self) -> Mesh:
        """
        Build the welded mesh from the accumulated state.

        Can be called any number of times; it neither resets nor consumes
        the session, and the returned Mesh shares no memory with it.
        """
        vertices = np.zeros((len(self._cells), 3), dtype=np.float64)
        for record in self._cells.values():
            vertices[record.index] = record.position

        triangles = np.array(self._triangles, dtype=np.int64).reshape(-1, 3)
        return Mesh(vertices=vertices, triangles=triangles)
def weld_session(meshes: Iterable[Mesh], grid_scale: float = GRID_SCALE) -> SpatialWelder:
    """
    Append a sequence of meshes to a fresh welder.

    Args:
        meshes: Meshes to merge, appended in iteration order
        grid_scale: Grid cells per spatial unit

    Returns:
        The SpatialWelder holding the merged state and its stats
    """
    welder = SpatialWelder(grid_scale=grid_scale)
    for mesh in meshes:
        welder.append_mesh(mesh)

    stats = welder.stats
    logger.info(
        f"Welded {stats.meshes_appended} mesh(es): "
        f"{stats.input_vertices} -> {stats.output_vertices} vertices, "
        f"{stats.input_triangles} -> {stats.triangles_kept} triangles, "
        f"{stats.triangles_dropped} degenerate dropped"
    )
    return welder


def weld_meshes(meshes: Iterable[Mesh], grid_scale: float = GRID_SCALE) -> Mesh:
    """Weld a sequence of meshes into one and return the merged Mesh."""
    return weld_session(meshes, grid_scale=grid_scale).get_mesh()
