# Copyright 2025 Allard Peper (Dragon Ace / DragonAceNL)
# Licensed under the Apache License, Version 2.0 (see LICENSE).

"""
File-to-file welding: import, weld, export.

Import failures abort before welding and export failures after it;
both propagate to the caller as MeshImportError / MeshExportError.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union
import logging
import time

from .mesh import Mesh
from .mesh_io import import_meshes, export_mesh
from .welder import GRID_SCALE, WeldStats, weld_session

logger = logging.getLogger(__name__)


@dataclass
class WeldResult:
    """Result of welding one file."""
    input_path: Path
    output_path: Optional[Path]
    mesh_count: int
    grid_scale: float
    duration_ms: float
    stats: WeldStats = field(default_factory=WeldStats)
    mesh: Optional[Mesh] = None

    def to_dict(self) -> dict:
        """Convert to dictionary (excluding mesh)."""
        return {
            "input": str(self.input_path),
            "output": str(self.output_path) if self.output_path else None,
            "mesh_count": self.mesh_count,
            "grid_scale": self.grid_scale,
            "duration_ms": self.duration_ms,
            "stats": self.stats.to_dict(),
        }


def weld_file(
    input_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    grid_scale: float = GRID_SCALE,
    file_type: Optional[str] = None,
) -> WeldResult:
    """
    Weld all meshes of a file into one and optionally write it.

    Args:
        input_path: Source mesh or scene file
        output_path: Destination file; nothing is written when None
        grid_scale: Grid cells per spatial unit
        file_type: Export format; defaults to the output suffix

    Returns:
        WeldResult with the welded mesh and session statistics

    Raises:
        MeshImportError: If the input cannot be loaded
        MeshExportError: If the output cannot be written
    """
    input_path = Path(input_path)
    start = time.perf_counter()

    meshes = import_meshes(input_path)

    welder = weld_session(meshes, grid_scale=grid_scale)
    welded = welder.get_mesh()

    if output_path is not None:
        output_path = export_mesh(welded, output_path, file_type=file_type)

    return WeldResult(
        input_path=input_path,
        output_path=output_path,
        mesh_count=len(meshes),
        grid_scale=welder.grid_scale,
        duration_ms=(time.perf_counter() - start) * 1000,
        stats=welder.stats,
        mesh=welded,
    )
