# Copyright 2025 Allard Peper (Dragon Ace / DragonAceNL)
# Licensed under the Apache License, Version 2.0 (see LICENSE).

"""
Core logic for welding meshes.

- mesh: Plain Mesh value type
- welder: Grid-based vertex welding engine
- mesh_io: Import and export through trimesh
- pipeline: File-to-file welding
"""

from .mesh import Mesh

from .welder import (
    GRID_SCALE,
    CellRecord,
    SpatialWelder,
    WeldStats,
    weld_meshes,
    weld_session,
)

from .mesh_io import (
    DEFAULT_EXPORT_TYPE,
    SUPPORTED_EXPORT_TYPES,
    MeshIOError,
    MeshImportError,
    MeshExportError,
    import_meshes,
    export_mesh,
)

from .pipeline import WeldResult, weld_file

__all__ = [
    "Mesh",
    # Welding
    "GRID_SCALE",
    "CellRecord",
    "SpatialWelder",
    "WeldStats",
    "weld_meshes",
    "weld_session",
    # I/O
    "DEFAULT_EXPORT_TYPE",
    "SUPPORTED_EXPORT_TYPES",
    "MeshIOError",
    "MeshImportError",
    "MeshExportError",
    "import_meshes",
    "export_mesh",
    # Pipeline
    "WeldResult",
    "weld_file",
]
