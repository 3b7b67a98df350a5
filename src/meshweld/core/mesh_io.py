# Copyright 2025 Allard Peper (Dragon Ace / DragonAceNL)
# Licensed under the Apache License, Version 2.0 (see LICENSE).

"""
Mesh import and export using trimesh.

The importer turns every triangle geometry of a file into its own Mesh,
exactly as stored (no vertex merging by the loader). The exporter writes
a single Mesh as a single geometry with its vertex and face lists
untouched.
"""

from pathlib import Path
from typing import Optional, Union
import logging

import trimesh

from .mesh import Mesh

logger = logging.getLogger(__name__)


# Format used when the output path has no suffix
DEFAULT_EXPORT_TYPE = "obj"

SUPPORTED_EXPORT_TYPES = ("obj", "stl", "ply", "off", "glb", "gltf")


class MeshIOError(Exception):
    """Base class for mesh import and export failures."""


class MeshImportError(MeshIOError):
    """The source file could not be read or holds no usable geometry."""


class MeshExportError(MeshIOError):
    """The welded mesh could not be written."""


def import_meshes(path: Union[str, Path]) -> list[Mesh]:
    """
    Load every triangle geometry from a file.

    Args:
        path: Path to a mesh or scene file (OBJ, STL, PLY, GLB, ...)

    Returns:
        List of Mesh, one per geometry, in scene order

    Raises:
        MeshImportError: If the file does not exist, cannot be parsed,
            or contains no triangle geometry
    """
    path = Path(path)

    if not path.exists():
        raise MeshImportError(f"Mesh file not found: {path}")

    logger.info(f"Loading meshes from: {path}")

    try:
        scene = trimesh.load(str(path), force="scene", process=False)
    except Exception as e:
        raise MeshImportError(f"Failed to load {path}: {e}") from e

    meshes = []
    for name, geometry in scene.geometry.items():
        if not isinstance(geometry, trimesh.Trimesh):
            logger.debug(f"Skipping non-triangle geometry '{name}' ({type(geometry).__name__})")
            continue
        if len(geometry.faces) == 0:
            logger.debug(f"Skipping geometry '{name}' without faces")
            continue

        mesh = Mesh.from_trimesh(geometry)
        logger.debug(f"  {name}: {mesh.vertex_count} vertices, {mesh.triangle_count} triangles")
        meshes.append(mesh)

    if not meshes:
        raise MeshImportError(f"No triangle geometry found in {path}")

    logger.info(f"Loaded {len(meshes)} mesh(es) from {path.name}")

    return meshes


def resolve_export_type(path: Union[str, Path], file_type: Optional[str] = None) -> str:
    """Pick the export format from an explicit type or the path suffix."""
    if file_type:
        return file_type.lower().lstrip(".")
    suffix = Path(path).suffix.lower().lstrip(".")
    return suffix or DEFAULT_EXPORT_TYPE


def export_mesh(
    mesh: Mesh,
    path: Union[str, Path],
    file_type: Optional[str] = None,
) -> Path:
    """
    Write a mesh to file.

    Args:
        mesh: The mesh to write
        path: Output file path
        file_type: Format (obj, stl, ply, ...); defaults to the path suffix

    Returns:
        The path written

    Raises:
        MeshExportError: If the format is unsupported or writing fails
    """
    path = Path(path)
    file_type = resolve_export_type(path, file_type)

    if file_type not in SUPPORTED_EXPORT_TYPES:
        raise MeshExportError(
            f"Unsupported export format '{file_type}' "
            f"(supported: {', '.join(SUPPORTED_EXPORT_TYPES)})"
        )

    logger.info(f"Saving mesh to: {path} ({file_type})")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        mesh.to_trimesh().export(str(path), file_type=file_type)
    except Exception as e:
        raise MeshExportError(f"Failed to write {path}: {e}") from e

    logger.info(f"Saved mesh: {mesh.vertex_count} vertices, {mesh.triangle_count} triangles")

    return path
