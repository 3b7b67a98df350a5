# Copyright 2025 Allard Peper (Dragon Ace / DragonAceNL)
# Licensed under the Apache License, Version 2.0 (see LICENSE).

"""Pytest configuration and fixtures for MeshWeld tests."""

import pytest
import trimesh

from meshweld.core import Mesh


def unit_box(offset=(0.0, 0.0, 0.0)) -> trimesh.Trimesh:
    """Unit cube centered on offset, with shared (already welded) vertices."""
    box = trimesh.creation.box(extents=[1, 1, 1])
    box.apply_translation(offset)
    return box


@pytest.fixture(scope="session")
def test_meshes_dir(tmp_path_factory):
    """Generate real mesh files to weld."""
    meshes_dir = tmp_path_factory.mktemp("test_meshes")

    # 1. Single cube as STL: every face carries its own 3 vertices
    unit_box().export(str(meshes_dir / "cube.stl"))

    # 2. Two cubes sharing the x=0.5 face, stored as separate geometries
    scene = trimesh.Scene()
    scene.add_geometry(unit_box(), geom_name="left")
    scene.add_geometry(unit_box((1.0, 0.0, 0.0)), geom_name="right")
    scene.export(str(meshes_dir / "two_cubes.glb"))

    # 3. Not a mesh at all
    (meshes_dir / "garbage.stl").write_text("this is not a mesh file\n")

    # 4. Vertices but no faces
    (meshes_dir / "points.obj").write_text("v 0 0 0\nv 1 0 0\nv 0 1 0\n")

    return meshes_dir


@pytest.fixture
def cube_stl(test_meshes_dir):
    return test_meshes_dir / "cube.stl"


@pytest.fixture
def two_cubes_glb(test_meshes_dir):
    return test_meshes_dir / "two_cubes.glb"


@pytest.fixture
def garbage_file(test_meshes_dir):
    return test_meshes_dir / "garbage.stl"


@pytest.fixture
def points_only_file(test_meshes_dir):
    return test_meshes_dir / "points.obj"


@pytest.fixture
def single_triangle():
    """One triangle spanning three distinct grid cells."""
    return Mesh(
        vertices=[(0.0, 0.0, 0.0), (0.5, 0.0, 0.0), (0.0, 0.5, 0.0)],
        triangles=[(0, 1, 2)],
    )


@pytest.fixture
def unwelded_cube():
    """Cube with 36 vertices, three per triangle."""
    box = unit_box()
    return Mesh(vertices=box.vertices[box.faces].reshape(-1, 3),
                triangles=[(3 * i, 3 * i + 1, 3 * i + 2) for i in range(len(box.faces))])
