# Copyright 2025 Allard Peper (Dragon Ace / DragonAceNL)
# Licensed under the Apache License, Version 2.0 (see LICENSE).

"""Tests for the meshweld command-line interface."""

import json

import pytest
from click.testing import CliRunner

from meshweld import __version__
from meshweld.cli.main import main, EXIT_IMPORT_FAILED, EXIT_EXPORT_FAILED


@pytest.fixture
def runner():
    return CliRunner()


def parse_json(output: str) -> dict:
    return json.loads(output[output.index("{"):])


class TestWeldCommand:
    """Tests for 'meshweld weld'."""

    def test_weld(self, runner, two_cubes_glb, tmp_path):
        output = tmp_path / "merged.obj"

        result = runner.invoke(main, ["weld", "-i", str(two_cubes_glb), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert output.exists()
        assert "Welded 2 mesh(es)" in result.output

    def test_default_output_path(self, runner, cube_stl, tmp_path):
        source = tmp_path / "part.stl"
        source.write_bytes(cube_stl.read_bytes())

        result = runner.invoke(main, ["weld", "-i", str(source)])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "part_welded.obj").exists()

    def test_format_option(self, runner, cube_stl, tmp_path):
        source = tmp_path / "part.stl"
        source.write_bytes(cube_stl.read_bytes())

        result = runner.invoke(main, ["weld", "-i", str(source), "--format", "ply"])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "part_welded.ply").exists()

    def test_refuses_overwrite(self, runner, cube_stl, tmp_path):
        output = tmp_path / "out.obj"
        output.write_text("keep me")

        result = runner.invoke(main, ["weld", "-i", str(cube_stl), "-o", str(output)])

        assert result.exit_code == 1
        assert "--overwrite" in result.output
        assert output.read_text() == "keep me"

    def test_overwrite(self, runner, cube_stl, tmp_path):
        output = tmp_path / "out.obj"
        output.write_text("replace me")

        result = runner.invoke(
            main, ["weld", "-i", str(cube_stl), "-o", str(output), "--overwrite"]
        )

        assert result.exit_code == 0, result.output
        assert output.read_text() != "replace me"

    def test_report(self, runner, cube_stl, tmp_path):
        report = tmp_path / "reports" / "weld.json"

        result = runner.invoke(main, [
            "weld", "-i", str(cube_stl), "-o", str(tmp_path / "out.obj"),
            "-r", str(report), "-g", "20",
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(report.read_text())
        assert data["grid_scale"] == 20.0
        assert data["stats"]["output_vertices"] == 8
        assert data["stats"]["input_vertices"] == 36

    def test_import_failure_exit_code(self, runner, garbage_file, tmp_path):
        result = runner.invoke(
            main, ["weld", "-i", str(garbage_file), "-o", str(tmp_path / "out.obj")]
        )

        assert result.exit_code == EXIT_IMPORT_FAILED
        assert "Error loading mesh" in result.output

    def test_export_failure_exit_code(self, runner, cube_stl, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        result = runner.invoke(
            main, ["weld", "-i", str(cube_stl), "-o", str(blocker / "out.obj")]
        )

        assert result.exit_code == EXIT_EXPORT_FAILED
        assert "Error saving mesh" in result.output

    @pytest.mark.parametrize("scale", ["0", "-1", "inf", "nan"])
    def test_rejects_invalid_grid_scale(self, runner, cube_stl, tmp_path, scale):
        """Non-positive and non-finite scales are usage errors, not crashes."""
        output = tmp_path / "o.obj"

        result = runner.invoke(
            main, ["weld", "-i", str(cube_stl), "-o", str(output), "-g", scale]
        )

        assert result.exit_code == 2
        assert not isinstance(result.exception, ValueError)
        assert not output.exists()


class TestInspectCommand:
    """Tests for 'meshweld inspect'."""

    def test_inspect(self, runner, two_cubes_glb):
        result = runner.invoke(main, ["inspect", "-i", str(two_cubes_glb)])

        assert result.exit_code == 0, result.output
        assert "[0]" in result.output
        assert "[1]" in result.output

    def test_inspect_json(self, runner, two_cubes_glb):
        result = runner.invoke(main, ["inspect", "-i", str(two_cubes_glb), "--json"])

        assert result.exit_code == 0, result.output
        data = parse_json(result.output)
        assert len(data["meshes"]) == 2
        assert data["stats"]["output_vertices"] == 12
        assert data["stats"]["triangles_kept"] == 24

    def test_inspect_writes_nothing(self, runner, cube_stl, tmp_path):
        source = tmp_path / "part.stl"
        source.write_bytes(cube_stl.read_bytes())

        runner.invoke(main, ["inspect", "-i", str(source)])

        assert sorted(p.name for p in tmp_path.iterdir()) == ["part.stl"]

    @pytest.mark.parametrize("scale", ["inf", "nan"])
    def test_inspect_rejects_non_finite_grid_scale(self, runner, cube_stl, scale):
        result = runner.invoke(main, ["inspect", "-i", str(cube_stl), "-g", scale])

        assert result.exit_code == 2
        assert "finite" in result.output

    def test_inspect_import_failure(self, runner, points_only_file):
        result = runner.invoke(main, ["inspect", "-i", str(points_only_file)])
        assert result.exit_code == EXIT_IMPORT_FAILED


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
