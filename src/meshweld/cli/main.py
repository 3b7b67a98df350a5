# Copyright 2025 Allard Peper (Dragon Ace / DragonAceNL)
# Licensed under the Apache License, Version 2.0 (see LICENSE).

"""
Command-line interface for MeshWeld.

Provides commands for:
- weld: Merge all meshes of a file into one welded mesh
- inspect: Show the meshes of a file and what welding would produce
"""

import json
import logging
import math
import sys
from pathlib import Path
from typing import Optional

import click

from meshweld import __version__
from meshweld.core import (
    GRID_SCALE,
    SUPPORTED_EXPORT_TYPES,
    DEFAULT_EXPORT_TYPE,
    MeshImportError,
    MeshExportError,
    import_meshes,
    weld_file,
    weld_session,
)

# Exit codes
EXIT_IMPORT_FAILED = 1
EXIT_EXPORT_FAILED = 2


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S"
    )


def validate_grid_scale(ctx, param, value: float) -> float:
    """Reject inf and nan, which FloatRange lets through."""
    if not math.isfinite(value):
        raise click.BadParameter(f"must be a finite number, got {value}")
    return value


grid_scale_option = click.option(
    "--grid-scale", "-g", type=click.FloatRange(min=0, min_open=True), default=GRID_SCALE,
    callback=validate_grid_scale,
    show_default=True, help="Grid cells per unit; vertices in the same cell are welded",
)


@click.group()
@click.version_option(version=__version__, prog_name="meshweld")
def main():
    """
    MeshWeld - Merge triangle meshes by welding coincident vertices.

    Use 'meshweld COMMAND --help' for more information on each command.
    """
    pass


@main.command()
@click.option("--input", "-i", "input_path", required=True, type=click.Path(exists=True),
              help="Path to input mesh or scene file")
@click.option("--output", "-o", "output_path", type=click.Path(),
              help=f"Output file path (default: <input>_welded.{DEFAULT_EXPORT_TYPE})")
@grid_scale_option
@click.option("--format", "-f", "file_type", type=click.Choice(SUPPORTED_EXPORT_TYPES),
              help="Output format (default: from output suffix)")
@click.option("--report", "-r", "report_path", type=click.Path(),
              help="Path for JSON report output")
@click.option("--overwrite", is_flag=True, help="Overwrite existing output files")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def weld(
    input_path: str,
    output_path: Optional[str],
    grid_scale: float,
    file_type: Optional[str],
    report_path: Optional[str],
    overwrite: bool,
    verbose: bool
):
    """
    Weld all meshes of a file into a single mesh.

    Examples:

        meshweld weld --input scene.glb

        meshweld weld -i parts.obj -o merged.stl

        meshweld weld -i parts.obj -g 100 -r report.json
    """
    setup_logging(verbose)

    input_path = Path(input_path)

    if output_path:
        output_path = Path(output_path)
    else:
        output_path = input_path.parent / f"{input_path.stem}_welded.{file_type or DEFAULT_EXPORT_TYPE}"

    if output_path.exists() and not overwrite:
        click.echo(f"Error: Output file exists: {output_path}")
        click.echo("Use --overwrite to replace it.")
        sys.exit(1)

    click.echo(f"Loading: {input_path}")
    try:
        result = weld_file(input_path, output_path, grid_scale=grid_scale, file_type=file_type)
    except MeshImportError as e:
        click.echo(f"Error loading mesh: {e}")
        sys.exit(EXIT_IMPORT_FAILED)
    except MeshExportError as e:
        click.echo(f"Error saving mesh: {e}")
        sys.exit(EXIT_EXPORT_FAILED)

    stats = result.stats
    click.echo(f"\nWelded {result.mesh_count} mesh(es) in {result.duration_ms:.1f}ms")
    click.echo(f"  Vertices: {stats.input_vertices:,} -> {stats.output_vertices:,}")
    click.echo(f"  Triangles: {stats.input_triangles:,} -> {stats.triangles_kept:,}")
    if stats.triangles_dropped:
        click.echo(f"  Degenerate triangles dropped: {stats.triangles_dropped:,}")
    click.echo(f"\nSaved: {result.output_path}")

    if report_path:
        report_path = Path(report_path)
        report_path.parent.mkdir(parents=True, exist_ok=True)
        with open(report_path, "w") as f:
            json.dump(result.to_dict(), f, indent=2)
        click.echo(f"Report saved: {report_path}")


@main.command()
@click.option("--input", "-i", "input_path", required=True, type=click.Path(exists=True),
              help="Path to mesh or scene file")
@grid_scale_option
@click.option("--json", "-j", "json_output", is_flag=True, help="Output as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def inspect(input_path: str, grid_scale: float, json_output: bool, verbose: bool):
    """
    Show the meshes in a file and the result of welding them.

    Nothing is written.

    Examples:

        meshweld inspect --input scene.glb

        meshweld inspect -i parts.obj --json
    """
    setup_logging(verbose)

    input_path = Path(input_path)

    try:
        meshes = import_meshes(input_path)
    except MeshImportError as e:
        click.echo(f"Error loading mesh: {e}")
        sys.exit(EXIT_IMPORT_FAILED)

    welder = weld_session(meshes, grid_scale=grid_scale)

    if json_output:
        data = {
            "input": str(input_path),
            "grid_scale": welder.grid_scale,
            "meshes": [
                {"vertex_count": m.vertex_count, "triangle_count": m.triangle_count}
                for m in meshes
            ],
            "stats": welder.stats.to_dict(),
        }
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"\nMeshes in {input_path.name}")
    click.echo("=" * 50)
    for i, mesh in enumerate(meshes):
        click.echo(f"  [{i}] {mesh.vertex_count:,} vertices, {mesh.triangle_count:,} triangles")
    click.echo("=" * 50)

    stats = welder.stats
    click.echo(f"\nWelding at cell size {welder.cell_size:g}:")
    click.echo(f"  Vertices: {stats.input_vertices:,} -> {stats.output_vertices:,}")
    click.echo(f"  Triangles: {stats.input_triangles:,} -> {stats.triangles_kept:,}")
    if stats.triangles_dropped:
        click.echo(f"  ⚠ Degenerate triangles dropped: {stats.triangles_dropped:,}")


if __name__ == "__main__":
    main()
