"""Massing Builder CLI.

All commands print JSON to stdout. Infeasible dimensions are a normal
answer (``"feasible": false``); only bad arguments exit non-zero.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from massing_builder.analysis.facade import deconstruct_facade
from massing_builder.config import MassingSettings, load_settings
from massing_builder.generators.boundary import build_boundary, make_base_surface
from massing_builder.generators.mass import generate_mass
from massing_builder.generators.typology import TYPOLOGY_ORDER, select_typology
from massing_builder.kernel.planar import PlanarKernel
from massing_builder.logging_config import setup_logging
from massing_builder.models.geometry import Plane, Point3D
from massing_builder.models.typology import Typology

app = typer.Typer(
    name="massing_builder",
    help="Massing Builder — parametric building masses from typology footprints.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _output(data: dict) -> None:
    """Print JSON output to stdout."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(message: str) -> None:
    _output({"ok": False, "error": message})
    raise typer.Exit(1)


def _typology(code: str) -> Typology:
    try:
        return Typology.parse(code)
    except ValueError as e:
        _fail(str(e))


def _plane(origin: str) -> Plane:
    """Parse 'x,y,z' into a world-aligned plane."""
    try:
        x, y, z = (float(c) for c in origin.split(","))
    except ValueError:
        _fail(f"Invalid origin {origin!r}, expected x,y,z")
    return Plane(origin=Point3D(x=x, y=y, z=z))


def _setup(verbose: bool, config: Optional[str]) -> MassingSettings:
    setup_logging(logging.DEBUG if verbose else logging.WARNING)
    return load_settings(config)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command()
def version() -> None:
    """Show version."""
    from massing_builder import __version__

    typer.echo(f"massing-builder v{__version__}")


@app.command()
def typologies() -> None:
    """List typology codes in index order."""
    _output({
        "ok": True,
        "typologies": [
            {"index": i, "code": t.value, "courtyard": t.has_courtyard}
            for i, t in enumerate(TYPOLOGY_ORDER)
        ],
    })


@app.command()
def select(index: int = typer.Argument(..., help="Typology index (0-5)")) -> None:
    """Map a design-option index to a typology code."""
    try:
        typology = select_typology(index)
    except ValueError as e:
        _fail(str(e))
    _output({"ok": True, "index": index, "typology": typology.value})


@app.command()
def footprint(
    type_code: str = typer.Argument(..., help="Typology code: I, L, H, U, D or O"),
    length: float = typer.Option(..., "--length", "-l", help="Overall length (m)"),
    width: float = typer.Option(..., "--width", "-w", help="Overall width (m)"),
    depth: float = typer.Option(..., "--depth", "-d", help="Wing depth (m)"),
    plot: Optional[str] = typer.Option(None, "--plot", "-p", help="Render plan PNG to this path"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Settings JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr"),
):
    """Build a footprint and report its area and hole count."""
    settings = _setup(verbose, config)
    typology = _typology(type_code)
    kernel = PlanarKernel(settings)

    result = build_boundary(typology, length, width, depth, kernel)
    output: dict = {
        "ok": True,
        "typology": typology.value,
        "feasible": result.feasible,
        "holes": len(result.holes),
    }
    if result.feasible:
        surface = make_base_surface(typology, length, width, depth, kernel)
        output["area"] = round(kernel.surface_area(surface), 6)
        if plot:
            from massing_builder.export.plan import render_footprint

            path = render_footprint(surface, plot, title=f"{typology.value} footprint")
            output["plot"] = str(path)
    _output(output)


@app.command()
def generate(
    type_code: str = typer.Argument(..., help="Typology code: I, L, H, U, D or O"),
    length: float = typer.Option(..., "--length", "-l", help="Overall length (m)"),
    width: float = typer.Option(..., "--width", "-w", help="Overall width (m)"),
    depth: float = typer.Option(..., "--depth", "-d", help="Wing depth (m)"),
    area: float = typer.Option(..., "--area", "-a", help="Target gross floor area (m2)"),
    floor_height: Optional[float] = typer.Option(None, "--floor-height", help="Floor-to-floor height (m)"),
    origin: str = typer.Option("0,0,0", "--origin", help="Base plane origin x,y,z"),
    create_core: bool = typer.Option(False, "--core", help="Request core volumes (not generated)"),
    ifc: Optional[str] = typer.Option(None, "--ifc", help="Write IFC file to this path"),
    plot: Optional[str] = typer.Option(None, "--plot", "-p", help="Render ground floor PNG"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Settings JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr"),
):
    """Generate a building mass and report floors, area and volume."""
    settings = _setup(verbose, config)
    typology = _typology(type_code)
    base_plane = _plane(origin)

    result = generate_mass(
        typology,
        base_plane,
        length,
        width,
        depth,
        area,
        floor_height if floor_height is not None else settings.floor_height,
        create_core=create_core,
        kernel=PlanarKernel(settings),
    )
    output: dict = {"ok": True, **result.summary()}

    if not result.is_empty:
        if ifc:
            from massing_builder.export.ifc import export_ifc

            output["ifc"] = str(export_ifc(result, ifc, name=f"{typology.value} Mass"))
        if plot:
            from massing_builder.export.plan import render_footprint

            output["plot"] = str(render_footprint(result.floors[0], plot, title="Ground floor"))
    _output(output)


@app.command()
def facade(
    type_code: str = typer.Argument(..., help="Typology code: I, L, H, U, D or O"),
    length: float = typer.Option(..., "--length", "-l", help="Overall length (m)"),
    width: float = typer.Option(..., "--width", "-w", help="Overall width (m)"),
    depth: float = typer.Option(..., "--depth", "-d", help="Wing depth (m)"),
    area: float = typer.Option(..., "--area", "-a", help="Target gross floor area (m2)"),
    floor_height: Optional[float] = typer.Option(None, "--floor-height", help="Floor-to-floor height (m)"),
    tolerance: Optional[float] = typer.Option(None, "--tolerance", "-t", help="Angle tolerance (deg)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Settings JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr"),
):
    """Generate a mass and split its faces into vertical and horizontal sets."""
    settings = _setup(verbose, config)
    typology = _typology(type_code)
    kernel = PlanarKernel(settings)

    result = generate_mass(
        typology,
        Plane.world_xy(),
        length,
        width,
        depth,
        area,
        floor_height if floor_height is not None else settings.floor_height,
        kernel=kernel,
    )
    try:
        faces = deconstruct_facade(
            result.mass,
            tolerance if tolerance is not None else settings.facade_tolerance,
            kernel,
        )
    except ValueError as e:
        _fail(str(e))

    _output({
        "ok": True,
        "typology": typology.value,
        "feasible": not result.is_empty,
        "vertical": len(faces.vertical),
        "horizontal": len(faces.horizontal),
        "facade_area": round(sum(kernel.surface_area(f) for f in faces.vertical), 6),
    })


if __name__ == "__main__":
    app()
