"""2D plan rendering of footprints using matplotlib.

Draws a footprint surface top-down in its own frame: filled outline,
courtyard voids cut out, overall dimensions and an area label.
"""

from __future__ import annotations

from pathlib import Path

import matplotlib
matplotlib.use("Agg")  # headless rendering
import matplotlib.patches as patches
import matplotlib.patheffects as pe
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.path import Path as MplPath

from massing_builder.kernel.planar import PlanarSurface

# Halo effect for text readability on the fill
_TEXT_HALO = [pe.withStroke(linewidth=3, foreground="white")]

_FILL = "#D9E3EE"
_EDGE = "#1F2D3D"


def _ring_path(coords: list[tuple[float, float]]) -> MplPath:
    arr = np.asarray(coords, dtype=float)
    return MplPath(np.vstack([arr, arr[:1]]), closed=True)


def render_footprint(
    surface: PlanarSurface,
    output_path: str | Path,
    title: str | None = None,
    dpi: int = 150,
    show_dimensions: bool = True,
) -> Path:
    """Render a footprint surface to PNG.

    Args:
        surface: Footprint surface (as built by the planar kernel).
        output_path: Output image path.
        title: Plot title.
        dpi: Image resolution.
        show_dimensions: Draw overall width and length.

    Returns:
        Path to the output image.
    """
    output_path = Path(output_path)
    fig, ax = plt.subplots(1, 1, figsize=(8, 8))
    ax.set_aspect("equal")
    ax.set_facecolor("#FAFAFA")

    # Holes are wound opposite to the outline, so nonzero filling leaves them empty
    path = MplPath.make_compound_path(
        _ring_path(surface.exterior), *[_ring_path(r) for r in surface.interiors]
    )
    ax.add_patch(patches.PathPatch(path, facecolor=_FILL, edgecolor=_EDGE, linewidth=2))

    min_u, min_v, max_u, max_v = surface.polygon.bounds
    margin = 0.08 * max(max_u - min_u, max_v - min_v)

    if show_dimensions:
        ax.annotate(
            f"{max_u - min_u:.2f} m",
            xy=((min_u + max_u) / 2, min_v - margin / 2),
            ha="center", va="top", fontsize=9,
        )
        ax.annotate(
            f"{max_v - min_v:.2f} m",
            xy=(min_u - margin / 2, (min_v + max_v) / 2),
            ha="right", va="center", rotation=90, fontsize=9,
        )

    centroid = surface.polygon.representative_point()
    ax.text(
        centroid.x, centroid.y, f"{surface.area:.1f} m²",
        ha="center", va="center", fontsize=11, path_effects=_TEXT_HALO,
    )

    ax.set_xlim(min_u - 2 * margin, max_u + margin)
    ax.set_ylim(min_v - 2 * margin, max_v + margin)
    if title:
        ax.set_title(title)

    fig.savefig(output_path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return output_path
