"""Typology selection by integer index, for optimisation drivers that sweep ints."""

from __future__ import annotations

from massing_builder.models.typology import Typology

TYPOLOGY_ORDER: tuple[Typology, ...] = (
    Typology.U,
    Typology.L,
    Typology.I,
    Typology.H,
    Typology.O,
    Typology.D,
)


def select_typology(index: int) -> Typology:
    """Typology at ``index`` in U, L, I, H, O, D order."""
    if not 0 <= index < len(TYPOLOGY_ORDER):
        raise ValueError(
            f"Typology index must be between 0 and {len(TYPOLOGY_ORDER) - 1}, got {index}"
        )
    return TYPOLOGY_ORDER[index]
