"""Building typologies: the six footprint topologies the generator knows."""

from __future__ import annotations

from enum import Enum


class Typology(str, Enum):
    """Footprint topology, named after the letter its plan resembles.

    I: plain rectangle
    L: two wings meeting at a corner
    H: two parallel bars joined by a central bar
    U: open ring with a rounded end
    D: closed ring with a rounded end and a courtyard
    O: elliptical ring around a courtyard
    """

    I = "I"
    L = "L"
    H = "H"
    U = "U"
    D = "D"
    O = "O"

    @classmethod
    def lookup(cls, code: str | Typology) -> Typology | None:
        """Typology for a code, case-insensitive, or None if unknown."""
        if isinstance(code, Typology):
            return code
        try:
            return cls(str(code).strip().upper())
        except ValueError:
            return None

    @classmethod
    def parse(cls, code: str | Typology) -> Typology:
        """Typology for a code, case-insensitive. Raises ValueError if unknown."""
        typology = cls.lookup(code)
        if typology is None:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown building typology {code!r} (expected one of {valid})")
        return typology

    @property
    def has_courtyard(self) -> bool:
        """Whether the footprint encloses an interior void."""
        return self in (Typology.D, Typology.O)
