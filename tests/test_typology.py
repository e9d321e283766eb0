"""Tests for typology codes and index selection."""

import pytest

from massing_builder.generators.typology import TYPOLOGY_ORDER, select_typology
from massing_builder.models import Typology


class TestTypology:
    def test_parse(self):
        assert Typology.parse("H") is Typology.H

    def test_parse_case_and_whitespace(self):
        assert Typology.parse(" d ") is Typology.D

    def test_parse_enum_passthrough(self):
        assert Typology.parse(Typology.O) is Typology.O

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="expected one of I, L, H, U, D, O"):
            Typology.parse("Z")

    def test_lookup(self):
        assert Typology.lookup("u") is Typology.U

    def test_lookup_unknown_is_none(self):
        assert Typology.lookup("Z") is None

    def test_courtyard(self):
        assert {t for t in Typology if t.has_courtyard} == {Typology.D, Typology.O}


class TestSelectTypology:
    def test_order(self):
        codes = [select_typology(i).value for i in range(len(TYPOLOGY_ORDER))]
        assert codes == ["U", "L", "I", "H", "O", "D"]

    def test_covers_all_typologies(self):
        assert set(TYPOLOGY_ORDER) == set(Typology)

    @pytest.mark.parametrize("index", [-1, 6, 100])
    def test_out_of_range(self, index):
        with pytest.raises(ValueError, match="between 0 and 5"):
            select_typology(index)
