"""Tests for the ingredient line tokenizer."""

import pytest

from src.ingestion.ingredients import (
    parse_quantity,
    split_unit,
    tokenize_ingredient_line,
    tokenize_ingredients,
)
from src.models import ParsedIngredientLine


class TestParseQuantity:
    @pytest.mark.parametrize(
        ("token", "expected"),
        [("200", 200.0), ("1,5", 1.5), ("0.25", 0.25), ("1/2", 0.5), ("3 / 4", 0.75)],
    )
    def test_values(self, token: str, expected: float) -> None:
        assert parse_quantity(token) == pytest.approx(expected)

    def test_zero_denominator(self) -> None:
        assert parse_quantity("1/0") is None


class TestSplitUnit:
    @pytest.mark.parametrize(
        ("rest", "unit", "name"),
        [
            ("g farine", "g", "farine"),
            ("gr de sucre", "g", "sucre"),
            ("grammes beurre", "g", "beurre"),
            ("Kg pommes de terre", "kg", "pommes de terre"),
            ("litres d'eau", "l", "eau"),
            ("l lait", "l", "lait"),
            ("cl crème", "cl", "crème"),
            ("bottes de radis", "botte", "radis"),
            ("pincées de sel", "pincée", "sel"),
            ("pincee de poivre", "pincée", "poivre"),
            ("c.à.s. huile", "c.à.s", "huile"),
        ],
    )
    def test_known_units(self, rest: str, unit: str, name: str) -> None:
        assert split_unit(rest) == (unit, name)

    def test_unknown_token_is_name(self) -> None:
        assert split_unit("pommes") == (None, "pommes")
        assert split_unit("gousses d'ail") == (None, "gousses d'ail")


class TestTokenizeIngredients:
    def test_quantity_unit_and_bare_count(self) -> None:
        lines = tokenize_ingredients("200 g farine\n3 pommes")
        assert lines == [
            ParsedIngredientLine(original_text="200 g farine", quantity=200, unit="g", name="farine"),
            ParsedIngredientLine(original_text="3 pommes", quantity=3, unit=None, name="pommes"),
        ]

    def test_no_quantity(self) -> None:
        lines = tokenize_ingredients("Sel et poivre")
        assert len(lines) == 1
        assert lines[0].quantity is None
        assert lines[0].unit is None
        assert lines[0].name == "Sel et poivre"

    def test_headers_and_options_skipped(self) -> None:
        text = "[Pâte]\n250 g farine\nOption : zeste de citron\n\n[Garniture]\n1/2 citron"
        names = [line.name for line in tokenize_ingredients(text)]
        assert names == ["farine", "citron"]

    def test_original_text_keeps_decoration(self) -> None:
        lines = tokenize_ingredients("• 1,5 l lait")
        assert lines[0].original_text == "• 1,5 l lait"
        assert lines[0].quantity == pytest.approx(1.5)
        assert lines[0].unit == "l"
        assert lines[0].name == "lait"

    def test_glued_unit(self) -> None:
        line = tokenize_ingredient_line("100g beurre")
        assert line is not None
        assert (line.quantity, line.unit, line.name) == (100, "g", "beurre")

    def test_empty_name_dropped(self) -> None:
        assert tokenize_ingredients("200 g\n2 l") == []

    def test_zero_denominator_keeps_whole_line(self) -> None:
        line = tokenize_ingredient_line("1/0 pomme")
        assert line is not None
        assert line.quantity is None
        assert line.name == "1/0 pomme"

    def test_empty_input(self) -> None:
        assert tokenize_ingredients("") == []

    def test_non_string_raises(self) -> None:
        with pytest.raises(TypeError):
            tokenize_ingredients(None)  # type: ignore[arg-type]

    def test_order_preserved(self) -> None:
        names = [line.name for line in tokenize_ingredients("1 c\n2 b\n3 a")]
        assert names == ["c", "b", "a"]
