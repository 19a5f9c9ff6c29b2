"""Tests for section location."""

import re

import pytest

from src.config import SectionRule
from src.ingestion.sections import SectionLocator, compile_patterns, find_first, line_matches
from src.models import SectionKind, SectionSpan

LINES = [
    "🥗 Tarte aux pommes (6 personnes)",
    "⏱️ Préparation : 20 min",
    "🥕 Ingrédients",
    "6 pommes",
    "1 pâte brisée",
    "👩‍🍳 Préparation",
    "Éplucher les pommes.",
    "Enfourner.",
    "📦 Conservation",
    "2 jours au frais.",
    "💬 Anecdote",
    "Recette de grand-mère.",
    "Tag Trello : Dessert",
]


@pytest.fixture
def locator() -> SectionLocator:
    return SectionLocator()


class TestFindFirst:
    def test_first_match_wins(self) -> None:
        patterns = compile_patterns([r"pommes"])
        assert find_first(LINES, patterns) == 0

    def test_start_offset(self) -> None:
        patterns = compile_patterns([r"pommes"])
        assert find_first(LINES, patterns, start=4) == 6

    def test_no_match(self) -> None:
        assert find_first(LINES, compile_patterns([r"chocolat"])) is None

    def test_no_patterns(self) -> None:
        assert find_first(LINES, ()) is None


class TestLineMatches:
    def test_anchored_pattern_sees_stripped_text(self) -> None:
        assert line_matches("🥕 Ingrédients", compile_patterns([r"^ingr[eé]dients?"]))

    def test_raw_text_keeps_markers(self) -> None:
        assert line_matches("🥗 Salade", compile_patterns(["🥗"]))

    def test_case_insensitive(self) -> None:
        assert line_matches("CONSERVATION", [re.compile("conservation", re.IGNORECASE)])


class TestSectionLocator:
    def test_ingredients_span(self, locator: SectionLocator) -> None:
        span = locator.locate(LINES, SectionKind.INGREDIENTS)
        assert span == SectionSpan(kind=SectionKind.INGREDIENTS, start_index=2, end_index=5)
        assert span.body(LINES) == ["6 pommes", "1 pâte brisée"]

    def test_timing_line_is_not_instructions_heading(self, locator: SectionLocator) -> None:
        span = locator.locate(LINES, SectionKind.INSTRUCTIONS)
        assert span is not None
        assert span.start_index == 5
        assert span.end_index == 8

    def test_storage_span_includes_heading(self, locator: SectionLocator) -> None:
        span = locator.locate(LINES, SectionKind.STORAGE)
        assert span is not None
        assert span.all_lines(LINES) == ["📦 Conservation", "2 jours au frais."]

    def test_trailing_section_stops_at_tag_line(self, locator: SectionLocator) -> None:
        span = locator.locate(LINES, SectionKind.HISTORY)
        assert span is not None
        assert span.body(LINES) == ["Recette de grand-mère."]

    def test_single_line_kinds(self, locator: SectionLocator) -> None:
        title = locator.locate(LINES, SectionKind.TITLE)
        tags = locator.locate(LINES, SectionKind.TAGS)
        assert title == SectionSpan(kind=SectionKind.TITLE, start_index=0, end_index=1)
        assert tags == SectionSpan(kind=SectionKind.TAGS, start_index=12, end_index=13)

    def test_absent_section(self, locator: SectionLocator) -> None:
        assert locator.locate(LINES, SectionKind.UTENSILS) is None
        assert locator.locate([], SectionKind.INGREDIENTS) is None

    def test_locate_all(self, locator: SectionLocator) -> None:
        spans = locator.locate_all(LINES)
        assert set(spans) == {
            SectionKind.TITLE,
            SectionKind.INGREDIENTS,
            SectionKind.INSTRUCTIONS,
            SectionKind.STORAGE,
            SectionKind.HISTORY,
            SectionKind.TAGS,
        }

    def test_find_all(self, locator: SectionLocator) -> None:
        lines = ["Tag Trello : A", "x", "🏷️ Tag Trello : B"]
        assert locator.find_all(lines, SectionKind.TAGS) == [0, 2]

    def test_is_heading(self, locator: SectionLocator) -> None:
        assert locator.is_heading("🥕 Ingrédients", [SectionKind.INGREDIENTS])
        assert not locator.is_heading("6 pommes", list(SectionKind))

    def test_custom_rules(self) -> None:
        locator = SectionLocator(
            {
                SectionKind.INGREDIENTS: SectionRule(headings=[r"^ingredients"]),
                SectionKind.INSTRUCTIONS: SectionRule(headings=[r"^method"]),
            }
        )
        lines = ["Ingredients", "2 eggs", "Method", "Beat."]
        span = locator.locate(lines, SectionKind.INGREDIENTS)
        assert span is not None
        assert span.end_index == 2
        assert locator.locate(lines, SectionKind.STORAGE) is None
