"""Section span data models."""

from enum import Enum

from pydantic import BaseModel


class SectionKind(str, Enum):
    """Semantic recipe sections recognized by the locator."""

    TITLE = "title"
    DESCRIPTION = "description"
    DIFFICULTY = "difficulty"
    INGREDIENTS = "ingredients"
    INSTRUCTIONS = "instructions"
    STORAGE = "storage"
    HISTORY = "history"
    TECHNIQUES = "techniques"
    NUTRITION = "nutrition"
    UTENSILS = "utensils"
    SOURCE = "source"
    TAGS = "tags"


class SectionSpan(BaseModel):
    """A contiguous range of normalized lines belonging to one section.

    ``start_index`` is the heading line. ``end_index`` is exclusive: it is the
    index of the line that stopped the section, or the line count.
    """

    kind: SectionKind
    start_index: int
    end_index: int

    def body(self, lines: list[str]) -> list[str]:
        """Lines after the heading, up to the end of the span."""
        return lines[self.start_index + 1 : self.end_index]

    def all_lines(self, lines: list[str]) -> list[str]:
        """Lines of the span including the heading."""
        return lines[self.start_index : self.end_index]
