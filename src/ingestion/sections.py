"""Section detection over normalized recipe lines."""

import logging
import re
from collections.abc import Iterable, Sequence

from src.config import ParserConfig, SectionRule
from src.ingestion.normalizer import strip_decoration
from src.models.section import SectionKind, SectionSpan

logger = logging.getLogger(__name__)


def compile_patterns(patterns: Iterable[str]) -> tuple[re.Pattern[str], ...]:
    """Compile heading patterns case-insensitively."""
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


def line_matches(line: str, patterns: Sequence[re.Pattern[str]]) -> bool:
    """Check a line against patterns.

    The decoration-stripped text is tried first so that anchored patterns see
    the heading word at position 0; the raw text is tried next so that marker
    emoji remain matchable.
    """
    stripped = strip_decoration(line).lower()
    raw = line.lower()
    return any(p.search(stripped) or p.search(raw) for p in patterns)


def find_first(
    lines: Sequence[str],
    patterns: Sequence[re.Pattern[str]],
    start: int = 0,
) -> int | None:
    """Index of the first line at or after ``start`` matching any pattern.

    Args:
        lines: Normalized lines.
        patterns: Compiled patterns.
        start: First index to examine.

    Returns:
        The matching index, or None.
    """
    if not patterns:
        return None
    for index in range(max(start, 0), len(lines)):
        if line_matches(lines[index], patterns):
            return index
    return None


class SectionLocator:
    """Locates recipe sections from a keyword table.

    Each kind is found by its first heading line. A spanning section ends at
    the first following line that matches one of its stop patterns, or at the
    end of input. Single-line kinds span only their heading line.

    Args:
        rules: Mapping of section kind to heading/stop patterns. Defaults to
               the French table with the default title marker.
    """

    def __init__(self, rules: dict[SectionKind, SectionRule] | None = None) -> None:
        rules = rules if rules is not None else ParserConfig().section_rules()
        self._single_line: set[SectionKind] = {
            kind for kind, rule in rules.items() if rule.single_line
        }
        self._headings: dict[SectionKind, tuple[re.Pattern[str], ...]] = {
            kind: compile_patterns(rule.headings) for kind, rule in rules.items()
        }
        self._stops: dict[SectionKind, tuple[re.Pattern[str], ...]] = {}
        for kind, rule in rules.items():
            if rule.stops is not None:
                self._stops[kind] = compile_patterns(rule.stops)
            else:
                self._stops[kind] = tuple(
                    pattern
                    for other in rules
                    if other != kind
                    for pattern in self._headings[other]
                )

    def headings(self, kind: SectionKind) -> tuple[re.Pattern[str], ...]:
        """Compiled heading patterns for a kind (empty if unconfigured)."""
        return self._headings.get(kind, ())

    def is_heading(self, line: str, kinds: Iterable[SectionKind]) -> bool:
        """Whether a line is a heading of any of the given kinds."""
        return any(line_matches(line, self.headings(kind)) for kind in kinds)

    def find_all(self, lines: Sequence[str], kind: SectionKind) -> list[int]:
        """Indices of every line matching the headings of a kind."""
        patterns = self.headings(kind)
        return [i for i, line in enumerate(lines) if patterns and line_matches(line, patterns)]

    def locate(self, lines: Sequence[str], kind: SectionKind) -> SectionSpan | None:
        """Locate the span of a section kind.

        Args:
            lines: Normalized lines.
            kind: The section kind to locate.

        Returns:
            The SectionSpan, or None when no heading matches.
        """
        start = find_first(lines, self.headings(kind))
        if start is None:
            logger.debug("Section %s not found", kind.value)
            return None

        if kind in self._single_line:
            end = start + 1
        else:
            stop = find_first(lines, self._stops.get(kind, ()), start + 1)
            end = stop if stop is not None else len(lines)

        logger.debug("Section %s located at lines %d-%d", kind.value, start, end)
        return SectionSpan(kind=kind, start_index=start, end_index=end)

    def locate_all(self, lines: Sequence[str]) -> dict[SectionKind, SectionSpan]:
        """Locate every configured section kind that is present."""
        spans: dict[SectionKind, SectionSpan] = {}
        for kind in self._headings:
            span = self.locate(lines, kind)
            if span is not None:
                spans[kind] = span
        return spans
