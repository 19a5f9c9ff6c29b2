"""Recipe text parser producing structured recipe drafts."""

import logging
from pathlib import Path

import chardet

from src.config import ParserConfig
from src.ingestion import extractors
from src.ingestion.normalizer import normalize_lines, normalize_text
from src.ingestion.sections import SectionLocator
from src.models.draft import ParsedRecipeDraft
from src.models.section import SectionKind, SectionSpan

logger = logging.getLogger(__name__)

# Headings never used as a description candidate.
_DESCRIPTION_EXCLUDED_KINDS = tuple(SectionKind)


class RecipeParser:
    """Parses pasted recipe text into a ParsedRecipeDraft.

    Parsing is best effort: every field is extracted independently and a
    field that cannot be found is left empty. The parser keeps no state
    between calls, so one instance can be shared.

    Args:
        config: ParserConfig holding the keyword table and thresholds.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self._config = config or ParserConfig()
        self._locator = SectionLocator(self._config.section_rules())

    @property
    def locator(self) -> SectionLocator:
        """Section locator built from the configured keyword table."""
        return self._locator

    def parse(self, raw: str) -> ParsedRecipeDraft:
        """Parse recipe text into a draft.

        Args:
            raw: Free-form recipe text.

        Returns:
            A ParsedRecipeDraft. Empty when nothing could be extracted.

        Raises:
            TypeError: If raw is not a string.
        """
        text = normalize_text(raw)
        lines = normalize_lines(text)
        if not lines:
            return ParsedRecipeDraft()

        spans = self._locator.locate_all(lines)
        title_span = spans.get(SectionKind.TITLE)
        title_line = lines[title_span.start_index] if title_span else None
        title, servings = extractors.extract_title_and_servings(
            title_line, self._config.title_markers
        )

        difficulty_span = spans.get(SectionKind.DIFFICULTY)
        source_span = spans.get(SectionKind.SOURCE)
        intro_span = spans.get(SectionKind.DESCRIPTION)
        ingredients_span = spans.get(SectionKind.INGREDIENTS)
        storage_span = spans.get(SectionKind.STORAGE)

        storage_instructions = extractors.extract_block(lines, storage_span)
        lowered = text.lower()

        draft = ParsedRecipeDraft(
            title=title,
            description=extractors.extract_description(
                lines,
                intro=intro_span,
                ingredients=ingredients_span,
                excluded=self._description_exclusions(lines, title_span),
                min_chars=self._config.description_min_chars,
            ),
            servings=servings,
            prep_time_min=extractors.extract_prep_time(text),
            cook_time_min=extractors.extract_cook_time(text),
            rest_time_min=extractors.extract_rest_time(text),
            ingredients_text=extractors.extract_ingredients_text(lines, ingredients_span),
            instructions_text=extractors.extract_instructions_text(
                lines, spans.get(SectionKind.INSTRUCTIONS)
            ),
            difficulty=extractors.extract_difficulty(
                lines[difficulty_span.start_index] if difficulty_span else None
            ),
            storage_duration_days=extractors.extract_storage_duration(storage_instructions),
            storage_instructions=storage_instructions,
            tags=extractors.extract_tags(
                lines[i] for i in self._locator.find_all(lines, SectionKind.TAGS)
            ),
            utensils=extractors.extract_utensils(lines, spans.get(SectionKind.UTENSILS)),
            chef_tips=extractors.extract_chef_tips(lines),
            cultural_history=extractors.extract_cultural_history(
                lines, intro_span, spans.get(SectionKind.HISTORY)
            ),
            techniques=extractors.extract_block(lines, spans.get(SectionKind.TECHNIQUES)),
            nutritional_notes=extractors.extract_block(lines, spans.get(SectionKind.NUTRITION)),
            source_info=extractors.extract_source(
                lines[source_span.start_index] if source_span else None,
                self._config.source_min_chars,
            ),
            dietary_labels=extractors.extract_dietary_labels(lowered),
            serving_temperatures=extractors.extract_serving_temperatures(lowered),
            storage_modes=extractors.extract_storage_modes(lowered),
        )

        if draft.ingredients_text is None:
            logger.debug("No ingredient block found")
        if draft.instructions_text is None:
            logger.debug("No instruction block found")
        return draft

    def parse_file(self, file_path: str | Path) -> ParsedRecipeDraft:
        """Read a recipe text file and parse it.

        Args:
            file_path: Path to the text file.

        Returns:
            The parsed draft.

        Raises:
            FileNotFoundError: If file_path does not exist.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return self.parse(read_text_file(path))

    def _description_exclusions(
        self, lines: list[str], title_span: SectionSpan | None
    ) -> set[int]:
        excluded = {
            index
            for index, line in enumerate(lines)
            if self._locator.is_heading(line, _DESCRIPTION_EXCLUDED_KINDS)
        }
        if title_span is not None:
            excluded.add(title_span.start_index)
        return excluded


def read_text_file(file_path: Path) -> str:
    """Read a text file with encoding detection.

    Tries UTF-8 first, then uses chardet for fallback detection, then
    Windows-1252 which is common for French documents.

    Args:
        file_path: Path to the text file.

    Returns:
        The file content as a string.
    """
    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        pass

    raw_bytes = file_path.read_bytes()
    detected = chardet.detect(raw_bytes)
    encoding = detected.get("encoding") or "utf-8"
    confidence = detected.get("confidence", 0)

    if confidence < 0.7:
        logger.warning(
            "Low confidence encoding detection for %s: %s (%.0f%%)",
            file_path,
            encoding,
            confidence * 100,
        )

    try:
        return raw_bytes.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        try:
            return raw_bytes.decode("windows-1252")
        except UnicodeDecodeError:
            logger.error("Failed to decode file: %s", file_path)
            return raw_bytes.decode("utf-8", errors="replace")


def parse_recipe_text(raw: str, config: ParserConfig | None = None) -> ParsedRecipeDraft:
    """Parse recipe text with a one-off parser."""
    return RecipeParser(config).parse(raw)
