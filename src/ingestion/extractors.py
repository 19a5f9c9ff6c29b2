"""Field extractors for pasted recipe text.

Each extractor is an independent, best-effort heuristic. Text-scoped
extractors take the whole normalized text; section-scoped extractors take the
normalized lines plus the span located for their section. A miss yields None
or an empty list, never an exception.
"""

import logging
import math
import re
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import TypeVar

from src.ingestion.normalizer import strip_decoration, strip_step_number
from src.models.draft import DietaryLabel, Difficulty, ServingTemperature, StorageMode
from src.models.section import SectionSpan

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

SERVINGS_RE = re.compile(r"\(\s*(\d+)\s*(?:pers?\.?|personnes?)\s*\)", re.IGNORECASE)

PREP_TIME_RE = re.compile(r"pr[eé]paration[^:\n]*:\s*(\d+)\s*(?:min|minutes?)", re.IGNORECASE)
COOK_TIME_RE = re.compile(
    r"cuisson[^:\n]*:\s*(\d+)(?:\s*(?:à|-)\s*(\d+))?\s*(?:min|minutes?)",
    re.IGNORECASE,
)
# Tried in order, first hit wins.
REST_TIME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"repos\b[^\n\d]*?(\d+)\s*(?:min|minutes?)", re.IGNORECASE),
    re.compile(r"reposer\b[^\n\d]*?(\d+)\s*(?:min|minutes?)", re.IGNORECASE),
)

STORAGE_DAYS_RE = re.compile(r"(\d+)\s*(?:jours?|j)\b", re.IGNORECASE)
STORAGE_HOURS_RE = re.compile(r"(\d+)\s*(?:h|heures?)\b", re.IGNORECASE)

OPTION_RE = re.compile(r"^option\b", re.IGNORECASE)
TIP_RE = re.compile(r"astuce", re.IGNORECASE)
TAG_RE = re.compile(r"tag trello\s*:\s*(.+)$", re.IGNORECASE)
LEADING_COUNT_RE = re.compile(r"^\d+(?:[.,]\d+)?\s+(.+)$")

DIFFICULTY_KEYWORDS: tuple[tuple[tuple[str, ...], Difficulty], ...] = (
    (("facile", "simple"), Difficulty.BEGINNER),
    (("intermédiaire", "intermediaire"), Difficulty.INTERMEDIATE),
    (("avancé", "avance"), Difficulty.ADVANCED),
)

DIETARY_PATTERNS: tuple[tuple[re.Pattern[str], DietaryLabel], ...] = tuple(
    (re.compile(pattern), label)
    for pattern, label in (
        (r"v[eé]g[eé]tarien", DietaryLabel.VEGETARIEN),
        (r"v[eé]g[eé]talien", DietaryLabel.VEGETALIEN),
        (r"\bvegan\b|v[eé]gane", DietaryLabel.VEGAN),
        (r"pesc[eé]tarien", DietaryLabel.PESCETARIEN),
        (r"sans gluten", DietaryLabel.SANS_GLUTEN),
        (r"sans lactose", DietaryLabel.SANS_LACTOSE),
        (r"sans (?:œ|oe)ufs?", DietaryLabel.SANS_OEUF),
        (r"sans arachides?", DietaryLabel.SANS_ARACHIDE),
        (r"sans fruits? [àa] coques?", DietaryLabel.SANS_FRUITS_A_COQUE),
        (r"sans soja", DietaryLabel.SANS_SOJA),
        (r"sans sucres? ajout[eé]s?", DietaryLabel.SANS_SUCRE_AJOUTE),
        (r"sans sel ajout[eé]", DietaryLabel.SANS_SEL_AJOUTE),
        (r"\bhalal\b", DietaryLabel.HALAL),
        (r"\b(?:casher|kasher)\b", DietaryLabel.CASHER),
    )
)

_SERVE = r"(?:servir|servie?s?|se sert|d[eé]guster|se d[eé]guste)\s+(?:bien |plut[oô]t |de pr[eé]f[eé]rence )?"

SERVING_TEMPERATURE_PATTERNS: tuple[tuple[re.Pattern[str], ServingTemperature], ...] = tuple(
    (re.compile(_SERVE + pattern), temperature)
    for pattern, temperature in (
        (r"chaude?s?\b", ServingTemperature.CHAUD),
        (r"ti[eè]des?\b", ServingTemperature.TIEDE),
        (r"[àa] temp[eé]rature ambiante", ServingTemperature.AMBIANTE),
        (r"froide?s?\b", ServingTemperature.FROID),
    )
)

STORAGE_MODE_PATTERNS: tuple[tuple[re.Pattern[str], StorageMode], ...] = tuple(
    (re.compile(pattern), mode)
    for pattern, mode in (
        (r"r[eé]frig[eé]rateur|\bfrigo\b|au frais", StorageMode.REFRIGERATEUR),
        (r"cong[eé]lateur|congeler|cong[eé]lation", StorageMode.CONGELATEUR),
        (r"(?:conserver|se conserve|garder)[^.\n]*temp[eé]rature ambiante", StorageMode.AMBIANTE),
        (r"sous[ -]vide", StorageMode.SOUS_VIDE),
        (r"(?:bo[iî]te|r[eé]cipient|bocal) herm[eé]tique", StorageMode.BOITE_HERMETIQUE),
    )
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def unique(values: Iterable[str]) -> list[str]:
    """De-duplicate while keeping first-seen order."""
    return list(dict.fromkeys(values))


def join_stripped(lines: Iterable[str], separator: str = " ") -> str | None:
    """Strip decoration from lines, drop empties, and join them."""
    cleaned = [strip_decoration(line) for line in lines]
    cleaned = [line for line in cleaned if line]
    return separator.join(cleaned) if cleaned else None


# ── Title, servings, difficulty ──────────────────────────────────────────────


def extract_title_and_servings(
    title_line: str | None, markers: Sequence[str] = ("🥗",)
) -> tuple[str | None, int | None]:
    """Split a title line into its title and people count.

    Args:
        title_line: The line located as the title, if any.
        markers: Marker emoji removed from the title.

    Returns:
        A (title, servings) tuple, either of which may be None.
    """
    if title_line is None:
        return None, None

    text = strip_decoration(title_line)
    servings: int | None = None
    match = SERVINGS_RE.search(text)
    if match:
        servings = int(match.group(1)) or None
        text = SERVINGS_RE.sub("", text, count=1)
    for marker in markers:
        text = text.replace(marker, "")
    title = " ".join(text.split())
    return (title or None), servings


def extract_difficulty(difficulty_line: str | None) -> Difficulty | None:
    """Map a difficulty line to a level by keyword."""
    if difficulty_line is None:
        return None
    lowered = difficulty_line.lower()
    for keywords, level in DIFFICULTY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return level
    logger.debug("Unrecognized difficulty line: %s", difficulty_line)
    return None


# ── Timings ──────────────────────────────────────────────────────────────────


def extract_prep_time(text: str) -> int | None:
    """Preparation time in minutes from "Préparation : N min"."""
    match = PREP_TIME_RE.search(text)
    return int(match.group(1)) if match else None


def extract_cook_time(text: str) -> int | None:
    """Cooking time in minutes; a range "N à M min" yields its average."""
    match = COOK_TIME_RE.search(text)
    if not match:
        return None
    low = int(match.group(1))
    if match.group(2) is None:
        return low
    return round_half_up((low + int(match.group(2))) / 2)


def extract_rest_time(text: str) -> int | None:
    """Resting time in minutes from "repos ... N min"."""
    for pattern in REST_TIME_PATTERNS:
        match = pattern.search(text)
        if match:
            return int(match.group(1))
    return None


def extract_storage_duration(storage_text: str | None) -> int | None:
    """Storage duration in days, converting hours when no day count is given.

    Args:
        storage_text: Text of the storage section.

    Returns:
        Number of days (at least 1 for hour counts), or None.
    """
    if not storage_text:
        return None
    days = STORAGE_DAYS_RE.search(storage_text)
    if days:
        return int(days.group(1)) or None
    hours = STORAGE_HOURS_RE.search(storage_text)
    if hours:
        return max(1, round_half_up(int(hours.group(1)) / 24))
    return None


# ── Label tables ─────────────────────────────────────────────────────────────


def match_labels(
    text: str,
    table: Sequence[tuple[re.Pattern[str], E]],
    either: E | None = None,
) -> list[E]:
    """Collect every label whose pattern matches the lowercased text.

    Args:
        text: Text to scan.
        table: Ordered (pattern, label) pairs.
        either: Label appended when more than one label matched.

    Returns:
        Matched labels in table order.
    """
    lowered = text.lower()
    labels: list[E] = []
    for pattern, label in table:
        if label not in labels and pattern.search(lowered):
            labels.append(label)
    if either is not None and len(labels) > 1:
        labels.append(either)
    return labels


def extract_dietary_labels(text: str) -> list[DietaryLabel]:
    return match_labels(text, DIETARY_PATTERNS)


def extract_serving_temperatures(text: str) -> list[ServingTemperature]:
    return match_labels(text, SERVING_TEMPERATURE_PATTERNS, ServingTemperature.AU_CHOIX)


def extract_storage_modes(text: str) -> list[StorageMode]:
    return match_labels(text, STORAGE_MODE_PATTERNS, StorageMode.AU_CHOIX)


# ── Single-line metadata ─────────────────────────────────────────────────────


def extract_source(source_line: str | None, min_chars: int = 6) -> str | None:
    """Source attribution from a "Source : ..." line."""
    if source_line is None:
        return None
    stripped = strip_decoration(source_line)
    if ":" in stripped:
        value = stripped.split(":", 1)[1].strip()
        return value or None
    if len(stripped) > min_chars:
        return stripped
    return None


def extract_tags(lines: Iterable[str]) -> list[str]:
    """Values of every "Tag Trello : <value>" line."""
    tags: list[str] = []
    for line in lines:
        match = TAG_RE.search(strip_decoration(line))
        if match and match.group(1).strip():
            tags.append(match.group(1).strip())
    return unique(tags)


def extract_chef_tips(lines: Iterable[str]) -> str | None:
    """Option and tip lines found anywhere, in source order."""
    tips = [
        stripped
        for stripped in (strip_decoration(line) for line in lines)
        if stripped and (OPTION_RE.match(stripped) or TIP_RE.search(stripped))
    ]
    return " ".join(tips) if tips else None


# ── Section-scoped blocks ────────────────────────────────────────────────────


def extract_description(
    lines: Sequence[str],
    intro: SectionSpan | None,
    ingredients: SectionSpan | None,
    excluded: set[int],
    min_chars: int = 40,
) -> str | None:
    """Short description for the draft.

    The intro block is used when it precedes the ingredients. Otherwise the
    first long line that is neither the title nor a heading is used.

    Args:
        lines: Normalized lines.
        intro: Span of the intro ("petite histoire") block.
        ingredients: Span of the ingredients block.
        excluded: Indices of the title line and heading lines.
        min_chars: Minimum stripped length of a fallback line.

    Returns:
        The description, or None.
    """
    if intro is not None and (ingredients is None or intro.start_index < ingredients.start_index):
        description = join_stripped(intro.body(lines))
        if description:
            return description

    for index, line in enumerate(lines):
        if index in excluded:
            continue
        stripped = strip_decoration(line)
        if len(stripped) > min_chars:
            return stripped
    return None


def extract_ingredients_text(lines: Sequence[str], span: SectionSpan | None) -> str | None:
    """Ingredient lines of the block, one per line, option lines dropped."""
    if span is None:
        return None
    cleaned = [strip_decoration(line) for line in span.body(lines)]
    kept = [line for line in cleaned if line and not OPTION_RE.match(line)]
    return "\n".join(kept) if kept else None


def extract_instructions_text(lines: Sequence[str], span: SectionSpan | None) -> str | None:
    """Step lines without numbering, separated by blank lines."""
    if span is None:
        return None
    cleaned = [strip_step_number(strip_decoration(line)) for line in span.body(lines)]
    kept = [line for line in cleaned if line]
    return "\n\n".join(kept) if kept else None


def extract_block(lines: Sequence[str], span: SectionSpan | None) -> str | None:
    """Whole section including its heading, space-joined."""
    if span is None:
        return None
    return join_stripped(span.all_lines(lines))


def extract_cultural_history(
    lines: Sequence[str],
    intro: SectionSpan | None,
    anecdote: SectionSpan | None,
) -> str | None:
    """Intro and anecdote text combined; either alone is enough."""
    parts: list[str] = []
    for span in (intro, anecdote):
        if span is not None:
            parts.extend(span.body(lines))
    return join_stripped(parts)


def extract_utensils(lines: Sequence[str], span: SectionSpan | None) -> list[str]:
    """Utensil names with any leading count removed."""
    if span is None:
        return []
    utensils: list[str] = []
    for line in span.body(lines):
        stripped = strip_decoration(line)
        if not stripped:
            continue
        match = LEADING_COUNT_RE.match(stripped)
        utensils.append(match.group(1).strip() if match else stripped)
    return unique(utensils)
