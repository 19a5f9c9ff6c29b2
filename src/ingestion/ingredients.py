"""Ingredient line tokenizer: quantity, unit and name per line."""

import logging
import re

from src.ingestion.normalizer import normalize_lines, strip_decoration
from src.models.ingredient import ParsedIngredientLine

logger = logging.getLogger(__name__)

# Unit synonyms mapped to their normalized token.
UNIT_SYNONYMS: dict[str, str] = {
    "g": "g",
    "gr": "g",
    "gramme": "g",
    "grammes": "g",
    "kg": "kg",
    "kilo": "kg",
    "kilos": "kg",
    "kilogramme": "kg",
    "kilogrammes": "kg",
    "mg": "mg",
    "ml": "ml",
    "cl": "cl",
    "l": "l",
    "litre": "l",
    "litres": "l",
    "botte": "botte",
    "bottes": "botte",
    "pincée": "pincée",
    "pincées": "pincée",
    "pincee": "pincée",
    "pincees": "pincée",
    "c.à.c": "c.à.c",
    "c.a.c": "c.à.c",
    "càc": "c.à.c",
    "c.à.s": "c.à.s",
    "c.a.s": "c.à.s",
    "càs": "c.à.s",
    "tranche": "tranche",
    "tranches": "tranche",
    "cube": "cube",
    "cubes": "cube",
    "bouquet": "bouquet",
    "bouquets": "bouquet",
}

SECTION_HEADER_RE = re.compile(r"^\[.*\]$")
OPTION_RE = re.compile(r"^option\b", re.IGNORECASE)
QUANTITY_RE = re.compile(r"^(\d+\s*/\s*\d+|\d+(?:[.,]\d+)?)\s*(.*)$")
UNIT_RE = re.compile(r"^(\S+?)\.?(?:\s+(.*))?$")
ELISION_RE = re.compile(r"^(?:de\s+|d['’]\s*)", re.IGNORECASE)


def parse_quantity(token: str) -> float | None:
    """Parse "200", "1,5", "0.25" or "1/2" into a number.

    Returns None for a fraction with a zero denominator.
    """
    if "/" in token:
        numerator, denominator = (part.strip() for part in token.split("/", 1))
        if int(denominator) == 0:
            return None
        return int(numerator) / int(denominator)
    return float(token.replace(",", "."))


def split_unit(rest: str) -> tuple[str | None, str]:
    """Split a recognized leading unit token from the remainder.

    Args:
        rest: Text following the quantity.

    Returns:
        (unit, name). The unit is None when the first token is not a known
        unit, in which case the whole text is the name.
    """
    match = UNIT_RE.match(rest)
    if not match:
        return None, rest
    unit = UNIT_SYNONYMS.get(match.group(1).lower())
    if unit is None:
        return None, rest
    name = ELISION_RE.sub("", (match.group(2) or "").strip())
    return unit, name.strip()


def tokenize_ingredient_line(line: str) -> ParsedIngredientLine | None:
    """Decompose a single ingredient line.

    Args:
        line: One normalized line of the ingredients block.

    Returns:
        The parsed line, or None for headers, option lines and lines without
        a name.
    """
    if SECTION_HEADER_RE.match(line):
        return None
    text = strip_decoration(line)
    if not text or OPTION_RE.match(text):
        return None

    quantity: float | None = None
    unit: str | None = None
    name = text

    match = QUANTITY_RE.match(text)
    if match:
        parsed = parse_quantity(match.group(1))
        if parsed is not None:
            quantity = parsed
            unit, name = split_unit(match.group(2).strip())

    name = name.strip()
    if not name:
        logger.debug("Dropping ingredient line without a name: %s", line)
        return None

    return ParsedIngredientLine(original_text=line, quantity=quantity, unit=unit, name=name)


def tokenize_ingredients(ingredients_text: str) -> list[ParsedIngredientLine]:
    """Tokenize every line of an ingredients block in source order.

    Args:
        ingredients_text: Multi-line ingredients text.

    Returns:
        One ParsedIngredientLine per surviving line.

    Raises:
        TypeError: If ingredients_text is not a string.
    """
    parsed: list[ParsedIngredientLine] = []
    for line in normalize_lines(ingredients_text):
        ingredient = tokenize_ingredient_line(line)
        if ingredient is not None:
            parsed.append(ingredient)
    return parsed
