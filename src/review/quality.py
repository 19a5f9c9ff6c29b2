"""Draft completeness checks, slugs and difficulty texts."""

import re
import unicodedata

from src.models.draft import Difficulty, ParsedRecipeDraft

DIFFICULTY_TEMPLATES: dict[Difficulty, str] = {
    Difficulty.BEGINNER: (
        "Recette accessible aux débutants, avec peu d'étapes techniques. Le principal "
        "enjeu est de respecter les temps et les températures de cuisson."
    ),
    Difficulty.INTERMEDIATE: (
        "Recette de difficulté intermédiaire, qui nécessite une bonne maîtrise des bases "
        "(préparation, cuisson, organisation) et un minimum de rigueur."
    ),
    Difficulty.ADVANCED: (
        "Recette exigeante, avec plusieurs étapes techniques et une gestion fine des "
        "textures, des temps de repos et des températures."
    ),
}

# Editorial fields checked on a draft, with the label shown to editors.
_REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("description", "Description"),
    ("ingredients_text", "Ingrédients"),
    ("instructions_text", "Instructions détaillées"),
    ("cultural_history", "Histoire / contexte culturel"),
    ("techniques", "Techniques"),
    ("nutritional_notes", "Notes nutritionnelles"),
)


def _is_non_empty(value: str | None) -> bool:
    return isinstance(value, str) and value.strip() != ""


def generate_slug(title: str) -> str:
    """Build a URL slug from a title.

    Accents are folded to ASCII, anything else that is not alphanumeric
    becomes a single dash, and dashes at either end are removed.

    Args:
        title: Recipe title.

    Returns:
        The slug, possibly empty.
    """
    if not isinstance(title, str):
        raise TypeError(f"Expected str, got {type(title).__name__}")
    text = title.replace("œ", "oe").replace("Œ", "Oe").replace("æ", "ae").replace("Æ", "Ae")
    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", "-", folded.lower().strip()).strip("-")


def describe_difficulty(difficulty: Difficulty | None) -> str | None:
    """Default editorial text for a difficulty level."""
    if difficulty is None:
        return None
    return DIFFICULTY_TEMPLATES[difficulty]


def missing_fields(draft: ParsedRecipeDraft) -> list[str]:
    """List the editorial fields a draft still lacks.

    Args:
        draft: The parsed draft.

    Returns:
        French labels of missing fields, in display order.
    """
    missing = [label for field, label in _REQUIRED_FIELDS if not _is_non_empty(getattr(draft, field))]
    if not _is_non_empty(draft.chef_tips) and draft.difficulty is None:
        missing.append("Astuces ou détails difficulté")
    return missing
