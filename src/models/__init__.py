"""Data models for the recipe draft importer."""

from src.models.draft import (
    DietaryLabel,
    Difficulty,
    ParsedRecipeDraft,
    ServingTemperature,
    StorageMode,
)
from src.models.ingredient import ParsedIngredientLine, ParsedStep
from src.models.section import SectionKind, SectionSpan

__all__ = [
    "DietaryLabel",
    "Difficulty",
    "ParsedIngredientLine",
    "ParsedRecipeDraft",
    "ParsedStep",
    "SectionKind",
    "SectionSpan",
    "ServingTemperature",
    "StorageMode",
]
