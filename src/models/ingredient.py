"""Ingredient line and instruction step data models."""

from pydantic import BaseModel


class ParsedIngredientLine(BaseModel):
    """A single ingredient line decomposed into quantity, unit and name."""

    original_text: str
    quantity: float | None = None
    unit: str | None = None  # normalized token, e.g. "g", "l", "pincée"
    name: str


class ParsedStep(BaseModel):
    """One instruction step. Its position in the list is step_number - 1."""

    instruction: str
