"""Recipe text ingestion: normalization, sections, extraction."""

from src.ingestion.ingredients import tokenize_ingredients
from src.ingestion.parser import RecipeParser, parse_recipe_text
from src.ingestion.steps import split_steps

__all__ = ["RecipeParser", "parse_recipe_text", "split_steps", "tokenize_ingredients"]
