"""Configuration loader for the recipe draft importer."""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from src.models.section import SectionKind

# A heading preceding "<N> min" on the same line is a timing, not a section.
_PREPARATION_HEADING = r"^pr[eé]paration(?![^:\n]*:\s*\d)"
# Any mention of preparation ends the ingredient list, timing lines included.
_PREPARATION_MENTION = r"pr[eé]paration"
_INGREDIENTS_HEADING = r"^ingr[eé]dients?"
_UTENSILS_HEADING = r"^ustensiles"
_STORAGE_HEADING = r"conservation"
_SOURCE_HEADING = r"^sources?\b"


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Recipe Draft Importer"
    version: str = "1.0.0"
    language: str = "fr"


class SectionRule(BaseModel):
    """Heading and stop patterns for one section kind.

    Patterns are regular expressions matched case-insensitively against the
    decoration-stripped, lowercased line. When ``stops`` is None the headings
    of every other section end this one.
    """

    headings: list[str]
    stops: list[str] | None = None
    single_line: bool = False


def default_sections() -> dict[SectionKind, SectionRule]:
    """Return the French keyword table."""
    return {
        SectionKind.TITLE: SectionRule(
            headings=[r"\(\s*\d+\s*(?:pers?\.?|personnes?)\s*\)"],
            single_line=True,
        ),
        SectionKind.DESCRIPTION: SectionRule(
            headings=[r"petite histoire"],
            stops=[_INGREDIENTS_HEADING, _UTENSILS_HEADING, _PREPARATION_HEADING],
        ),
        SectionKind.DIFFICULTY: SectionRule(headings=[r"difficul"], single_line=True),
        SectionKind.INGREDIENTS: SectionRule(
            headings=[_INGREDIENTS_HEADING],
            stops=[_PREPARATION_MENTION, r"^instructions\b", r"^[eé]tapes\b", _UTENSILS_HEADING],
        ),
        SectionKind.INSTRUCTIONS: SectionRule(
            headings=[_PREPARATION_HEADING, r"^instructions\b", r"^[eé]tapes\b"],
            stops=[
                _STORAGE_HEADING,
                r"meal prep",
                r"anecdote",
                r"^tag trello",
                r"^techniques?\b",
                r"^(?:notes? |c[oô]t[eé] )nutrition",
                _SOURCE_HEADING,
            ],
        ),
        SectionKind.STORAGE: SectionRule(headings=[_STORAGE_HEADING, r"meal prep"]),
        SectionKind.HISTORY: SectionRule(headings=[r"^(?:petite |l'|une )?anecdote"]),
        SectionKind.TECHNIQUES: SectionRule(headings=[r"^techniques?\b"]),
        SectionKind.NUTRITION: SectionRule(
            headings=[r"^(?:notes? |c[oô]t[eé] )nutrition"]
        ),
        SectionKind.UTENSILS: SectionRule(headings=[_UTENSILS_HEADING]),
        SectionKind.SOURCE: SectionRule(headings=[_SOURCE_HEADING], single_line=True),
        SectionKind.TAGS: SectionRule(headings=[r"^tag trello\s*:"], single_line=True),
    }


class ParserConfig(BaseModel):
    """Recipe text parser configuration."""

    sections: dict[SectionKind, SectionRule] = Field(default_factory=default_sections)
    title_markers: list[str] = Field(default_factory=lambda: ["🥗"])
    description_min_chars: int = 40
    source_min_chars: int = 6

    @field_validator("sections", mode="before")
    @classmethod
    def _merge_with_defaults(cls, value: Any) -> Any:
        # Partial tables override individual kinds, the rest stay French.
        if not isinstance(value, dict):
            return value
        merged: dict[Any, Any] = {kind.value: rule for kind, rule in default_sections().items()}
        for kind, rule in value.items():
            key = kind.value if isinstance(kind, SectionKind) else kind
            merged[key] = rule
        return merged

    def section_rules(self) -> dict[SectionKind, SectionRule]:
        """Section table with the title markers added as title headings.

        Returns:
            A copy of ``sections`` whose TITLE rule also matches every
            configured title marker.
        """
        rules = dict(self.sections)
        title = rules.get(SectionKind.TITLE, SectionRule(headings=[], single_line=True))
        markers = [re.escape(marker) for marker in self.title_markers]
        rules[SectionKind.TITLE] = title.model_copy(update={"headings": [*title.headings, *markers]})
        return rules


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Override log level from environment
    log_level = os.getenv("RECIPE_IMPORT_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()

    return config
