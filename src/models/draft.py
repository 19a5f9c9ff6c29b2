"""Recipe draft data model."""

from enum import Enum

from pydantic import BaseModel, Field


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class DietaryLabel(str, Enum):
    VEGETARIEN = "vegetarien"
    VEGETALIEN = "vegetalien"
    VEGAN = "vegan"
    PESCETARIEN = "pescetarien"
    SANS_GLUTEN = "sans_gluten"
    SANS_LACTOSE = "sans_lactose"
    SANS_OEUF = "sans_oeuf"
    SANS_ARACHIDE = "sans_arachide"
    SANS_FRUITS_A_COQUE = "sans_fruits_a_coque"
    SANS_SOJA = "sans_soja"
    SANS_SUCRE_AJOUTE = "sans_sucre_ajoute"
    SANS_SEL_AJOUTE = "sans_sel_ajoute"
    HALAL = "halal"
    CASHER = "casher"


class ServingTemperature(str, Enum):
    CHAUD = "chaud"
    TIEDE = "tiede"
    AMBIANTE = "ambiante"
    FROID = "froid"
    AU_CHOIX = "au_choix"


class StorageMode(str, Enum):
    REFRIGERATEUR = "refrigerateur"
    CONGELATEUR = "congelateur"
    AMBIANTE = "ambiante"
    SOUS_VIDE = "sous_vide"
    BOITE_HERMETIQUE = "boite_hermetique"
    AU_CHOIX = "au_choix"


class ParsedRecipeDraft(BaseModel):
    """Structured but unvalidated recipe extracted from free text.

    Every field is independently optional. Collection fields hold unique
    values in the order they were first found.
    """

    title: str | None = None
    description: str | None = None
    servings: int | None = Field(default=None, gt=0)
    prep_time_min: int | None = Field(default=None, ge=0)
    cook_time_min: int | None = Field(default=None, ge=0)
    rest_time_min: int | None = Field(default=None, ge=0)
    ingredients_text: str | None = None
    instructions_text: str | None = None
    difficulty: Difficulty | None = None
    storage_duration_days: int | None = Field(default=None, gt=0)
    storage_instructions: str | None = None
    tags: list[str] = Field(default_factory=list)
    utensils: list[str] = Field(default_factory=list)
    chef_tips: str | None = None
    cultural_history: str | None = None
    techniques: str | None = None
    nutritional_notes: str | None = None
    source_info: str | None = None
    dietary_labels: list[DietaryLabel] = Field(default_factory=list)
    serving_temperatures: list[ServingTemperature] = Field(default_factory=list)
    storage_modes: list[StorageMode] = Field(default_factory=list)

    def is_empty(self) -> bool:
        """True when no heuristic extracted anything."""
        return not self.model_dump(exclude_defaults=True)
