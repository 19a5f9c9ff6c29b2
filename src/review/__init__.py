"""Editorial review helpers for parsed drafts."""

from src.review.quality import (
    DIFFICULTY_TEMPLATES,
    describe_difficulty,
    generate_slug,
    missing_fields,
)

__all__ = ["DIFFICULTY_TEMPLATES", "describe_difficulty", "generate_slug", "missing_fields"]
