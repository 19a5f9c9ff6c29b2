"""Entry point: parse a pasted recipe text into a JSON draft."""

import argparse
import json
import logging
import sys
from pathlib import Path

from src.config import load_config
from src.ingestion import RecipeParser, split_steps, tokenize_ingredients
from src.review import generate_slug, missing_fields

logger = logging.getLogger(__name__)


def main() -> int:
    """Parse a recipe file (or stdin) and print the draft as JSON."""
    arg_parser = argparse.ArgumentParser(description="Parse recipe text into a structured draft")
    arg_parser.add_argument("file", nargs="?", type=Path, help="Recipe text file (default: stdin)")
    arg_parser.add_argument("--config", type=Path, default=Path("config.yaml"), help="YAML config path")
    arg_parser.add_argument("--indent", type=int, default=2, help="JSON indentation")
    args = arg_parser.parse_args()

    config = load_config(args.config)
    logging.basicConfig(level=config.logging.level)

    parser = RecipeParser(config.parser)
    try:
        draft = parser.parse_file(args.file) if args.file else parser.parse(sys.stdin.read())
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1

    output = {
        "draft": draft.model_dump(mode="json", exclude_none=True),
        "ingredients": [
            line.model_dump(mode="json") for line in tokenize_ingredients(draft.ingredients_text or "")
        ],
        "steps": [step.model_dump(mode="json") for step in split_steps(draft.instructions_text or "")],
        "slug": generate_slug(draft.title or ""),
        "missing_fields": missing_fields(draft),
    }
    print(json.dumps(output, ensure_ascii=False, indent=args.indent))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
