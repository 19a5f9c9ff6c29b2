"""Instruction block splitter."""

import re

from src.ingestion.normalizer import normalize_text, strip_decoration, strip_step_number
from src.models.ingredient import ParsedStep

PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")


def split_steps(instructions_text: str) -> list[ParsedStep]:
    """Split an instruction block into ordered steps.

    Blank-line separated paragraphs are preferred. When the text holds a
    single paragraph, each line becomes a step. Numbering and leading
    decoration are removed from every step.

    Args:
        instructions_text: Multi-line instructions text.

    Returns:
        Steps in source order.

    Raises:
        TypeError: If instructions_text is not a string.
    """
    text = normalize_text(instructions_text)
    if not text:
        return []

    chunks = PARAGRAPH_SPLIT_RE.split(text)
    if len(chunks) <= 1:
        chunks = text.split("\n")

    steps: list[ParsedStep] = []
    for chunk in chunks:
        joined = " ".join(line.strip() for line in chunk.split("\n") if line.strip())
        instruction = strip_step_number(strip_decoration(joined))
        if instruction:
            steps.append(ParsedStep(instruction=instruction))
    return steps
