"""Line normalization and decoration stripping for pasted recipe text."""

import re

_BULLET_RE = re.compile(r"^•\s*")
# Anything that is not a French letter or a digit: emoji, symbols, bullets.
_LEADING_DECORATION_RE = re.compile(r"^[^A-Za-zÀ-ÿŒœÆæ0-9]+")
STEP_NUMBER_RE = re.compile(r"^[0-9]+(?:\ufe0f?\u20e3)?[)º°.\-:]?\s*")


def _ensure_text(value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Expected str, got {type(value).__name__}")
    return value


def normalize_text(raw: str) -> str:
    """Canonicalize line endings and non-breaking spaces, then trim.

    Args:
        raw: Raw pasted text.

    Returns:
        The normalized text.

    Raises:
        TypeError: If raw is not a string.
    """
    text = _ensure_text(raw)
    return text.replace("\r\n", "\n").replace("\u00a0", " ").strip()


def normalize_lines(raw: str) -> list[str]:
    """Split text into trimmed, non-empty lines in source order.

    Args:
        raw: Raw pasted text.

    Returns:
        List of lines. Empty for empty or whitespace-only input.
    """
    text = normalize_text(raw)
    if not text:
        return []
    return [line.strip() for line in text.split("\n") if line.strip()]


def strip_decoration(line: str) -> str:
    """Remove a leading bullet and any leading emoji or symbols.

    Idempotent: the result never starts with a decoration character.
    """
    if not line:
        return ""
    trimmed = _BULLET_RE.sub("", line).strip()
    return _LEADING_DECORATION_RE.sub("", trimmed).strip()


def strip_step_number(text: str) -> str:
    """Remove a leading step number such as "1.", "2)", "3°" or "4️⃣"."""
    return STEP_NUMBER_RE.sub("", text).strip()
