"""Text coercion shared by every analyzer.

Analyzers receive narrative text from questionnaire answers, memo sections
and API payloads. Any of these may arrive as None, numbers, bytes or nested
structures. Coercion never raises: non-string input is logged with the
caller's context tag and converted to a best-effort string.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def coerce_text(value: object, context_tag: str) -> str:
    """Coerce any value to a string, preserving case.

    Args:
        value: Arbitrary input (usually a str).
        context_tag: Caller identifier included in the diagnostic log line.

    Returns:
        The input as a string. None yields "".
    """
    if isinstance(value, str):
        return value

    logger.info(
        "Non-string input coerced to text in %s (got %s)",
        context_tag,
        type(value).__name__,
    )

    if value is None:
        return ""
    if isinstance(value, bytes | bytearray):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, list | tuple):
        return " ".join(coerce_text(part, context_tag) for part in value)
    try:
        return str(value)
    except Exception as exc:
        logger.info("Could not stringify input in %s: %s", context_tag, type(exc).__name__)
        return ""


def normalize(value: object, context_tag: str) -> str:
    """Coerce any value to a lowercased string. Never raises."""
    return coerce_text(value, context_tag).lower()


def join_texts(parts: list[object], context_tag: str) -> str:
    """Join several text fields with single spaces, skipping empty ones."""
    coerced = (coerce_text(part, context_tag).strip() for part in parts)
    return " ".join(part for part in coerced if part)
