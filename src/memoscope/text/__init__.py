"""Text coercion helpers."""

from memoscope.text.normalize import coerce_text, join_texts, normalize

__all__ = ["coerce_text", "join_texts", "normalize"]
