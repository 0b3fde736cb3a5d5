"""Scan-text assembly for currency and business-model detection."""

from __future__ import annotations

from collections.abc import Mapping

from memoscope.text.normalize import join_texts


def build_scan_text(
    business_model_text: object = None,
    traction_text: object = None,
    market_text: object = None,
    responses: Mapping[str, object] | None = None,
) -> str:
    """Concatenate inputs in a fixed order.

    Order: business-model text, traction text, market text, then response
    values in ascending key order. Parts are joined with single spaces and
    empty parts are skipped, so the result depends only on the inputs.
    """
    parts: list[object] = [business_model_text, traction_text, market_text]
    if responses:
        parts.extend(responses[key] for key in sorted(responses, key=str))
    return join_texts(parts, "financial.build_scan_text")
