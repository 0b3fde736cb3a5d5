"""Business-model classification.

An ordered list of (predicate, label) pairs; the first predicate that
matches wins. The table ends with a mandatory catch-all so classification
is total: every input, including the empty string, gets exactly one label.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from memoscope.financial.models import BusinessModelType
from memoscope.text.normalize import normalize


@dataclass(frozen=True)
class ModelPredicate:
    label: BusinessModelType
    test: Callable[[str], bool]
    description: str


def _pattern(regex: str) -> Callable[[str], bool]:
    compiled = re.compile(regex)
    return lambda text: compiled.search(text) is not None


def _always(_text: str) -> bool:
    return True


CLASSIFICATION_TABLE: tuple[ModelPredicate, ...] = (
    ModelPredicate(
        label=BusinessModelType.AUM,
        test=_pattern(
            r"\baum\b|assets under management|wealth management|robo-?advis"
            r"|\bbasis points?\b|\bbps\b"
        ),
        description="AUM fee mention",
    ),
    ModelPredicate(
        label=BusinessModelType.PROJECT,
        test=_pattern(
            r"\bper project\b|\bproject[- ]based\b|\bproject fees?\b|\bdeal fees?\b"
            r"|\bsuccess fees?\b|\bretainers?\b|\bconsulting\b|\bagency\b"
        ),
        description="Project or deal fee mention",
    ),
    ModelPredicate(
        label=BusinessModelType.MARKETPLACE,
        test=_pattern(
            r"\bmarketplaces?\b|\btake rate\b|\btransaction fees?\b|\bcommissions?\b"
            r"|\bgmv\b|\btwo[- ]sided\b|\bper transaction\b"
        ),
        description="Marketplace or transaction fee mention",
    ),
    ModelPredicate(
        label=BusinessModelType.ENTERPRISE,
        test=_pattern(r"\benterprises?\b|\bacv\b|\bannual contracts?\b|\bfortune \d+"),
        description="Enterprise or ACV mention",
    ),
    ModelPredicate(
        label=BusinessModelType.B2C,
        test=_pattern(r"\bb2c\b|\bconsumers?\b|\bper[- ]user\b|\bsubscribers\b"),
        description="Per-user or consumer mention",
    ),
    ModelPredicate(
        label=BusinessModelType.SAAS,
        test=_always,
        description="Default",
    ),
)

if CLASSIFICATION_TABLE[-1].test is not _always:
    raise ValueError("CLASSIFICATION_TABLE must end with the catch-all entry")


def classify_business_model(text: object) -> BusinessModelType:
    """Classify narrative text into exactly one business model label."""
    lowered = normalize(text, "business_model.classify_business_model")
    for predicate in CLASSIFICATION_TABLE:
        if predicate.test(lowered):
            return predicate.label
    # Unreachable: the table ends with a catch-all.
    return BusinessModelType.SAAS
