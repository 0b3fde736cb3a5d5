"""Numeric candidate scanning and keyword-proximity selection.

Every number in a narrative is tokenized once into a NumberCandidate with
its normalized value (suffix shorthand applied) and a kind:

- money: carries a currency marker ($, EUR, 500 kr, ...)
- percent: followed by %, "percent" or basis points (bps are divided by 100)
- plain: anything else

Fields are then filled by picking the candidate closest to one of the
field's keywords. Closest wins; ties break to the earliest candidate.
Malformed numbers are skipped, never coerced to zero.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

DEFAULT_WINDOW = 48

SUFFIX_MULTIPLIERS: dict[str, float] = {
    "k": 1e3,
    "thousand": 1e3,
    "m": 1e6,
    "mm": 1e6,
    "million": 1e6,
    "b": 1e9,
    "bn": 1e9,
    "billion": 1e9,
}

_NUMBER_TOKEN = re.compile(
    r"(?P<prefix>[$€£]|\b(?:usd|eur|gbp|sek|nok|dkk)\s?)?"
    r"(?<![\w.,])(?P<number>\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)"
    r"(?:\s?(?P<suffix>thousand|million|billion|mm|bn|k|m|b)\b)?"
    r"(?:\s?(?P<unit>%|percent\b|bps\b|basis points?\b))?"
    r"(?:\s?(?P<postfix>kr|sek|nok|dkk|usd|eur|gbp)\b)?",
    re.IGNORECASE,
)

# "4:1", "3 : 1". Both sides of a ratio are dropped from the candidates.
_RATIO_TOKEN = re.compile(r"(?<![\w.,])\d+(?:\.\d+)?\s*:\s*\d+(?:\.\d+)?")

_YEAR = re.compile(r"^(?:19|20)\d{2}$")


class NumberKind(StrEnum):
    MONEY = "money"
    PERCENT = "percent"
    PLAIN = "plain"


@dataclass(frozen=True)
class NumberCandidate:
    """A number found in text, with its normalized value and span."""

    value: float
    kind: NumberKind
    start: int
    end: int
    raw: str
    has_suffix: bool = False

    @property
    def is_year(self) -> bool:
        return self.kind is NumberKind.PLAIN and not self.has_suffix and bool(_YEAR.match(self.raw))

    @property
    def is_integer(self) -> bool:
        return float(self.value).is_integer()


def parse_amount(number: str, suffix: str | None = None) -> float | None:
    """Parse a digit string with optional shorthand suffix.

    Returns None when the string is not a finite number.
    """
    cleaned = number.replace(",", "").strip()
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    if suffix:
        multiplier = SUFFIX_MULTIPLIERS.get(suffix.lower())
        if multiplier is None:
            return None
        value *= multiplier
    return value


def parse_number(value: object) -> float | None:
    """Coerce a structured value (number or numeric string) to float.

    Strings may carry currency symbols, thousands separators, a trailing %
    or a shorthand suffix ("12k"). Booleans and unparseable values yield None.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        number = float(value)
        return number if math.isfinite(number) else None
    if not isinstance(value, str):
        return None
    candidates = scan_numbers(value)
    if not candidates:
        return None
    return candidates[0].value


def scan_numbers(text: str) -> list[NumberCandidate]:
    """Tokenize every number in text, in order of appearance.

    Numbers that are part of a ratio ("4:1") are not amounts and are skipped.
    """
    ratios = [(m.start(), m.end()) for m in _RATIO_TOKEN.finditer(text)]
    candidates: list[NumberCandidate] = []
    for match in _NUMBER_TOKEN.finditer(text):
        if any(start <= match.start("number") < end for start, end in ratios):
            continue
        number = match.group("number")
        suffix = match.group("suffix")
        unit = (match.group("unit") or "").lower()

        value = parse_amount(number, suffix)
        if value is None:
            continue

        if unit:
            kind = NumberKind.PERCENT
            if unit == "bps" or unit.startswith("basis"):
                value = value / 100
        elif match.group("prefix") or match.group("postfix"):
            kind = NumberKind.MONEY
        else:
            kind = NumberKind.PLAIN

        candidates.append(
            NumberCandidate(
                value=value,
                kind=kind,
                start=match.start("number") if not match.group("prefix") else match.start(),
                end=match.end(),
                raw=number,
                has_suffix=bool(suffix),
            )
        )
    return candidates


def _gap(a_start: int, a_end: int, b_start: int, b_end: int) -> int:
    if a_end <= b_start:
        return b_start - a_end
    if b_end <= a_start:
        return a_start - b_end
    return 0


def nearest_candidate(
    text: str,
    candidates: Iterable[NumberCandidate],
    keyword: re.Pattern[str],
    kinds: frozenset[NumberKind],
    *,
    window: int = DEFAULT_WINDOW,
    integers_only: bool = False,
) -> NumberCandidate | None:
    """Pick the candidate closest to any keyword occurrence.

    Args:
        text: Lowercased text the candidates were scanned from.
        candidates: Candidates in order of appearance.
        keyword: Field keyword pattern (lowercase).
        kinds: Accepted candidate kinds.
        window: Maximum character gap between keyword and candidate.
        integers_only: Reject fractional values (counts).

    Returns:
        The closest candidate, the earliest one on ties, or None.
    """
    spans = [(m.start(), m.end()) for m in keyword.finditer(text)]
    if not spans:
        return None

    best: tuple[int, int, NumberCandidate] | None = None
    for candidate in candidates:
        if candidate.kind not in kinds or candidate.is_year:
            continue
        if integers_only and not candidate.is_integer:
            continue
        distance = min(_gap(s, e, candidate.start, candidate.end) for s, e in spans)
        if distance > window:
            continue
        key = (distance, candidate.start, candidate)
        if best is None or key[:2] < best[:2]:
            best = key
    return best[2] if best is not None else None
