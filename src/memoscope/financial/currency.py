"""Currency detection.

Markers are checked in a fixed priority order; the first marker present
anywhere in the text wins, regardless of where it appears. A bare "kr" is
ambiguous between the Nordic krona/krone currencies and is resolved by the
nearest country or city hint.
"""

from __future__ import annotations

import re

from memoscope.financial.models import Currency
from memoscope.text.normalize import normalize

DEFAULT_CURRENCY = Currency.USD
KR_DEFAULT = Currency.SEK
KR_HINT_WINDOW = 80

CURRENCY_MARKERS: tuple[tuple[re.Pattern[str], Currency], ...] = (
    (re.compile(r"\$"), Currency.USD),
    (re.compile(r"\busd\b"), Currency.USD),
    (re.compile(r"€"), Currency.EUR),
    (re.compile(r"\beur\b"), Currency.EUR),
    (re.compile(r"£"), Currency.GBP),
    (re.compile(r"\bgbp\b"), Currency.GBP),
    (re.compile(r"\bsek\b"), Currency.SEK),
    (re.compile(r"\bnok\b"), Currency.NOK),
    (re.compile(r"\bdkk\b"), Currency.DKK),
)

# "500kr", "500 kr", "kr 500" but not "krona" inside other words.
_BARE_KR = re.compile(r"(?<![a-z])kr\b")

KR_HINTS: tuple[tuple[Currency, re.Pattern[str]], ...] = (
    (
        Currency.SEK,
        re.compile(r"swed|stockholm|gothenburg|göteborg|malmö|malmo|uppsala|svensk|kronor"),
    ),
    (
        Currency.NOK,
        re.compile(r"norw|norge|oslo|bergen|trondheim|stavanger|norsk|kroner"),
    ),
    (
        Currency.DKK,
        re.compile(r"denmark|danish|danmark|copenhagen|københavn|aarhus|odense|dansk"),
    ),
)


def _resolve_bare_kr(text: str) -> Currency | None:
    """Currency for the first bare "kr" with a hint nearby; SEK if none has one."""
    occurrences = list(_BARE_KR.finditer(text))
    if not occurrences:
        return None

    for occurrence in occurrences:
        lo = max(0, occurrence.start() - KR_HINT_WINDOW)
        hi = min(len(text), occurrence.end() + KR_HINT_WINDOW)
        best: tuple[int, int, Currency] | None = None
        for rank, (currency, pattern) in enumerate(KR_HINTS):
            for hint in pattern.finditer(text, lo, hi):
                if hint.end() <= occurrence.start():
                    distance = occurrence.start() - hint.end()
                else:
                    distance = max(0, hint.start() - occurrence.end())
                candidate = (distance, rank, currency)
                if best is None or candidate < best:
                    best = candidate
        if best is not None:
            return best[2]
    return KR_DEFAULT


def detect_currency(text: object) -> Currency:
    """Detect the currency of a narrative. Total: defaults to USD.

    Args:
        text: Scan text (see build_scan_text for the field order).

    Returns:
        The currency of the highest-priority marker present.
    """
    lowered = normalize(text, "currency.detect_currency")
    for pattern, currency in CURRENCY_MARKERS:
        if pattern.search(lowered):
            return currency
    kr = _resolve_bare_kr(lowered)
    if kr is not None:
        return kr
    return DEFAULT_CURRENCY
