"""Tests for currency detection."""

from __future__ import annotations

import pytest

from memoscope.financial.currency import detect_currency
from memoscope.financial.models import Currency


class TestMarkers:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("We charge $49 per month", Currency.USD),
            ("Priced at 49 USD", Currency.USD),
            ("We charge €49", Currency.EUR),
            ("Billing in EUR only", Currency.EUR),
            ("£20 per seat", Currency.GBP),
            ("Invoices in GBP", Currency.GBP),
            ("Priced in SEK", Currency.SEK),
            ("Priced in NOK", Currency.NOK),
            ("Priced in DKK", Currency.DKK),
        ],
    )
    def test_single_marker(self, text: str, expected: Currency) -> None:
        assert detect_currency(text) is expected

    def test_priority_order_beats_position(self) -> None:
        """A dollar sign wins even when a euro marker appears first."""
        assert detect_currency("€10 in Europe, $12 in the US") is Currency.USD

    def test_no_marker_defaults_to_usd(self) -> None:
        assert detect_currency("We sell across Europe") is Currency.USD
        assert detect_currency("") is Currency.USD
        assert detect_currency(None) is Currency.USD


class TestBareKr:
    def test_no_hint_defaults_to_sek(self) -> None:
        assert detect_currency("Plans start at 99 kr") is Currency.SEK

    def test_norwegian_hint(self) -> None:
        assert detect_currency("500 kr per month for clinics in Oslo") is Currency.NOK

    def test_danish_hint(self) -> None:
        assert detect_currency("Copenhagen cafes pay 200kr monthly") is Currency.DKK

    def test_nearest_hint_wins(self) -> None:
        assert detect_currency("Stockholm office. Oslo pricing: 300 kr") is Currency.NOK

    def test_hint_outside_window_is_ignored(self) -> None:
        text = "Based in Oslo. " + "x" * 100 + " 500 kr"
        assert detect_currency(text) is Currency.SEK

    def test_kr_inside_word_is_not_a_marker(self) -> None:
        assert detect_currency("We partner with Norwegian krill farms") is Currency.USD
