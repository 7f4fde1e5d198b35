"""Tests for invoice identifiers and invoice number formats."""

from __future__ import annotations

import pytest

from club_invoicing.domain.invoice_numbers import (
    InvoiceNumberParts,
    compute_six_digit_id,
    format_invoice_number,
    generate_structured_invoice_number,
    normalize_invoice_id,
    parse_structured_invoice_number,
)


def test_supplied_identifier_keeps_last_six_digits() -> None:
    assert normalize_invoice_id("INV-000042", "reg1:evt1") == "000042"


def test_hashed_identifier_is_stable_for_a_seed() -> None:
    first = normalize_invoice_id(None, "reg1:evt1")

    assert first == normalize_invoice_id(None, "reg1:evt1")
    assert first == compute_six_digit_id("reg1:evt1")


@pytest.mark.parametrize("seed", ["", "a", "reg1:evt1", "ÉvénementÜ", "🎉🎉", "x" * 500])
def test_hashed_identifier_is_six_digits_in_range(seed: str) -> None:
    identifier = compute_six_digit_id(seed)

    assert len(identifier) == 6
    assert identifier.isdigit()
    assert 100_000 <= int(identifier) <= 999_999


def test_blank_identifier_falls_back_to_seed() -> None:
    assert normalize_invoice_id("", "reg1:evt1") == compute_six_digit_id("reg1:evt1")
    assert normalize_invoice_id(None, None) == compute_six_digit_id("invoice")


def test_identifier_without_digits_is_right_padded() -> None:
    assert normalize_invoice_id("AB") == "AB0000"
    assert normalize_invoice_id("ABCDEFGH") == "ABCDEF"


def test_invoice_number_pads_order_version() -> None:
    assert format_invoice_number("123456", 1) == "123456-001"
    assert format_invoice_number("123456", 27) == "123456-027"


def test_invoice_number_rejects_non_positive_version() -> None:
    with pytest.raises(ValueError):
        format_invoice_number("123456", 0)


def test_structured_number_round_trip() -> None:
    number = generate_structured_invoice_number("Cheer Elite Events", 2025, 1, 1, version=2)

    assert number == "CEE-2501-C001-02"
    assert parse_structured_invoice_number(number) == InvoiceNumberParts("CEE", 2025, 1, 1, 2)


def test_structured_number_for_unknown_organizer_uses_initial_letters() -> None:
    assert generate_structured_invoice_number("Maple Leaf Spirit", 2026, 12, 45) == "MAP-2612-C045-01"
