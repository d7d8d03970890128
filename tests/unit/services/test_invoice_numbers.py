"""Tests for invoice number generation."""

from datetime import UTC, datetime

from retail_pos.core.services.invoice_numbers import InvoiceNumberGenerator


class TestInvoiceNumberGenerator:
    def test_format(self):
        generator = InvoiceNumberGenerator()
        number = generator.generate(datetime(2026, 3, 9, 14, 30, tzinfo=UTC))
        assert number.startswith("INV-20260309-")
        assert len(number.split("-")[2]) == 6
        assert generator.is_valid(number)

    def test_defaults_to_now(self):
        generator = InvoiceNumberGenerator()
        number = generator.generate()
        assert datetime.now(UTC).strftime("%Y%m%d") in number

    def test_custom_prefix_and_length(self):
        generator = InvoiceNumberGenerator(prefix="POS", suffix_length=4)
        number = generator.generate(datetime(2026, 1, 1, tzinfo=UTC))
        assert number.startswith("POS-20260101-")
        assert generator.is_valid(number)

    def test_token_source_is_used(self):
        generator = InvoiceNumberGenerator(token_source=lambda n: "A" * n)
        number = generator.generate(datetime(2026, 1, 1, tzinfo=UTC))
        assert number == "INV-20260101-AAAAAA"

    def test_suffixes_vary(self):
        generator = InvoiceNumberGenerator()
        when = datetime(2026, 1, 1, tzinfo=UTC)
        numbers = {generator.generate(when) for _ in range(50)}
        assert len(numbers) > 1

    def test_is_valid_rejects_bad_shapes(self):
        generator = InvoiceNumberGenerator()
        assert not generator.is_valid("INV-2026-ABCDEF")
        assert not generator.is_valid("INV-20260101-abcdef")
        assert not generator.is_valid("XYZ-20260101-ABCDEF")
