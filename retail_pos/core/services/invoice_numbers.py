"""
Invoice number generation.

Numbers look like ``INV-20261019-7QK2ZD``: a fixed prefix, the UTC sale date
and a random suffix. Uniqueness is enforced by the database; callers
regenerate on collision.
"""

import re
import secrets
import string
from collections.abc import Callable
from datetime import UTC, datetime

SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


class InvoiceNumberGenerator:
    """Builds date-prefixed invoice numbers with a random suffix."""

    def __init__(
        self,
        prefix: str = "INV",
        suffix_length: int = 6,
        token_source: Callable[[int], str] | None = None,
    ) -> None:
        self.prefix = prefix
        self.suffix_length = suffix_length
        self._token_source = token_source or _random_suffix
        self._pattern = re.compile(
            rf"^{re.escape(prefix)}-(\d{{8}})-([A-Z0-9]{{{suffix_length}}})$"
        )

    def generate(self, when: datetime | None = None) -> str:
        """Generate a new candidate number for a sale at `when` (default now)."""
        when = when or datetime.now(UTC)
        suffix = self._token_source(self.suffix_length)
        return f"{self.prefix}-{when.strftime('%Y%m%d')}-{suffix}"

    def is_valid(self, invoice_number: str) -> bool:
        """Check that a number has the expected shape."""
        return self._pattern.match(invoice_number) is not None


def _random_suffix(length: int) -> str:
    return "".join(secrets.choice(SUFFIX_ALPHABET) for _ in range(length))
