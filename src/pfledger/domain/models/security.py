"""Security reference data."""

import uuid
from dataclasses import dataclass, field
from typing import Optional


@dataclass(eq=False)
class Security:
    """
    A tradable instrument referenced by transactions.

    Reference data only; prices and classification live elsewhere.
    """

    name: str
    currency_code: str = "EUR"
    isin: Optional[str] = None
    ticker_symbol: Optional[str] = None
    security_id: str = field(default_factory=lambda: str(uuid.uuid4()))
