"""Error types raised by the projection engine."""

from __future__ import annotations

import math
from typing import List


class InvalidParameter(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def check_finite(**values: float) -> None:
    """Reject NaN/inf inputs so they never leak into projection rows."""
    bad = [f"{name} must be a finite number" for name, value in values.items() if not math.isfinite(value)]
    if bad:
        raise InvalidParameter(bad)


def check_rate(name: str, rate: float) -> None:
    # decimal fraction; anything below -100% would flip the sign of a balance
    check_finite(**{name: rate})
    if rate < -1.0:
        raise InvalidParameter([f"{name} must not be below -100%"])


def check_balances(age: int, *balances: float) -> None:
    """Stop a projection whose balances have overflowed past float range."""
    if not all(math.isfinite(balance) for balance in balances):
        raise InvalidParameter([f"projection overflowed at age {age}; use a lower rate or an earlier end age"])
