# Methodology: Clean Architecture – application use case (conversion)
from __future__ import annotations

from datetime import date
from decimal import Decimal, localcontext
from typing import Protocol, Union

CONVERSION_PRECISION = 28

Amount = Union[Decimal, int]


class RateSource(Protocol):
    def retrieve(self, on: date) -> Decimal: ...


def _to_decimal(amount: Amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, int) and not isinstance(amount, bool):
        return Decimal(amount)
    raise TypeError(f"USD amount must be a Decimal or int, not {type(amount).__name__}")


def convert(amount_usd: Amount, on: date, store: RateSource) -> Decimal:
    """Return ``amount_usd`` in EUR using the rate effective on ``on``.

    The division is done in Decimal at CONVERSION_PRECISION significant digits;
    rounding to cents is left to whoever displays the result.
    """
    amount = _to_decimal(amount_usd)
    rate = store.retrieve(on)
    with localcontext() as ctx:
        ctx.prec = CONVERSION_PRECISION
        return amount / rate


class Converter:
    def __init__(self, store: RateSource) -> None:
        self.store = store

    def rate(self, on: date) -> Decimal:
        return self.store.retrieve(on)

    def convert(self, amount_usd: Amount, on: date) -> Decimal:
        return convert(amount_usd, on, self.store)
