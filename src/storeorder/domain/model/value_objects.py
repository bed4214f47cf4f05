"""Money: the single price type used by products, drafts and orders.

Backend rows carry prices as JSON numbers.  ``Money.of`` turns them into
Decimal amounts on the way in and ``to_json`` turns them back into
numbers on the way out, so all arithmetic in between is exact.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from storeorder.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "TWD"


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Price must be held as a Decimal, not {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Price is not a finite number: {self.amount}")
        if self.amount.is_signed() and self.amount != 0:
            raise ValidationError(f"Price cannot be negative: {self.amount}")

    # --- Construction ---------------------------------------------------------

    @staticmethod
    def of(raw: str | float | int | Decimal) -> Money:
        """Build Money from a backend value (JSON number or numeric string).

        Floats go through ``str`` first so ``12.1`` becomes ``Decimal("12.1")``
        rather than its binary expansion.
        """
        try:
            return Money(Decimal(str(raw)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Not a price: {raw!r}") from exc

    @staticmethod
    def optional(raw: str | float | int | Decimal | None) -> Money | None:
        if raw is None:
            return None
        return Money.of(raw)

    @staticmethod
    def zero() -> Money:
        return Money(Decimal(0))

    # --- Arithmetic -----------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._check_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, quantity: int) -> Money:
        # Line totals only: price x whole units
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise TypeError(f"Money can only be multiplied by a unit count, not {quantity!r}")
        return Money(self.amount * quantity, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._check_currency(other)
        return self.amount < other.amount

    def _check_currency(self, other: Money) -> None:
        if other.currency != self.currency:
            raise ValidationError(f"Currency mismatch: {self.currency} vs {other.currency}")

    # --- Output ---------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:,.2f}"

    def to_json(self) -> float | int:
        """Whole amounts stay ints (``100``), fractional ones become floats."""
        if self.amount == self.amount.to_integral_value():
            return int(self.amount)
        return float(self.amount)
