"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from order_wizard.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal so plan prices and add-on totals add up exactly.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                "amount",
                f"Money amount must be a Decimal, got {type(self.amount).__name__}",
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                "amount", f"Money amount cannot be negative, got {self.amount}"
            )

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(Decimal("0"), currency)

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        if factor < 0:
            raise ValidationError("quantity", "Cannot multiply Money by a negative factor")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                "currency", f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, field: str = "amount") -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(field, f"Invalid money amount: {amount!r}") from exc
        if not value.is_finite():
            raise ValidationError(field, f"Invalid money amount: {amount!r}")
        if value < 0:
            raise ValidationError(field, f"Money amount cannot be negative, got {value}")
        return Money(value)


@dataclass(frozen=True)
class Quantity:
    """A non-negative integer quantity.

    Zero is allowed: an add-on can stay selected while contributing nothing.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                "quantity",
                f"Quantity must be an integer, got {type(self.value).__name__}",
            )
        if self.value < 0:
            raise ValidationError("quantity", "Quantity cannot be negative")

    @staticmethod
    def parse(raw: object) -> Quantity:
        """Coerce live form input.

        Numbers and numeric strings are truncated toward zero (``"2.7"``
        is 2); negatives and anything non-numeric become zero.
        """
        if isinstance(raw, bool):
            return Quantity(0)
        if isinstance(raw, int):
            return Quantity(max(raw, 0))
        try:
            value = Decimal(str(raw).strip())
        except (InvalidOperation, ValueError):
            return Quantity(0)
        if not value.is_finite():
            return Quantity(0)
        return Quantity(max(int(value), 0))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Address:
    """Customer billing address.

    ``address_line2`` is the only optional part.
    """

    address_line1: str
    city: str
    state: str
    zip_code: str
    address_line2: str | None = None

    REQUIRED_FIELDS = ("addressLine1", "city", "state", "zipCode")

    def __post_init__(self) -> None:
        for label, value in zip(
            self.REQUIRED_FIELDS,
            (self.address_line1, self.city, self.state, self.zip_code),
        ):
            if not value or not value.strip():
                raise ValidationError(f"address.{label}", f"{label} is required")

    def lines(self) -> list[str]:
        result = [self.address_line1]
        if self.address_line2:
            result.append(self.address_line2)
        result.append(f"{self.city}, {self.state} {self.zip_code}")
        return result
