"""Value Objects and normalization helpers shared across the domain.

Money and Quantity validate on construction, so an out-of-range amount
never gets past the domain boundary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from billing.domain.exceptions import ValidationError

CENTS = Decimal("0.01")

# Largest decimal exponent a float can still represent
MAX_EXPONENT = 308


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount.

    Arithmetic happens on Decimal; callers get a float back through
    ``to_float()`` once the amount has been rounded to cents.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int | float | Decimal) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, (int, float, Decimal)):
            raise TypeError(f"Can only multiply Money by a number, got {type(factor).__name__}")
        return Money(self.amount * Decimal(str(factor)))

    def rounded(self) -> Money:
        """Round half-up to whole cents."""
        exponent = self.amount.adjusted()
        if exponent > MAX_EXPONENT:
            raise ValidationError(f"Money amount too large: {self.amount}")
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, exponent + 3)
            try:
                return Money(self.amount.quantize(CENTS, rounding=ROUND_HALF_UP))
            except InvalidOperation as exc:
                raise ValidationError(f"Money amount too large: {self.amount}") from exc

    def to_float(self) -> float:
        value = float(self.amount)
        if math.isinf(value):
            raise ValidationError(f"Money amount too large: {self.amount}")
        return value

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Coerce text or a number to Money via its decimal string."""
        if isinstance(amount, bool) or amount is None:
            raise ValidationError(f"Invalid money amount: {amount!r}")
        try:
            return Money(Decimal(str(amount).strip()))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A strictly positive, finite quantity (fractional units allowed)."""

    value: int | float

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise ValidationError(
                f"Quantity must be a number, got {type(self.value).__name__}"
            )
        if isinstance(self.value, float) and not math.isfinite(self.value):
            raise ValidationError("Quantity must be finite")
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    @staticmethod
    def of(raw: object) -> Quantity:
        return Quantity(to_number(raw, "quantity"))

    def __str__(self) -> str:
        return str(self.value)


# ---------------------------------------------------------------------------
# Normalization helpers
# ---------------------------------------------------------------------------


def to_number(raw: object, label: str) -> int | float:
    """Coerce *raw* to an int when integral text/int, otherwise a float."""
    if isinstance(raw, bool) or raw is None:
        raise ValidationError(f"Invalid {label}: {raw!r}")
    if isinstance(raw, (int, float)):
        return raw
    text = str(raw).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid {label}: {raw!r}") from exc


def normalize_id(raw: object) -> int | None:
    """Return ``None`` for an unset id, otherwise a positive integer."""
    if raw is None:
        return None
    return positive_int(raw, "id")


def positive_int(raw: object, label: str) -> int:
    value = to_number(raw, label)
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"Invalid {label}: {raw!r} (use an integer > 0)")
        value = int(value)
    if value <= 0:
        raise ValidationError(f"Invalid {label}: {raw!r} (use an integer > 0)")
    return value


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(raw: datetime | str | None) -> datetime:
    """Accept a datetime or ISO-8601 text; naive values are taken as UTC."""
    if raw is None:
        return utc_now()
    if isinstance(raw, datetime):
        value = raw
    else:
        try:
            value = datetime.fromisoformat(str(raw).strip())
        except ValueError as exc:
            raise ValidationError(f"Invalid timestamp: {raw!r}") from exc
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value
