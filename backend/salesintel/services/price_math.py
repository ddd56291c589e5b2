from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

from salesintel.core.errors import ValidationError

CENTS = Decimal("0.01")

# Numeric(10, 2)
MAX_PRICE = Decimal("99999999.99")

PriceInput = Union[str, int, float, Decimal]


def normalize_price(value: PriceInput) -> Decimal:
    """
    Parse a price into a canonical 2-decimal Decimal.

    Accepts decimal strings and JSON numbers. Rejects negatives, non-finite
    values, more than two fractional digits and anything that does not fit
    the price column.
    """
    if isinstance(value, bool):
        raise ValidationError("Price must be a decimal value")

    raw = str(value).strip() if not isinstance(value, Decimal) else value
    try:
        price = Decimal(raw)
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid price: {value!r}")

    if not price.is_finite():
        raise ValidationError(f"Invalid price: {value!r}")
    if price < 0:
        raise ValidationError("Price must not be negative")
    if price > MAX_PRICE:
        raise ValidationError("Price is too large")
    if price != price.quantize(CENTS, rounding=ROUND_HALF_UP):
        raise ValidationError("Price must have at most two decimal places")

    return price.quantize(CENTS)


def prices_differ(old_price: PriceInput, new_price: PriceInput) -> bool:
    return normalize_price(old_price) != normalize_price(new_price)


def compute_change_percentage(old_price: PriceInput, new_price: PriceInput) -> Optional[Decimal]:
    """(new - old) / old * 100 at 2dp. None when the old price is zero."""
    old = normalize_price(old_price)
    new = normalize_price(new_price)
    if old == 0:
        return None
    return ((new - old) / old * 100).quantize(CENTS, rounding=ROUND_HALF_UP)


def to_cents(value: PriceInput) -> Decimal:
    """Quantize an already-stored amount to 2dp without validating it."""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)
