"""Number and currency helpers for display payloads."""
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

RUPEE_SYMBOL = "₹"


def safe_decimal(value, default="0"):
    """Coerce *value* to ``Decimal``; ``None`` or garbage gives *default*."""
    if value is None:
        return Decimal(default)
    if isinstance(value, bool):
        return Decimal(default)
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (TypeError, ValueError, InvalidOperation):
        return Decimal(default)
    return result if result.is_finite() else Decimal(default)


def group_indian_digits(digits: str) -> str:
    """Group an integer digit string the Indian way: ``12345678`` -> ``1,23,45,678``."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_inr(value, symbol=RUPEE_SYMBOL) -> str:
    """Format an amount in lakh/crore grouping, e.g. ``₹1,50,000`` or ``₹2,500.50``.

    Paise are shown only when non-zero.
    """
    amount = safe_decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    integral, _, fraction = f"{abs(amount):.2f}".partition(".")
    text = group_indian_digits(integral)
    if fraction != "00":
        text = f"{text}.{fraction}"
    return f"{sign}{symbol}{text}"
