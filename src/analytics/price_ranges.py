"""Price-range bucket parsing.

Sales staff record a customer's budget as a bucket label such as ``"1L-2L"``
or ``">1CR"``. These helpers turn a label into one representative rupee
amount so that interest can be summed into a pipeline value.

Units follow Indian numbering: K = thousand, L = lakh (1,00,000),
CR = crore (1,00,00,000).
"""
from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Mapping, Optional

logger = logging.getLogger("jewelcrm")

ZERO = Decimal("0")
TWO = Decimal("2")

UNIT_MULTIPLIERS: Mapping[str, Decimal] = MappingProxyType(
    {
        "K": Decimal("1000"),
        "L": Decimal("100000"),
        "CR": Decimal("10000000"),
    }
)

# Buckets offered by the customer capture form, in display order.
PRICE_RANGE_BUCKETS: tuple[str, ...] = (
    "0-25K",
    "25K-50K",
    "50K-75K",
    "75K-1L",
    "1L-2L",
    "2L-3L",
    "3L-5L",
    "5L-10L",
    "10L-20L",
    "20L-50L",
    "50L-1CR",
    ">1CR",
)

_AMOUNT = r"(\d+(?:\.\d+)?)([A-Z]*)"
_BOUNDED_RE = re.compile(rf"^{_AMOUNT}-{_AMOUNT}$")
_UNBOUNDED_RE = re.compile(rf"^>{_AMOUNT}$")
_SINGLE_RE = re.compile(rf"^{_AMOUNT}$")


def _normalize(label) -> str:
    if not isinstance(label, str):
        return ""
    cleaned = re.sub(r"\s+", "", label).upper()
    return cleaned.replace(",", "").replace("₹", "")


class PriceRangeParser:
    """Parse bucket labels against an immutable unit table."""

    def __init__(self, units: Mapping[str, Decimal] = UNIT_MULTIPLIERS) -> None:
        self.units = MappingProxyType({k.upper(): Decimal(v) for k, v in units.items()})

    def _amount(self, number: str, unit: str) -> Optional[Decimal]:
        try:
            value = Decimal(number)
        except InvalidOperation:
            return None
        if not unit:
            return value
        multiplier = self.units.get(unit)
        if multiplier is None:
            return None
        return value * multiplier

    def bounds(self, label) -> Optional[tuple[Decimal, Optional[Decimal]]]:
        """Return ``(low, high)`` for a label, ``high`` being None when unbounded.

        Returns None when the label cannot be understood.
        """
        text = _normalize(label)
        if not text:
            return None

        match = _BOUNDED_RE.match(text)
        if match:
            low_num, low_unit, high_num, high_unit = match.groups()
            # "0-25K": a bare endpoint takes the other endpoint's unit
            low_unit = low_unit or high_unit
            high_unit = high_unit or low_unit
            low = self._amount(low_num, low_unit)
            high = self._amount(high_num, high_unit)
            if low is None or high is None or high < low:
                return None
            return low, high

        match = _UNBOUNDED_RE.match(text)
        if match:
            threshold = self._amount(*match.groups())
            if threshold is None:
                return None
            return threshold, None

        match = _SINGLE_RE.match(text)
        if match:
            value = self._amount(*match.groups())
            if value is None:
                return None
            return value, value

        return None

    def estimate(self, label) -> Decimal:
        """Representative amount for *label*, ``Decimal("0")`` when unparseable."""
        parsed = self.bounds(label)
        if parsed is None:
            if label not in (None, ""):
                logger.debug("Unparseable price range label: %r", label)
            return ZERO
        low, high = parsed
        if high is None:
            return low
        return (low + high) / TWO

    __call__ = estimate


default_parser = PriceRangeParser()


def parse_price_range(label, parser: Optional[PriceRangeParser] = None) -> Decimal:
    return (parser or default_parser).estimate(label)


def price_range_estimates(parser: Optional[PriceRangeParser] = None) -> list[tuple[str, Decimal]]:
    """The bucket vocabulary paired with each bucket's estimate."""
    parser = parser or default_parser
    return [(label, parser.estimate(label)) for label in PRICE_RANGE_BUCKETS]
