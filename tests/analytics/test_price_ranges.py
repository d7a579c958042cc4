from decimal import Decimal

import pytest

from analytics.price_ranges import (
    PRICE_RANGE_BUCKETS,
    UNIT_MULTIPLIERS,
    PriceRangeParser,
    parse_price_range,
    price_range_estimates,
)

EXPECTED = {
    "0-25K": Decimal("12500"),
    "25K-50K": Decimal("37500"),
    "50K-75K": Decimal("62500"),
    "75K-1L": Decimal("87500"),
    "1L-2L": Decimal("150000"),
    "2L-3L": Decimal("250000"),
    "3L-5L": Decimal("400000"),
    "5L-10L": Decimal("750000"),
    "10L-20L": Decimal("1500000"),
    "20L-50L": Decimal("3500000"),
    "50L-1CR": Decimal("7500000"),
    ">1CR": Decimal("10000000"),
}


@pytest.mark.parametrize("label,expected", sorted(EXPECTED.items()))
def test_vocabulary_estimates(label, expected):
    assert parse_price_range(label) == expected


def test_vocabulary_is_fully_covered():
    assert set(PRICE_RANGE_BUCKETS) == set(EXPECTED)
    assert price_range_estimates() == [(label, EXPECTED[label]) for label in PRICE_RANGE_BUCKETS]


@pytest.mark.parametrize("label", [None, "", "garbage", "   ", "2L-1L", "5X-10X", "1L-", ">", 150000, ["1L-2L"]])
def test_unparseable_labels_fall_back_to_zero(label):
    assert parse_price_range(label) == Decimal("0")


def test_matching_ignores_case_and_whitespace():
    assert parse_price_range(" 1l - 2l ") == Decimal("150000")
    assert parse_price_range("> 1 cr") == Decimal("10000000")


def test_single_value_and_plain_rupee_ranges():
    assert parse_price_range("1.5L") == Decimal("150000")
    assert parse_price_range("500-1000") == Decimal("750")


def test_bounds():
    parser = PriceRangeParser()
    assert parser.bounds("0-25K") == (Decimal("0"), Decimal("25000"))
    assert parser.bounds("75K-1L") == (Decimal("75000"), Decimal("100000"))
    assert parser.bounds(">1CR") == (Decimal("10000000"), None)
    assert parser.bounds("nonsense") is None


def test_unit_table_is_read_only():
    with pytest.raises(TypeError):
        UNIT_MULTIPLIERS["M"] = Decimal("1000000")


def test_parser_accepts_an_extended_unit_table():
    parser = PriceRangeParser(units={**UNIT_MULTIPLIERS, "M": Decimal("1000000")})
    assert parser.estimate("1M-2M") == Decimal("1500000")
    assert parse_price_range("1M-2M") == Decimal("0")
    assert parse_price_range("1M-2M", parser=parser) == Decimal("1500000")
