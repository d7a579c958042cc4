from decimal import Decimal

from analytics.breakdowns import (
    GroupCount,
    category_types_of,
    conversion_by,
    lead_source_breakdown,
    lead_source_of,
    lowest_category_conversion,
    rank_rows,
    rank_showrooms,
    salesperson_performance,
    sum_by,
    top_by,
    top_walkout_reasons,
)
from analytics.records import (
    CategoryType,
    CustomerRecord,
    InterestCategory,
    LeadStatus,
    PreferenceFlags,
    TransactionRecord,
)

WON = LeadStatus.CLOSED_WON.value


def _categories(*types, **flags):
    return tuple(
        InterestCategory(category_type=t, preferences=PreferenceFlags(**flags)) for t in types
    )


def test_lead_source_breakdown_sorts_descending_and_keeps_ties_in_first_seen_order():
    customers = [
        CustomerRecord(id=1, lead_source="Walk-in"),
        CustomerRecord(id=2, lead_source="Instagram"),
        CustomerRecord(id=3, lead_source=None),
        CustomerRecord(id=4, lead_source="Walk-in"),
        CustomerRecord(id=5, lead_source="  "),
    ]
    assert lead_source_breakdown(customers) == [
        GroupCount("Walk-in", 2),
        GroupCount("Unknown", 2),
        GroupCount("Instagram", 1),
    ]


def test_lead_source_of_labels_missing_sources_unknown():
    assert lead_source_of(CustomerRecord(id=1)) == ["Unknown"]


def test_category_conversion_counts_each_customer_once_per_category():
    customers = [
        CustomerRecord(id=1, lead_status=WON, interest_categories=_categories(CategoryType.DIAMOND, CategoryType.GOLD)),
        CustomerRecord(id=2, interest_categories=_categories(CategoryType.DIAMOND)),
        CustomerRecord(id=3, interest_categories=_categories(CategoryType.POLKI, None)),
        CustomerRecord(id=4, lead_status=WON, interest_categories=_categories(CategoryType.GOLD, CategoryType.GOLD)),
    ]

    rows = conversion_by(customers, category_types_of)
    assert [(r.label, r.seen, r.converted) for r in rows] == [
        ("Diamond", 2, 1),
        ("Gold", 2, 2),
        ("Polki", 1, 0),
    ]

    lowest = lowest_category_conversion(customers)
    assert [(r.label, r.rate) for r in lowest] == [
        ("Polki", Decimal("0.0")),
        ("Diamond", Decimal("50.0")),
        ("Gold", Decimal("100.0")),
    ]
    assert len(lowest_category_conversion(customers, limit=1)) == 1


def test_lowest_category_conversion_ranks_on_unrounded_rate():
    gold = [
        CustomerRecord(
            id=i,
            lead_status=WON if i < 1667 else LeadStatus.NEW_LEAD.value,
            interest_categories=_categories(CategoryType.GOLD),
        )
        for i in range(5000)
    ]
    diamond = [
        CustomerRecord(
            id=5000 + i,
            lead_status=WON if i == 0 else LeadStatus.NEW_LEAD.value,
            interest_categories=_categories(CategoryType.DIAMOND),
        )
        for i in range(3)
    ]

    lowest = lowest_category_conversion(gold + diamond)

    assert [(r.label, r.rate) for r in lowest] == [
        ("Diamond", Decimal("33.3")),
        ("Gold", Decimal("33.3")),
    ]


def test_walkout_reasons_skip_closed_won_and_cap_at_three_in_seed_order():
    customers = [
        CustomerRecord(id=1, interest_categories=_categories(CategoryType.DIAMOND, wants_more_discount=True)),
        CustomerRecord(
            id=2,
            interest_categories=_categories(CategoryType.GOLD, felt_less_variety=True, checking_other_jewellers=True),
        ),
        CustomerRecord(
            id=3,
            lead_status=WON,
            interest_categories=_categories(CategoryType.GOLD, wants_more_discount=True),
        ),
        CustomerRecord(id=4, interest_categories=_categories(CategoryType.POLKI, others="Price too high")),
    ]
    assert top_walkout_reasons(customers) == [
        GroupCount("Wants More Discount", 1),
        GroupCount("Checking Other Jewellers", 1),
        GroupCount("Felt Less Variety", 1),
    ]


def test_walkout_reasons_count_per_category_and_sort_descending():
    customers = [
        CustomerRecord(
            id=1,
            interest_categories=_categories(CategoryType.DIAMOND, CategoryType.GOLD, felt_less_variety=True),
        ),
        CustomerRecord(id=2, interest_categories=_categories(CategoryType.POLKI, others="Budget")),
    ]
    rows = top_walkout_reasons(customers, limit=4)
    assert rows[0] == GroupCount("Felt Less Variety", 2)
    assert rows[1] == GroupCount("Other Reasons", 1)
    assert [r.count for r in rows[2:]] == [0, 0]


def test_salesperson_performance_lists_weakest_first_and_seeds_zero():
    salespeople = {"a": "Anil", "b": "Bina", "c": "Chetan"}
    customers = [
        CustomerRecord(id=1, lead_status=WON, assigned_salesperson_id="a"),
        CustomerRecord(id=2, lead_status=WON, assigned_salesperson_id="a"),
        CustomerRecord(id=3, lead_status=WON, assigned_salesperson_id="c"),
        CustomerRecord(id=4, assigned_salesperson_id="b"),
        CustomerRecord(id=5, lead_status=WON, assigned_salesperson_id="zz"),
    ]
    rows = salesperson_performance(customers, salespeople)
    assert [(r.id, r.name, r.sales_count) for r in rows] == [
        ("b", "Bina", 0),
        ("c", "Chetan", 1),
        ("a", "Anil", 2),
    ]


def test_rank_showrooms_is_descending_and_stable():
    rows = [
        {"name": "A", "ytd_sales": Decimal("100")},
        {"name": "B", "ytd_sales": Decimal("300")},
        {"name": "C", "ytd_sales": Decimal("100")},
        {"name": "D", "ytd_sales": None},
    ]
    assert [r["name"] for r in rank_showrooms(rows)] == ["B", "A", "C", "D"]
    assert [r["name"] for r in rank_showrooms(rows, limit=2)] == ["B", "A"]


def test_rank_rows_sorts_by_any_key_and_top_by_picks_first():
    rows = [
        {"category": "Gold", "revenue": Decimal("5000")},
        {"category": "Diamond", "revenue": Decimal("9000")},
        {"category": "Polki", "revenue": Decimal("9000")},
    ]
    assert [r["category"] for r in rank_rows(rows, "revenue")] == ["Diamond", "Polki", "Gold"]
    assert [r["category"] for r in rank_rows(rows, "revenue", limit=1)] == ["Diamond"]
    assert top_by(rows, "revenue")["category"] == "Diamond"
    assert top_by([], "revenue") is None


def test_sum_by_groups_transaction_amounts():
    transactions = [
        TransactionRecord(Decimal("100"), None, showroom_id="x"),
        TransactionRecord(Decimal("50"), None, showroom_id="y"),
        TransactionRecord(Decimal("25"), None, showroom_id="x"),
        TransactionRecord(Decimal("10"), None, showroom_id=None),
    ]
    assert sum_by(transactions, lambda t: t.showroom_id) == {"x": Decimal("125"), "y": Decimal("50")}
