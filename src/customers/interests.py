"""Interest-category JSON: strict validation on write, lenient parsing on read.

Stored shape (a list, one entry per category the customer looked at)::

    [
      {
        "category_type": "Diamond" | "Gold" | "Polki",
        "products": [
          {"product_name": "...", "price_range": "1L-2L",
           "revenue_opportunity": 120000, ...variant flags...}
        ],
        "customer_preferences": {
          "design_selected": false, "wants_more_discount": true,
          "checking_other_jewellers": false, "felt_less_variety": false,
          "others": ""
        }
      }
    ]
"""
import logging
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError

from analytics.price_ranges import PRICE_RANGE_BUCKETS
from analytics.records import (
    CategoryType,
    DiamondProduct,
    GoldProduct,
    InterestCategory,
    PolkiProduct,
    PreferenceFlags,
    Product,
)

logger = logging.getLogger("jewelcrm")

DIAMOND_FLAGS = ("color_stone", "fancy", "pressure_setting", "solitaire", "traditional")
CATEGORY_TYPES = tuple(c.value for c in CategoryType)


def _as_number(value):
    if isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


# ---------------------------------------------------------------------------
# Write side
# ---------------------------------------------------------------------------


def validate_interest_categories(value):
    """Reject anything that does not match the stored schema.

    Every problem is reported, each message prefixed with its JSON path.
    """
    if value is None:
        return
    if not isinstance(value, list):
        raise ValidationError("Interest categories must be a list.", code="invalid")

    errors = []
    for i, category in enumerate(value):
        path = f"[{i}]"
        if not isinstance(category, dict):
            errors.append(f"{path}: must be an object.")
            continue

        if category.get("category_type") not in CATEGORY_TYPES:
            errors.append(
                f"{path}.category_type: must be one of {', '.join(CATEGORY_TYPES)}."
            )

        products = category.get("products", [])
        if not isinstance(products, list):
            errors.append(f"{path}.products: must be a list.")
            products = []
        for j, product in enumerate(products):
            product_path = f"{path}.products[{j}]"
            if not isinstance(product, dict):
                errors.append(f"{product_path}: must be an object.")
                continue
            name = product.get("product_name")
            if not isinstance(name, str) or not name.strip():
                errors.append(f"{product_path}.product_name: is required.")
            if product.get("price_range") not in PRICE_RANGE_BUCKETS:
                errors.append(f"{product_path}.price_range: unknown price range.")
            opportunity = product.get("revenue_opportunity")
            if opportunity not in (None, ""):
                number = _as_number(opportunity)
                if number is None or number < 0:
                    errors.append(
                        f"{product_path}.revenue_opportunity: must be a non-negative number."
                    )

        preferences = category.get("customer_preferences")
        if preferences is not None and not isinstance(preferences, dict):
            errors.append(f"{path}.customer_preferences: must be an object.")

    if errors:
        raise ValidationError(errors, code="invalid")


# ---------------------------------------------------------------------------
# Read side
# ---------------------------------------------------------------------------


def _string_list(value):
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value if v not in (None, ""))
    if isinstance(value, str) and value:
        return (value,)
    return ()


def _parse_product(category_type, raw):
    price_range = raw.get("price_range")
    common = {
        "product_name": str(raw.get("product_name") or ""),
        "price_range": price_range if isinstance(price_range, str) else None,
        "revenue_opportunity": _as_number(raw.get("revenue_opportunity")),
    }
    if category_type is CategoryType.DIAMOND:
        return DiamondProduct(
            **common,
            **{flag: bool(raw.get(f"diamond_{flag}", raw.get(flag))) for flag in DIAMOND_FLAGS},
        )
    if category_type is CategoryType.GOLD:
        return GoldProduct(
            **common,
            internal_categories=_string_list(
                raw.get("gold_internal_categories", raw.get("internal_categories"))
            ),
        )
    if category_type is CategoryType.POLKI:
        return PolkiProduct(**common, polki_categories=_string_list(raw.get("polki_categories")))
    return Product(**common)


def _parse_preferences(raw):
    if not isinstance(raw, dict):
        return PreferenceFlags()
    others = raw.get("others")
    if isinstance(others, bool):
        others = "Yes" if others else ""
    return PreferenceFlags(
        design_selected=bool(raw.get("design_selected")),
        wants_more_discount=bool(raw.get("wants_more_discount")),
        checking_other_jewellers=bool(raw.get("checking_other_jewellers")),
        felt_less_variety=bool(raw.get("felt_less_variety")),
        others=str(others or "").strip(),
    )


def parse_interest_categories(raw, customer_id=None):
    """Turn stored JSON into ``InterestCategory`` records without raising."""
    if raw in (None, ""):
        return ()
    if isinstance(raw, dict):
        raw = [raw]
    if not isinstance(raw, list):
        logger.warning(
            "Ignoring interest categories of type %s for customer %s",
            type(raw).__name__,
            customer_id,
        )
        return ()

    categories = []
    for entry in raw:
        if not isinstance(entry, dict):
            logger.warning("Skipping malformed interest entry for customer %s: %r", customer_id, entry)
            continue
        try:
            category_type = CategoryType(entry.get("category_type"))
        except ValueError:
            category_type = None
        raw_products = entry.get("products")
        if not isinstance(raw_products, list):
            raw_products = []
        products = tuple(_parse_product(category_type, p) for p in raw_products if isinstance(p, dict))
        categories.append(
            InterestCategory(
                category_type=category_type,
                products=products,
                preferences=_parse_preferences(entry.get("customer_preferences")),
            )
        )
    return tuple(categories)
