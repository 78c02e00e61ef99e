import re

from shopchat.models.schemas import Filters, ProductSummary

# "under 5000", "below 10k", "less than 3000"
_BUDGET = re.compile(r"(under|below|less than)\s*(\d{1,3}k|\d{2,7})")

# First match in this order wins, so "shoes" yields "shoe".
CATEGORIES = [
    "shoe", "shoes", "shirt", "hoodie", "bag", "backpack", "dress",
    "jacket", "watch", "sneaker", "pants", "jeans",
]


def parse_filters(text: str) -> Filters:
    """Derive a price ceiling and a category keyword from free text."""
    filters = Filters()
    lower = text.lower()

    match = _BUDGET.search(lower)
    if match:
        amount = match.group(2)
        if amount.endswith("k"):
            max_price = float(amount[:-1]) * 1000
        else:
            max_price = float(amount)
        if max_price:
            filters.max_price = max_price

    for category in CATEGORIES:
        if category in lower:
            filters.category = category
            break

    return filters


def _haystack(product: ProductSummary) -> str:
    return f"{product.title} {product.description} {product.tags}".lower()


def apply_filters(products: list[ProductSummary], filters: Filters) -> list[ProductSummary]:
    """Keep products at or under the budget and mentioning the category."""
    result = products
    if filters.max_price is not None:
        result = [p for p in result if p.price <= filters.max_price]
    if filters.category:
        result = [p for p in result if filters.category in _haystack(p)]
    return result


def select_candidates(products: list[ProductSummary], filters: Filters) -> list[ProductSummary]:
    """Filtered products, or the whole catalog when nothing survives."""
    return apply_filters(products, filters) or products
