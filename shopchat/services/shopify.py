import math
import re

import httpx

from shopchat.logger import get_logger
from shopchat.models.schemas import ProductSummary

logger = get_logger("shopify")

_TAG = re.compile(r"<[^>]+>")


class ShopifyClient:
    def __init__(self, store_domain: str, access_token: str, api_version: str = "2024-10",
                 transport: httpx.AsyncBaseTransport | None = None):
        self.store_domain = store_domain
        self.admin_url = f"https://{store_domain}/admin/api/{api_version}"
        # No timeout: a slow store blocks the request that is waiting on it.
        self._client = httpx.AsyncClient(timeout=None, transport=transport)

        self.admin_headers = {
            "X-Shopify-Access-Token": access_token,
            "Content-Type": "application/json",
        }

    # -- Product methods --

    async def fetch_products(self) -> list[dict]:
        """Fetch the raw product list from the Admin REST API."""
        response = await self._client.get(
            f"{self.admin_url}/products.json",
            headers=self.admin_headers,
        )
        response.raise_for_status()
        products = response.json().get("products", [])
        logger.info(f"Fetched {len(products)} products from {self.store_domain}")
        return products

    async def close(self):
        """Close the underlying HTTP client."""
        await self._client.aclose()


# -- Helpers to turn raw REST records into flat summaries --

def product_url(store_domain: str, handle: str) -> str:
    return f"https://{store_domain}/products/{handle}"


def strip_html(html) -> str:
    """Drop tags by pattern. Entities are left as they are."""
    if not isinstance(html, str):
        return ""
    return _TAG.sub("", html)


def _to_price(value) -> float | None:
    try:
        price = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return price if math.isfinite(price) else None


def _to_text(value) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _to_id(value) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _join_tags(tags) -> str:
    if isinstance(tags, list):
        return ", ".join(str(t) for t in tags)
    return _to_text(tags)


def _first(items) -> dict:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}


def _as_dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def normalize_product(raw: dict, store_domain: str, currency: str) -> ProductSummary:
    """Turn a raw product record into a ProductSummary.

    Never raises: missing or oddly typed fields fall back to defaults.
    """
    raw = _as_dict(raw)
    variant = _first(raw.get("variants"))
    image = _first(raw.get("images")).get("src") or _as_dict(raw.get("image")).get("src")
    handle = _to_text(raw.get("handle"))

    return ProductSummary(
        id=_to_id(raw.get("id")),
        title=_to_text(raw.get("title")),
        description=strip_html(raw.get("body_html")),
        tags=_join_tags(raw.get("tags")),
        price=_to_price(variant.get("price")) or 0,
        compare_at_price=_to_price(variant.get("compare_at_price")) or None,
        currency=currency,
        image=_to_text(image),
        url=product_url(store_domain, handle),
        handle=handle,
    )
