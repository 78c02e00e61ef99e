"""Shared fixtures: in-process stand-ins for Shopify and Gemini."""

import pytest

from shopchat.models.sessions import SessionStore

STORE = "test-shop.myshopify.com"


class FakeShopify:
    def __init__(self, products: list[dict], error: Exception | None = None):
        self.store_domain = STORE
        self.products = products
        self.error = error
        self.calls = 0

    async def fetch_products(self) -> list[dict]:
        self.calls += 1
        if self.error:
            raise self.error
        return self.products


class FakeGemini:
    def __init__(self, reply: str = '{"productIds": [], "message": "Anything else?"}'):
        self.reply = reply
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


def raw_product(pid: int, title: str, price: str, body_html: str = "", tags: str = "") -> dict:
    return {
        "id": pid,
        "title": title,
        "body_html": body_html,
        "tags": tags,
        "handle": title.lower().replace(" ", "-"),
        "variants": [{"price": price, "compare_at_price": None}],
        "images": [{"src": f"https://cdn.example.com/{pid}.jpg"}],
    }


@pytest.fixture
def catalog() -> list[dict]:
    return [
        raw_product(1, "Trail Running Shoe", "4000.00", "<p>Grippy <b>sole</b></p>", "footwear, running"),
        raw_product(2, "Linen Shirt", "3000.00", "<p>Breathable</p>", "tops"),
    ]


@pytest.fixture
def store(tmp_path) -> SessionStore:
    session_store = SessionStore(tmp_path / "sessions.json", max_messages=10)
    session_store.load()
    return session_store
