import asyncio
import json

from conftest import FakeGemini, FakeShopify, raw_product
from shopchat.models.schemas import Message, ProductSummary
from shopchat.services.recommender import Recommender, build_prompt, resolve_products


def make_recommender(store, products, reply):
    return Recommender(store, FakeShopify(products), FakeGemini(reply), currency="PKR")


def prompt_products(prompt: str) -> list[dict]:
    block = prompt.split("Available products:\n", 1)[1].split("\n\nInstructions:", 1)[0]
    return json.loads(block)


def summary(pid):
    return ProductSummary(id=pid, title=f"P{pid}", currency="PKR", url=f"u{pid}")


def test_filters_candidates_before_calling_model(store, catalog):
    recommender = make_recommender(store, catalog, '{"productIds": [1], "message": "Great for trails"}')

    response = asyncio.run(recommender.chat("shoes under 5000", "s1"))

    sent = prompt_products(recommender.gemini.prompts[0])
    assert [p["id"] for p in sent] == [1]
    assert sent[0]["description"] == "Grippy sole"
    assert response.type == "product_recommendation"
    assert [p.id for p in response.products] == [1]
    assert response.message == "Great for trails"


def test_empty_filter_result_sends_whole_catalog(store, catalog):
    recommender = make_recommender(store, catalog, '{"productIds": [], "message": "Which one?"}')

    response = asyncio.run(recommender.chat("a watch under 10", "s1"))

    sent = prompt_products(recommender.gemini.prompts[0])
    assert [p["id"] for p in sent] == [1, 2]
    assert response.type == "text"
    assert response.products == []


def test_resolves_only_candidates_in_model_order(store, catalog):
    # product 2 is filtered out by the budget, 99 does not exist
    recommender = make_recommender(store, catalog, '{"productIds": [99, 2, 1], "message": "ok"}')

    response = asyncio.run(recommender.chat("shoe under 5000", "s1"))

    assert [p.id for p in response.products] == [1]


def test_malformed_reply_becomes_text(store, catalog):
    recommender = make_recommender(store, catalog, "I think you will love the trail shoe!")

    response = asyncio.run(recommender.chat("hello", "s1"))

    assert response.type == "text"
    assert response.products == []
    assert response.message == "I think you will love the trail shoe!"


def test_history_records_both_turns(store, catalog):
    recommender = make_recommender(store, catalog, '{"productIds": [1, 2], "message": "Both fit"}')

    asyncio.run(recommender.chat("show me everything", "s1"))

    assert store.get("s1").messages == [
        Message(role="user", text="show me everything"),
        Message(role="assistant", text="Both fit"),
    ]


def test_catalog_failure_propagates_after_user_turn_is_saved(store, catalog):
    recommender = Recommender(store, FakeShopify(catalog, error=RuntimeError("boom")), FakeGemini(), "PKR")

    try:
        asyncio.run(recommender.chat("hi", "s1"))
    except RuntimeError:
        pass
    else:
        raise AssertionError("expected the catalog error to propagate")

    assert [m.role for m in store.get("s1").messages] == ["user"]
    assert recommender.gemini.prompts == []


def test_build_prompt_limits_history_and_candidates():
    history = [Message(role="user" if i % 2 == 0 else "assistant", text=f"m{i}") for i in range(10)]
    candidates = [
        ProductSummary(id=i, title=f"P{i}", description="x" * 400, currency="PKR", url="u")
        for i in range(20)
    ]

    prompt = build_prompt(history, "m9", candidates)

    assert "user: m4\nassistant: m5\nuser: m6\nassistant: m7\nuser: m8\nassistant: m9" in prompt
    assert "m3" not in prompt
    assert 'Current user query: "m9"' in prompt
    sent = prompt_products(prompt)
    assert len(sent) == 15
    assert len(sent[0]["description"]) == 150
    assert set(sent[0]) == {"id", "title", "description", "price", "tags"}


def test_resolve_products_caps_at_three():
    candidates = [summary(i) for i in range(1, 6)]
    resolved = resolve_products([5, 4, 3, 2, 1], candidates)
    assert [p.id for p in resolved] == [5, 4, 3]


def test_resolve_products_drops_unknown_ids():
    candidates = [summary(1), summary(2)]
    assert resolve_products([7, 2, 8], candidates) == [candidates[1]]


def test_many_products_in_catalog_are_normalized(store):
    products = [raw_product(i, f"Shirt {i}", "100") for i in range(30)]
    recommender = make_recommender(store, products, '{"productIds": [], "message": "?"}')

    catalog = asyncio.run(recommender.fetch_catalog())

    assert len(catalog) == 30
    assert catalog[0].url == "https://test-shop.myshopify.com/products/shirt-0"
