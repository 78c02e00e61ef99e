import json

from shopchat.logger import get_logger
from shopchat.models.schemas import ChatResponse, Message, ProductSummary
from shopchat.models.sessions import SessionStore
from shopchat.services.filters import parse_filters, select_candidates
from shopchat.services.gemini import GeminiClient, parse_reply
from shopchat.services.shopify import ShopifyClient, normalize_product

logger = get_logger("recommender")

HISTORY_WINDOW = 6
MAX_CANDIDATES = 15
DESCRIPTION_LIMIT = 150
MAX_RECOMMENDATIONS = 3

PROMPT_TEMPLATE = """
You are a helpful shopping assistant. Based on the conversation and user's query, recommend the most relevant products.

Conversation history:
{history}

Current user query: "{query}"

Available products:
{products}

Instructions:
1. Recommend up to 3 most relevant products
2. Return ONLY a JSON object of product IDs in this exact format:
   {{"productIds": [123456, 789012, 345678], "message": "Your friendly recommendation message here"}}
3. The "message" should be a brief, friendly explanation of why you're recommending these products
4. If the query is unclear or you need more info, return: {{"productIds": [], "message": "Your clarifying question here"}}

Return only valid JSON, no other text.
"""


def build_prompt(history: list[Message], query: str, candidates: list[ProductSummary]) -> str:
    """Assemble the model prompt from recent history and a trimmed candidate list."""
    history_text = "\n".join(f"{m.role}: {m.text}" for m in history[-HISTORY_WINDOW:])
    products_for_ai = [
        {
            "id": p.id,
            "title": p.title,
            "description": p.description[:DESCRIPTION_LIMIT],
            "price": p.price,
            "tags": p.tags,
        }
        for p in candidates[:MAX_CANDIDATES]
    ]
    return PROMPT_TEMPLATE.format(
        history=history_text,
        query=query,
        products=json.dumps(products_for_ai, indent=2, ensure_ascii=False),
    )


def resolve_products(product_ids: list[int], candidates: list[ProductSummary]) -> list[ProductSummary]:
    """Map ids back to candidates in the model's order, dropping unknown ids."""
    by_id: dict[int, ProductSummary] = {}
    for product in candidates:
        by_id.setdefault(product.id, product)
    resolved = [by_id[pid] for pid in product_ids if pid in by_id]
    return resolved[:MAX_RECOMMENDATIONS]


class Recommender:
    def __init__(self, sessions: SessionStore, shopify: ShopifyClient, gemini: GeminiClient,
                 currency: str):
        self.sessions = sessions
        self.shopify = shopify
        self.gemini = gemini
        self.currency = currency

    async def fetch_catalog(self) -> list[ProductSummary]:
        raw_products = await self.shopify.fetch_products()
        return [
            normalize_product(raw, self.shopify.store_domain, self.currency)
            for raw in raw_products
        ]

    async def chat(self, message: str, session_id: str) -> ChatResponse:
        """Run one chat turn: history, catalog, filters, model, history again."""
        session = self.sessions.append(session_id, Message(role="user", text=message))

        catalog = await self.fetch_catalog()

        filters = parse_filters(message)
        candidates = select_candidates(catalog, filters)
        logger.info(
            f"Session {session_id}: filters={filters.model_dump(exclude_none=True)} "
            f"candidates={len(candidates)}/{len(catalog)}"
        )

        prompt = build_prompt(session.messages, message, candidates)
        reply = parse_reply(await self.gemini.generate(prompt))
        products = resolve_products(reply.product_ids, candidates)

        self.sessions.append(session_id, Message(role="assistant", text=reply.message))

        return ChatResponse(
            message=reply.message,
            products=products,
            type="product_recommendation" if products else "text",
        )
