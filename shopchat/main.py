from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shopchat.api.router import router
from shopchat.config import settings
from shopchat.logger import get_logger
from shopchat.models.sessions import SessionStore
from shopchat.services.gemini import GeminiClient
from shopchat.services.recommender import Recommender
from shopchat.services.shopify import ShopifyClient

logger = get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup: load sessions, build upstream clients
    session_store = SessionStore(settings.SESSIONS_FILE, max_messages=settings.MAX_HISTORY)
    session_store.load()
    shopify = ShopifyClient(
        settings.SHOPIFY_STORE_URL,
        settings.SHOPIFY_ACCESS_TOKEN,
        api_version=settings.SHOPIFY_API_VERSION,
    )
    gemini = GeminiClient(settings.GEMINI_API_KEY, model_name=settings.GEMINI_MODEL)

    app.state.session_store = session_store
    app.state.shopify = shopify
    app.state.recommender = Recommender(session_store, shopify, gemini, settings.STORE_CURRENCY)
    yield
    # shutdown: release the HTTP client
    await shopify.close()


app = FastAPI(
    title="Shop Chat Relay",
    description="Chat-based product recommendations over a Shopify catalog, powered by Gemini.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Server running on port {settings.PORT}")
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
