from fastapi import Request

from shopchat.models.sessions import SessionStore
from shopchat.services.recommender import Recommender
from shopchat.services.shopify import ShopifyClient


def get_session_store(request: Request) -> SessionStore:
    """Provide the process-wide session store to endpoint functions."""
    return request.app.state.session_store


def get_shopify_client(request: Request) -> ShopifyClient:
    return request.app.state.shopify


def get_recommender(request: Request) -> Recommender:
    return request.app.state.recommender
