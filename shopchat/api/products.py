from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from shopchat.dependencies import get_shopify_client
from shopchat.logger import get_logger
from shopchat.models.schemas import ErrorResponse
from shopchat.services.shopify import ShopifyClient

logger = get_logger("api.products")

router = APIRouter(tags=["products"])


@router.get("/products", responses={500: {"model": ErrorResponse}})
async def list_products(shopify: ShopifyClient = Depends(get_shopify_client)):
    """Raw Shopify product records, passed through unchanged."""
    try:
        return await shopify.fetch_products()
    except Exception:
        logger.exception("Failed to fetch products")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch products"})
