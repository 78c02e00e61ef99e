from fastapi import APIRouter
from shopchat.api.chat import router as chat_router
from shopchat.api.products import router as products_router
from shopchat.api.sessions import router as sessions_router

router = APIRouter()
router.include_router(products_router)
router.include_router(chat_router)
router.include_router(sessions_router)
