from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from shopchat.dependencies import get_recommender
from shopchat.logger import get_logger
from shopchat.models.schemas import ChatRequest, ChatResponse, ErrorResponse
from shopchat.services.recommender import Recommender

logger = get_logger("api.chat")

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse, responses={500: {"model": ErrorResponse}})
async def chat(
    request: ChatRequest | None = None,
    recommender: Recommender = Depends(get_recommender),
):
    request = request or ChatRequest()
    try:
        return await recommender.chat(
            message=request.message or "",
            session_id=request.session_id or "anonymous",
        )
    except Exception:
        logger.exception("Chat Error")
        return JSONResponse(status_code=500, content={"error": "Chat failed"})
