from fastapi import APIRouter, Depends, HTTPException

from shopchat.dependencies import get_session_store
from shopchat.models.schemas import SessionDetail
from shopchat.models.sessions import SessionStore

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("/{session_id}", response_model=SessionDetail)
async def get_session_detail(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
):
    session = store.find(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")

    return SessionDetail(session_id=session_id, messages=session.messages)
