"""FastAPI routes for chat: stream a reply, read and delete a stored chat."""
import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, StreamingResponse
from langchain_core.messages import BaseMessage

from app.core.agent import get_agent, stream_agent
from app.core.auth import Session, get_session
from app.core.background import run_detached
from app.core.data_stream import DATA_STREAM_HEADERS, DATA_STREAM_MEDIA_TYPE, encode_events, error_part
from app.core.messages import to_core_messages
from app.core.supabase_client import delete_chat_by_id, get_chat_by_id, save_chat
from app.models.schemas import ChatRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

GENERIC_ERROR = "An error occurred while processing your request"


def _unauthorized() -> PlainTextResponse:
    return PlainTextResponse("Unauthorized", status_code=401)


def _stream_reply(agent, chat_id: str, core_messages: list[BaseMessage], user_id: str | None):
    """Yield data stream lines; once the run is complete, hand the merged conversation to a background save."""
    response_messages: list[BaseMessage] = []
    try:
        yield from encode_events(stream_agent(core_messages, agent), response_messages)
    except Exception:
        logger.exception("Chat %s: streaming failed", chat_id)
        yield error_part()
        return
    if user_id:
        run_detached(
            save_chat,
            chat_id,
            core_messages + response_messages,
            user_id,
            description=f"save chat {chat_id}",
        )


@router.post("/chat")
def create_chat(req: ChatRequest, session: Session | None = Depends(get_session)):
    """Stream the assistant reply (AI SDK data stream). The chat is saved after the stream ends."""
    if session is None:
        return _unauthorized()

    core_messages = to_core_messages(req.messages)
    agent = get_agent()
    user_id = session.user.id if session.user else None

    return StreamingResponse(
        _stream_reply(agent, req.id, core_messages, user_id),
        media_type=DATA_STREAM_MEDIA_TYPE,
        headers=DATA_STREAM_HEADERS,
    )


@router.get("/chat")
def read_chat(chat_id: str | None = Query(None, alias="id"), session: Session | None = Depends(get_session)):
    """Return a stored chat. Only its owner may read it."""
    if not chat_id:
        return PlainTextResponse("Not Found", status_code=404)
    if session is None or session.user is None:
        return _unauthorized()
    try:
        chat = get_chat_by_id(chat_id)
    except Exception as e:
        logger.error("Chat %s: lookup failed: %s", chat_id, e)
        return PlainTextResponse(GENERIC_ERROR, status_code=500)
    if chat.user_id != session.user.id:
        return _unauthorized()
    return chat.model_dump()


@router.delete("/chat")
def delete_chat(chat_id: str | None = Query(None, alias="id"), session: Session | None = Depends(get_session)):
    """Delete a chat owned by the caller. A missing chat is reported as 500, like any other lookup failure."""
    if not chat_id:
        return PlainTextResponse("Not Found", status_code=404)
    if session is None or session.user is None:
        return _unauthorized()
    try:
        chat = get_chat_by_id(chat_id)
        if chat.user_id != session.user.id:
            return _unauthorized()
        delete_chat_by_id(chat_id)
        return PlainTextResponse("Chat deleted", status_code=200)
    except Exception as e:
        logger.error("Chat %s: delete failed: %s", chat_id, e)
        return PlainTextResponse(GENERIC_ERROR, status_code=500)


@router.get("/health")
def health() -> dict:
    """Health check."""
    return {"status": "ok"}
