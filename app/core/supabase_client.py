"""Supabase client and chat persistence. Requires SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY (use the service role key, not anon)."""
import logging

from langchain_core.messages import BaseMessage, messages_to_dict

from app.core.config import get_settings
from app.models.schemas import ChatRecord

logger = logging.getLogger(__name__)

_supabase = None


def get_supabase_client():
    """Return the Supabase client or None if disabled."""
    global _supabase
    if _supabase is not None:
        return _supabase
    settings = get_settings()
    if not settings.supabase_enabled:
        logger.info(
            "Supabase disabled: SUPABASE_URL and/or SUPABASE_SERVICE_ROLE_KEY not set or empty. "
            "Chat persistence and auth will not be available."
        )
        return None
    try:
        from supabase import create_client
        _supabase = create_client(settings.supabase_url, settings.supabase_key)
        logger.info("Supabase client connected (chat persistence enabled).")
        return _supabase
    except Exception as e:
        logger.warning("Supabase client failed to connect: %s. Persistence disabled.", e)
        return None


def _require_client():
    client = get_supabase_client()
    if client is None:
        raise RuntimeError("Supabase is not configured")
    return client


def save_chat(chat_id: str, messages: list[BaseMessage], user_id: str) -> None:
    """Upsert the full message list under chat_id. Raises on failure; callers decide whether to log or surface it."""
    client = _require_client()
    client.table(get_settings().chats_table).upsert(
        {
            "id": chat_id,
            "user_id": user_id,
            "messages": messages_to_dict(messages),
        },
        on_conflict="id",
    ).execute()
    logger.debug("Saved chat %s (%d messages)", chat_id, len(messages))


def get_chat_by_id(chat_id: str) -> ChatRecord:
    """Load one chat. Raises if it does not exist (PostgREST single-row error) or on any client error."""
    client = _require_client()
    r = (
        client.table(get_settings().chats_table)
        .select("id, user_id, messages, created_at")
        .eq("id", chat_id)
        .single()
        .execute()
    )
    return ChatRecord(**r.data)


def delete_chat_by_id(chat_id: str) -> None:
    client = _require_client()
    client.table(get_settings().chats_table).delete().eq("id", chat_id).execute()
    logger.info("Deleted chat %s", chat_id)
