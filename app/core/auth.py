"""Session lookup: Supabase access token in the Authorization header -> Session, or None."""
import logging

from fastapi import Header
from pydantic import BaseModel

from app.core.supabase_client import get_supabase_client

logger = logging.getLogger(__name__)


class SessionUser(BaseModel):
    id: str
    email: str | None = None


class Session(BaseModel):
    user: SessionUser | None = None


def bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def auth(access_token: str | None) -> Session | None:
    """Resolve the caller. Any problem with the token means no session."""
    if not access_token:
        return None
    client = get_supabase_client()
    if client is None:
        logger.warning("auth: Supabase disabled, cannot verify access token.")
        return None
    try:
        r = client.auth.get_user(access_token)
    except Exception as e:
        logger.info("auth: token rejected: %s", e)
        return None
    user = getattr(r, "user", None)
    if user is None:
        return None
    return Session(user=SessionUser(id=str(user.id), email=getattr(user, "email", None)))


def get_session(authorization: str | None = Header(None)) -> Session | None:
    """FastAPI dependency."""
    return auth(bearer_token(authorization))
