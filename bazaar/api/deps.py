# bazaar/api/deps.py
from functools import lru_cache

from fastapi import Cookie, Depends, HTTPException

from bazaar.domain.errors import ShopError
from bazaar.services.session_service import SessionService
from bazaar.utils.settings import SESSION_COOKIE_NAME


def http_error(e: ShopError) -> HTTPException:
    #{"detail": {"kind": "OutOfStock", "message": "..."}}
    return HTTPException(status_code=e.status_code, detail=e.to_detail())


@lru_cache(maxsize=1)
def get_session_service() -> SessionService:
    return SessionService()


def get_session_token(
    session_token: str | None = Cookie(None, alias=SESSION_COOKIE_NAME),
) -> str | None:
    return session_token


def get_current_user_id(
    session_token: str | None = Depends(get_session_token),
    sessions: SessionService = Depends(get_session_service),
) -> int:
    """Tozsamosc wolajacego; kazdy endpoint koszyka/zamowien dostaje ja jako zaleznosc."""
    try:
        return sessions.resolve(session_token)
    except ShopError as e:
        raise http_error(e)
