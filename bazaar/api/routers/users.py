from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from bazaar.api.deps import get_current_user_id, get_session_service, get_session_token, http_error
from bazaar.data.database import get_db
from bazaar.domain.errors import ShopError
from bazaar.domain.schemas import LoginIn, MessageOut, SignupIn, UserRead
from bazaar.services.session_service import SessionService
from bazaar.services.user_service import UserService
from bazaar.utils.settings import SESSION_COOKIE_NAME, SESSION_COOKIE_SECURE, SESSION_TTL_SECONDS

router = APIRouter(tags=["users"])


@router.post("/signup", response_model=UserRead, status_code=201)
def signup(payload: SignupIn, db: Session = Depends(get_db)):
    try:
        return UserService(db).signup(payload)
    except ShopError as e:
        raise http_error(e)


@router.post("/login", response_model=MessageOut)
def login(
    payload: LoginIn,
    response: Response,
    db: Session = Depends(get_db),
    sessions: SessionService = Depends(get_session_service),
):
    try:
        user = UserService(db).login(payload.email, payload.password)
        token = sessions.open(user.id)
    except ShopError as e:
        raise http_error(e)

    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=SESSION_TTL_SECONDS,
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return {"message": "Logged in successfully"}


@router.post("/logout", response_model=MessageOut)
def logout(
    response: Response,
    session_token: str | None = Depends(get_session_token),
    sessions: SessionService = Depends(get_session_service),
):
    try:
        sessions.close(session_token)
    except ShopError as e:
        raise http_error(e)
    response.delete_cookie(SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}


@router.get("/profile", response_model=UserRead)
def profile(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        return UserService(db).get_user(user_id)
    except ShopError as e:
        raise http_error(e)
