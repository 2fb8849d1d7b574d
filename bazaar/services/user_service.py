import bcrypt
from sqlalchemy.orm import Session

from bazaar.data.models.user import UserModel
from bazaar.domain.errors import AlreadyExists, InvalidCredentials, NotFound
from bazaar.domain.schemas import SignupIn, UserRead
from bazaar.repos.user_repo import UserRepo
from bazaar.utils.settings import BCRYPT_ROUNDS
from bazaar.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def signup(self, payload: SignupIn) -> UserRead:
        if self.repo.get_user_by_email(payload.email):
            raise AlreadyExists("Uzytkownik o tym emailu juz istnieje")

        password_hash = bcrypt.hashpw(
            payload.password.encode("utf-8"),
            bcrypt.gensalt(rounds=BCRYPT_ROUNDS),
        ).decode("utf-8")

        user = UserModel(username=payload.username, email=payload.email, password_hash=password_hash)
        created = self.repo.create_user(user)
        logger.info(f"Zarejestrowano uzytkownika {created.id}")
        return UserRead(id=created.id, username=created.username, email=created.email)

    def login(self, email: str, password: str) -> UserRead:
        user = self.repo.get_user_by_email(email)
        #ten sam komunikat dla zlego emaila i zlego hasla
        if not user or not bcrypt.checkpw(password.encode("utf-8"), user.password_hash.encode("utf-8")):
            raise InvalidCredentials("Nieprawidlowe dane logowania")
        return UserRead(id=user.id, username=user.username, email=user.email)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("Uzytkownik nie istnieje")
        return UserRead(id=user.id, username=user.username, email=user.email)
