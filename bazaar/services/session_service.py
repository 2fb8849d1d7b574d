# bazaar/services/session_service.py
import secrets

import redis
from redis.exceptions import RedisError

from bazaar.domain.errors import StoreUnavailable, Unauthenticated
from bazaar.utils.retry import redis_retry
from bazaar.utils.settings import REDIS_URL, SESSION_TTL_SECONDS
from bazaar.utils.logging import get_logger

logger = get_logger(__name__)


class SessionService:
    """
    Sesje po stronie serwera:
    -klucz session:<token> -> user_id, wygasa po SESSION_TTL_SECONDS
    -token idzie do klienta w ciasteczku
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None, ttl: int = SESSION_TTL_SECONDS):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl

    @staticmethod
    def _key(token: str) -> str:
        return f"session:{token}"

    def open(self, user_id: int) -> str:
        token = secrets.token_urlsafe(32)
        try:
            #SET session:abc "7" EX 86400
            self._set(self._key(token), str(user_id))
        except RedisError as e:
            raise StoreUnavailable("Magazyn sesji niedostepny") from e
        logger.info(f"Otwarto sesje dla usera {user_id}")
        return token

    def resolve(self, token: str | None) -> int:
        if not token:
            raise Unauthenticated("Brak sesji")
        try:
            value = self._get(self._key(token))
        except RedisError as e:
            raise StoreUnavailable("Magazyn sesji niedostepny") from e
        if value is None:
            raise Unauthenticated("Sesja wygasla albo nie istnieje")
        return int(value)

    def close(self, token: str | None) -> None:
        if not token:
            return
        try:
            self._delete(self._key(token))
        except RedisError as e:
            raise StoreUnavailable("Magazyn sesji niedostepny") from e

    @redis_retry()
    def _set(self, key: str, value: str) -> None:
        self.redis.set(name=key, value=value, ex=self.ttl)

    @redis_retry()
    def _get(self, key: str) -> str | None:
        return self.redis.get(key)

    @redis_retry()
    def _delete(self, key: str) -> None:
        self.redis.delete(key)
