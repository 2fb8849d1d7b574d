# bazaar/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from bazaar.domain.errors import StoreUnavailable
from bazaar.utils.settings import DATABASE_URL
from bazaar.utils.logging import get_logger

logger = get_logger(__name__)

#sqlite wymaga check_same_thread=False bo fastapi puszcza sync endpointy w threadpoolu
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=True)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_raise(db: Session) -> None:
    """
    Commit jednego dokumentu. Blad bazy -> rollback i StoreUnavailable,
    zeby warstwa HTTP mogla zwrocic 503 zamiast 500.
    """
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Commit nieudany: {e}")
        raise StoreUnavailable("Baza danych niedostepna") from e
