# bazaar/api/__init__.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from bazaar.api.routers import carts, health, orders, products, users, wishlist
from bazaar.data.seed import init_db
from bazaar.domain.errors import StoreUnavailable
from bazaar.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Bazaar Cart Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(wishlist.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    #bledy odczytu z bazy (zapisy mapuja serwisy) -> 503 zamiast 500
    @app.exception_handler(SQLAlchemyError)
    async def store_unavailable_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Blad bazy danych dla {request.method} {request.url.path}: {exc}")
        error = StoreUnavailable("Baza danych niedostepna")
        return JSONResponse(status_code=error.status_code, content={"detail": error.to_detail()})

    return app
