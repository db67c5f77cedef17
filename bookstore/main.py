# bookstore/main.py
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, sessionmaker

from bookstore.api.routers import carts, health, orders
from bookstore.data.database import Base, SessionLocal
from bookstore.data.transaction import TransactionScope
from bookstore.domain.errors import BookstoreError
from bookstore.services.notification_service import NotificationService
from bookstore.utils.logging import get_logger

# import every model before create_all
import bookstore.data.models  # noqa: F401

logger = get_logger(__name__)


def create_app(
    session_factory: sessionmaker[Session] | None = None,
    notifications: NotificationService | None = None,
    create_tables: bool = True,
) -> FastAPI:
    session_factory = session_factory or SessionLocal

    if create_tables:
        engine = session_factory.kw["bind"]
        logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
        try:
            Base.metadata.create_all(bind=engine)
        except Exception as e:
            logger.error(f"Failed to create tables: {e}")
            raise

    app = FastAPI(
        title="Bookstore Checkout Service",
        version="1.0.0",
    )
    app.state.tx = TransactionScope(session_factory)
    app.state.notifications = notifications or NotificationService()

    @app.exception_handler(BookstoreError)
    async def bookstore_error_handler(request: Request, exc: BookstoreError):
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    # Include routers
    app.include_router(health.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app


if __name__ == "__main__":
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
