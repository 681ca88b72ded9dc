# shop/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from shop.api import include_routers
from shop.data.database import Database
from shop.services.lock_service import LockService, build_lock_service
from shop.utils.logging import get_logger

logger = get_logger(__name__)


def create_app(
    database: Database | None = None,
    lock_service: LockService | None = None,
) -> FastAPI:
    database = database or Database()
    lock_service = lock_service or build_lock_service()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting with database {database.url} and {type(lock_service).__name__}")
        database.create_all()
        yield
        database.dispose()

    app = FastAPI(
        title="Shop Service",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.database = database
    app.state.lock_service = lock_service

    return include_routers(app)


if __name__ == "__main__":
    uvicorn.run(create_app(), host="0.0.0.0", port=8080)
