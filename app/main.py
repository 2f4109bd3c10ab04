import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.api.router import api_router
from app.config import settings
from app.database.mongo import create_client, get_database, ping
from app.database.store import MongoProductStore, ProductStore

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def mongo_lifespan(app: FastAPI):
    client = create_client()
    db = get_database(client)
    try:
        await ping(db)
    except Exception as e:
        # keep serving; product requests will answer 500 until Mongo is back
        logger.exception("MongoDB connection failed: %s", e)

    app.state.product_store = MongoProductStore.from_database(db)
    try:
        yield
    finally:
        client.close()
        logger.info("MongoDB connection closed")


@asynccontextmanager
async def static_lifespan(app: FastAPI):
    yield


def create_app(product_store: ProductStore | None = None) -> FastAPI:
    """
    Build the application. Passing a store skips the MongoDB bootstrap,
    which is how tests run the routes against an in-memory fake.
    """
    lifespan = mongo_lifespan if product_store is None else static_lifespan
    app = FastAPI(title="Product Catalog API", lifespan=lifespan)
    if product_store is not None:
        app.state.product_store = product_store

    app.include_router(api_router)

    @app.get("/")
    def root():
        return {"status": "running", "message": "Product Catalog API"}

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    logger.info("Server running on %s:%s", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
