import logging
from typing import Any, Mapping

from fastapi.responses import JSONResponse

from app.database.store import ProductStore

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = "10"


def _server_error() -> JSONResponse:
    return JSONResponse({"msg": "Server Error"}, status_code=500)


def _respond(content: dict, status_code: int) -> JSONResponse:
    # JSONResponse renders eagerly; NaN/Infinity or non-JSON types fail here
    try:
        return JSONResponse(content, status_code=status_code)
    except (TypeError, ValueError) as e:
        logger.exception("Failed to serialize response: %s", e)
        return _server_error()


class ProductController:
    """
    Request handlers for the product resource.

    Each handler validates its input, makes exactly one awaited call to the
    store and answers with a `{"msg": ..., "data": ...}` envelope. Store
    failures of any kind are logged and answered with a bare 500.
    """

    def __init__(self, store: ProductStore):
        self.store = store

    async def create_product(self, body: Mapping[str, Any]) -> JSONResponse:
        name = body.get("name")
        price = body.get("price")

        # Truthiness check: a price of 0 is rejected too.
        if not name or not price:
            logger.debug("Rejected product create, missing name or price")
            return JSONResponse({"msg": "Missing Data"}, status_code=400)

        try:
            product = await self.store.create({"name": name, "price": price})
        except Exception as e:
            logger.exception("Failed to create product: %s", e)
            return _server_error()

        return _respond({"msg": "Product Created", "data": product}, 201)

    async def get_all_products(self, query: Mapping[str, Any]) -> JSONResponse:
        limit = query.get("limit")
        if limit is None or limit == "":
            limit = DEFAULT_LIMIT

        try:
            products = await self.store.find().limit(limit)
        except Exception as e:
            logger.exception("Failed to fetch products: %s", e)
            return _server_error()

        return _respond({"msg": "Products fetched", "data": list(products)}, 200)
