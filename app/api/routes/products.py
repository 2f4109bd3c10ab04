import json
import logging

from fastapi import APIRouter, Depends, Request

from app.controllers.product_controller import ProductController

logger = logging.getLogger(__name__)

router = APIRouter()


def get_product_controller(request: Request) -> ProductController:
    return ProductController(request.app.state.product_store)


def _reject_constant(name: str):
    raise ValueError(f"Unsupported JSON constant: {name}")


async def _read_body(request: Request) -> dict:
    # Anything that is not a strict JSON object is treated as an empty body
    try:
        payload = json.loads(await request.body(), parse_constant=_reject_constant)
    except ValueError:
        logger.debug("Request body is not valid JSON")
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post("/products")
async def create_product(request: Request, controller: ProductController = Depends(get_product_controller)):
    body = await _read_body(request)
    return await controller.create_product(body)


@router.get("/products/all")
async def get_all_products(request: Request, controller: ProductController = Depends(get_product_controller)):
    return await controller.get_all_products(request.query_params)
