import asyncio
import logging
from typing import Dict, Any, List

from .core import NotFound, make_line_item, next_product_id, validate_product
from .database import CART, PRODUCTS, JsonStore
from .models import Mutation

# This file contains the core logic for all API endpoints.
# File I/O runs in worker threads; the store lock keeps each load-modify-save whole.

logger = logging.getLogger("storefront.logic")

# Product endpoints
async def list_products_logic(store: JsonStore) -> List[Dict[str, Any]]:
    return await asyncio.to_thread(store.load, PRODUCTS)

async def get_product_logic(store: JsonStore, product_id: int) -> Dict[str, Any]:
    for p in await asyncio.to_thread(store.load, PRODUCTS):
        if p.get("id") == product_id:
            return p
    raise NotFound("Product not found")

# Admin endpoints
async def create_product_logic(store: JsonStore, payload: Dict[str, Any]) -> Mutation:
    async with store.lock(PRODUCTS):
        products = await asyncio.to_thread(store.load, PRODUCTS)
        new_id = next_product_id(products)
        fields = validate_product(payload).model_dump()
        fields.pop("id", None)
        product = {"id": new_id, **fields}

        products.append(product)
        persisted = await asyncio.to_thread(store.save, PRODUCTS, products)
        logger.info("created product id=%s name=%r persisted=%s", new_id, product["name"], persisted)
        return Mutation(data=product, persisted=persisted)

async def delete_product_logic(store: JsonStore, product_id: int) -> Mutation:
    async with store.lock(PRODUCTS):
        products = await asyncio.to_thread(store.load, PRODUCTS)
        remaining = [p for p in products if p.get("id") != product_id]
        if len(remaining) == len(products):
            raise NotFound("Product not found")

        persisted = await asyncio.to_thread(store.save, PRODUCTS, remaining)
        logger.info("deleted product id=%s persisted=%s", product_id, persisted)
        return Mutation(data=None, persisted=persisted)

# Cart endpoints
async def view_cart_logic(store: JsonStore) -> List[Dict[str, Any]]:
    return await asyncio.to_thread(store.load, CART)

async def cart_add_logic(store: JsonStore, payload: Dict[str, Any]) -> Mutation:
    item = make_line_item(payload)
    async with store.lock(CART):
        cart = await asyncio.to_thread(store.load, CART)
        cart.append(item)
        persisted = await asyncio.to_thread(store.save, CART, cart)
        logger.info("cart add id=%s size=%d persisted=%s", item["id"], len(cart), persisted)
        return Mutation(data=cart, persisted=persisted)

async def cart_remove_logic(store: JsonStore, index: int) -> Mutation:
    async with store.lock(CART):
        cart = await asyncio.to_thread(store.load, CART)
        if not 0 <= index < len(cart):
            raise NotFound("Item not found")

        del cart[index]
        persisted = await asyncio.to_thread(store.save, CART, cart)
        logger.info("cart remove index=%d size=%d persisted=%s", index, len(cart), persisted)
        return Mutation(data=cart, persisted=persisted)
