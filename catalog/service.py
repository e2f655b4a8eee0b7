import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .core import ProductIn, ProductPatch, generate_id, make_product
from .database import STORE, CatalogStore
from .errors import BadRequestError, NotFoundError, ValidationFailedError
from .models import Product

# This file contains the core logic for all catalog endpoints.

logger = logging.getLogger(__name__)


def _require(store: CatalogStore, product_id: str) -> Product:
    product = store.find_by_id(product_id)
    if product is None:
        raise NotFoundError()
    return product


# Product reads
async def list_products_logic(
    category: Optional[str] = None,
    q: Optional[str] = None,
    store: CatalogStore = STORE,
) -> List[Product]:
    term = q.strip().lower() if q else ""
    out = []
    for p in store.list():
        if category and p.category != category:
            continue
        if term and term not in p.title.lower():
            continue
        out.append(p)
    return out


async def list_categories_logic(store: CatalogStore = STORE) -> List[str]:
    seen: Dict[str, None] = {}
    for p in store.list():
        seen.setdefault(p.category, None)
    return list(seen)


async def get_product_logic(product_id: str, store: CatalogStore = STORE) -> Product:
    return _require(store, product_id)


def _validate(schema, payload: Dict[str, Any], action: str):
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        err = ValidationFailedError.from_validation_error(exc)
        logger.debug("Rejected %s: %s", action, err.errors)
        raise err from exc


# Product writes
async def create_product_logic(payload: Dict[str, Any], store: CatalogStore = STORE) -> Product:
    data = _validate(ProductIn, payload, "create")
    product = make_product(generate_id(store.ids()), data)
    store.insert(product)
    logger.info("Created product %s (%s)", product.id, product.title)
    return product


async def update_product_logic(
    product_id: str,
    payload: Optional[Dict[str, Any]],
    store: CatalogStore = STORE,
) -> Product:
    if not payload:
        raise BadRequestError("Nothing to update")

    _require(store, product_id)
    changes = _validate(ProductPatch, payload, f"update of {product_id}").changes()

    product = store.update(product_id, changes)
    if product is None:
        raise NotFoundError()
    logger.info("Updated product %s fields=%s", product_id, sorted(changes))
    return product


async def delete_product_logic(product_id: str, store: CatalogStore = STORE) -> None:
    if not store.remove(product_id):
        raise NotFoundError()
    logger.info("Deleted product %s", product_id)
