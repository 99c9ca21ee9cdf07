import math
import uuid
from collections import Counter
from typing import Any, Dict, Optional

from .core import Err, Ok, ProductIn, Result, _make_product, parse_positive_int
from .database import ProductStore
from .errors import NotFoundError

# This file contains the core logic for all API endpoints.
# Each function returns a Result; main.py turns it into a response.

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _not_found() -> Err:
    return Err(NotFoundError("Product not found"))


async def list_products_logic(
    store: ProductStore,
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Result:
    # order matters: category, then search, then pagination
    products = store.list()
    if category:
        wanted = category.lower()
        products = [p for p in products if p.category.lower() == wanted]
    if search:
        term = search.lower()
        products = [p for p in products if term in p.name.lower()]

    page_no = parse_positive_int(page, DEFAULT_PAGE)
    per_page = parse_positive_int(limit, DEFAULT_LIMIT)
    start = (page_no - 1) * per_page
    window = products[start:start + per_page]

    return Ok({
        "total": len(products),
        "page": page_no,
        "pages": math.ceil(len(products) / per_page),
        "products": [p.to_json() for p in window],
    })


async def product_stats_logic(store: ProductStore) -> Result:
    total = 0
    in_stock = 0
    categories: Counter = Counter()
    for p in store:
        total += 1
        if p.in_stock:
            in_stock += 1
        categories[p.category] += 1
    return Ok({"totalProducts": total, "inStock": in_stock, "categories": dict(categories)})


async def get_product_logic(store: ProductStore, product_id: str) -> Result:
    p = store.find(product_id)
    if p is None:
        return _not_found()
    return Ok(p.to_json())


async def create_product_logic(store: ProductStore, payload: ProductIn) -> Result:
    pid = str(uuid.uuid4())
    while store.find(pid) is not None:
        pid = str(uuid.uuid4())
    product = store.insert(_make_product(pid, payload))
    return Ok(product.to_json(), status_code=201)


async def update_product_logic(store: ProductStore, product_id: str, changes: Dict[str, Any]) -> Result:
    product = store.update(product_id, changes)
    if product is None:
        return _not_found()
    return Ok(product.to_json())


async def delete_product_logic(store: ProductStore, product_id: str) -> Result:
    if not store.delete(product_id):
        return _not_found()
    return Ok(None, status_code=204)
