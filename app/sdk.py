import math
import uuid
from typing import Any, Dict, List, Optional

from .core import validate_product
from .database import ProductStore
from .errors import validation_error
from .models import Product

# This file contains the core logic behind the product endpoints.
# Every function takes the store explicitly; none of them know about HTTP.


def _positive_int(raw: Optional[str], default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value > 0 else default


def _dump(products: List[Product]) -> List[Dict[str, Any]]:
    return [p.to_dict() for p in products]


def list_products_logic(
    store: ProductStore,
    category: Optional[str] = None,
    in_stock: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    default_limit: int = 10,
) -> Dict[str, Any]:
    out = store.list()
    if category:
        wanted = category.lower()
        out = [p for p in out if p.category.lower() == wanted]
    if in_stock is not None:
        flag = in_stock == "true"
        out = [p for p in out if p.in_stock == flag]

    page_n = _positive_int(page, 1)
    limit_n = _positive_int(limit, default_limit)
    start, end = (page_n - 1) * limit_n, page_n * limit_n
    total = len(out)

    return {
        "products": _dump(out[start:end]),
        "pagination": {
            "currentPage": page_n,
            "totalPages": math.ceil(total / limit_n),
            "totalProducts": total,
            "hasNextPage": end < total,
            "hasPrevPage": page_n > 1,
        },
    }


def search_products_logic(store: ProductStore, q: Optional[str]) -> Dict[str, Any]:
    if not q:
        raise validation_error('Search query parameter "q" is required')
    term = q.lower()
    results = [
        p for p in store.list()
        if term in p.name.lower() or term in p.description.lower()
    ]
    return {"query": q, "results": _dump(results), "count": len(results)}


def product_stats_logic(store: ProductStore) -> Dict[str, Any]:
    products = store.list()
    categories: Dict[str, int] = {}
    for p in products:
        categories[p.category] = categories.get(p.category, 0) + 1

    in_stock = sum(1 for p in products if p.in_stock)
    stats = {
        "totalProducts": len(products),
        "inStock": in_stock,
        "outOfStock": len(products) - in_stock,
        "categories": categories,
        "averagePrice": 0,
        "priceRange": {"min": 0, "max": 0},
    }
    if products:
        prices = [p.price for p in products]
        stats["averagePrice"] = sum(prices) / len(prices)
        stats["priceRange"] = {"min": min(prices), "max": max(prices)}
    return stats


def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    return store.get_by_id(product_id).to_dict()


def create_product_logic(store: ProductStore, payload: Any) -> Dict[str, Any]:
    fields = validate_product(payload)
    product = store.insert(Product(id=str(uuid.uuid4()), **fields))
    return {"message": "Product created successfully", "product": product.to_dict()}


def update_product_logic(store: ProductStore, product_id: str, payload: Any) -> Dict[str, Any]:
    fields = validate_product(payload)
    product = store.replace(product_id, fields)
    return {"message": "Product updated successfully", "product": product.to_dict()}


def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    product = store.remove(product_id)
    return {"message": "Product deleted successfully", "product": product.to_dict()}
