from typing import Any, Dict, Iterable, List, Optional

from .errors import not_found
from .models import Product

# This file holds the in-memory product store and its seed data.

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    },
    {
        "id": "4",
        "name": "Wireless Headphones",
        "description": "Noise-cancelling wireless headphones",
        "price": 200,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "5",
        "name": "Desk Chair",
        "description": "Ergonomic office chair with lumbar support",
        "price": 300,
        "category": "furniture",
        "inStock": True,
    },
]


class ProductStore:
    """Ordered, process-local collection of products.

    Reads hand out copies so callers can never mutate stored records.
    Not thread-safe; the API serves requests one at a time.
    """

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._products: List[Product] = list(products or [])

    @classmethod
    def seeded(cls) -> "ProductStore":
        return cls(Product.model_validate(p) for p in SEED_PRODUCTS)

    def __len__(self) -> int:
        return len(self._products)

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        raise not_found(f"Product with ID {product_id} not found")

    def list(self) -> List[Product]:
        return [p.model_copy() for p in self._products]

    def get_by_id(self, product_id: str) -> Product:
        return self._products[self._index_of(product_id)].model_copy()

    def insert(self, product: Product) -> Product:
        self._products.append(product.model_copy())
        return product.model_copy()

    def replace(self, product_id: str, fields: Dict[str, Any]) -> Product:
        idx = self._index_of(product_id)
        updated = self._products[idx].model_copy(update={
            "name": fields["name"],
            "description": fields["description"],
            "price": fields["price"],
            "category": fields["category"],
            "in_stock": fields["in_stock"],
        })
        self._products[idx] = updated
        return updated.model_copy()

    def remove(self, product_id: str) -> Product:
        idx = self._index_of(product_id)
        return self._products.pop(idx)
