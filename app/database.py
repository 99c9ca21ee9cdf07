from typing import Any, Dict, Iterator, List, Optional

from .models import Product

# This file holds the in-memory product store.

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
]


class ProductStore:
    """Ordered collection of products, iterated in insertion order."""

    def __init__(self, seed: bool = True):
        self._products: List[Product] = []
        if seed:
            for raw in SEED_PRODUCTS:
                self.insert(Product(**raw))

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(list(self._products))

    def list(self) -> List[Product]:
        return list(self._products)

    def find(self, product_id: str) -> Optional[Product]:
        return next((p for p in self._products if p.id == product_id), None)

    def insert(self, product: Product) -> Product:
        if self.find(product.id) is not None:
            raise ValueError(f"duplicate product id: {product.id}")
        self._products.append(product)
        return product

    def update(self, product_id: str, changes: Dict[str, Any]) -> Optional[Product]:
        product = self.find(product_id)
        if product is None:
            return None
        for attr, value in changes.items():
            if attr == "id":
                continue
            setattr(product, attr, value)
        return product

    def delete(self, product_id: str) -> bool:
        remaining = [p for p in self._products if p.id != product_id]
        removed = len(remaining) != len(self._products)
        self._products = remaining
        return removed
