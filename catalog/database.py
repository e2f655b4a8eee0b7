import logging
from threading import RLock
from typing import Any, Dict, Iterable, List, Optional, Set

from .models import Product

# This file holds the in-memory product store and its seed data.

logger = logging.getLogger(__name__)

SEED_PRODUCTS: List[dict] = [
    {
        "id": "p1",
        "title": "Jubilee Biscuits",
        "category": "Sweets",
        "description": "Classic crunchy biscuits with a vanilla flavour. Perfect with tea.",
        "price": 79,
        "stock": 20,
        "rating": 4.6,
        "imageUrl": "https://via.placeholder.com/150?text=Cookie",
    },
    {
        "id": "p2",
        "title": "Village House Milk",
        "category": "Drinks",
        "description": "UHT milk, 2.5% fat. 1 litre.",
        "price": 99,
        "stock": 15,
        "rating": 4.3,
        "imageUrl": "https://via.placeholder.com/150?text=Milk",
    },
    {
        "id": "p3",
        "title": "Borodinsky Bread",
        "category": "Bakery",
        "description": "Rye bread with coriander. 400 g.",
        "price": 59,
        "stock": 30,
        "rating": 4.1,
        "imageUrl": "https://via.placeholder.com/150?text=Bread",
    },
    {
        "id": "p4",
        "title": "Granny Smith Apples",
        "category": "Fruit",
        "description": "Green sweet-and-sour apples. 1 kg.",
        "price": 129,
        "stock": 25,
        "rating": 4.8,
        "imageUrl": "https://via.placeholder.com/150?text=Apple",
    },
    {
        "id": "p5",
        "title": "Alenka Chocolate",
        "category": "Sweets",
        "description": "Milk chocolate with nuts. 90 g.",
        "price": 89,
        "stock": 50,
        "rating": 4.9,
        "imageUrl": "https://via.placeholder.com/150?text=Chocolate",
    },
    {
        "id": "p6",
        "title": "Doktorskaya Sausage",
        "category": "Meat",
        "description": "Premium boiled sausage. 500 g.",
        "price": 249,
        "stock": 12,
        "rating": 4.4,
        "imageUrl": "https://via.placeholder.com/150?text=Sausage",
    },
    {
        "id": "p7",
        "title": "Dobry Orange Juice",
        "category": "Drinks",
        "description": "Reconstituted orange juice. 1 l.",
        "price": 119,
        "stock": 18,
        "rating": 4.2,
        "imageUrl": "https://via.placeholder.com/150?text=Juice",
    },
    {
        "id": "p8",
        "title": "Barilla Pasta",
        "category": "Grocery",
        "description": "Durum wheat spaghetti. 500 g.",
        "price": 139,
        "stock": 22,
        "rating": 4.7,
        "imageUrl": "https://via.placeholder.com/150?text=Pasta",
    },
    {
        "id": "p9",
        "title": "Activia Yogurt",
        "category": "Dairy",
        "description": "Drinking yogurt with strawberry. 260 g.",
        "price": 69,
        "stock": 35,
        "rating": 4.5,
        "imageUrl": "https://via.placeholder.com/150?text=Yogurt",
    },
    {
        "id": "p10",
        "title": "Lavazza Coffee",
        "category": "Drinks",
        "description": "Ground coffee. 250 g.",
        "price": 399,
        "stock": 8,
        "rating": 4.9,
        "imageUrl": "https://via.placeholder.com/150?text=Coffee",
    },
]


def seed_products() -> List[Product]:
    return [Product(**p) for p in SEED_PRODUCTS]


class CatalogStore:
    """Ordered in-memory sequence of products, looked up by exact id."""

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._lock = RLock()
        self._products: List[Product] = list(products or [])

    def __len__(self) -> int:
        return len(self._products)

    def list(self) -> List[Product]:
        with self._lock:
            return list(self._products)

    def find_by_id(self, product_id: str) -> Optional[Product]:
        with self._lock:
            for p in self._products:
                if p.id == product_id:
                    return p
        return None

    def ids(self) -> Set[str]:
        with self._lock:
            return {p.id for p in self._products}

    def insert(self, product: Product) -> Product:
        with self._lock:
            self._products.append(product)
        return product

    def update(self, product_id: str, changes: Dict[str, Any]) -> Optional[Product]:
        """
        Replace the product with a copy carrying changes, keeping its position.
        The new record is validated before the swap, so a failure leaves the
        stored product untouched. Returns None if the id is gone.
        """
        with self._lock:
            for i, p in enumerate(self._products):
                if p.id == product_id:
                    data = p.model_dump()
                    data.update(changes)
                    data["id"] = product_id
                    updated = Product.model_validate(data)
                    self._products[i] = updated
                    return updated
        return None

    def remove(self, product_id: str) -> bool:
        with self._lock:
            for i, p in enumerate(self._products):
                if p.id == product_id:
                    del self._products[i]
                    return True
        return False

    def reset(self, products: Optional[Iterable[Product]] = None) -> None:
        with self._lock:
            self._products = list(products or [])
        logger.debug("Store reset with %d products", len(self._products))


STORE = CatalogStore()
