"""Initial products for an empty command store."""

from __future__ import annotations

import uuid

from warehouse.command.application.product_service import ProductService
from warehouse.command.domain.model.product import Product

SEED_CODES = ("12345678", "ABCDEFGH")


def seed_products(product_service: ProductService) -> list[Product]:
    """Insert the seed products if the store holds none.

    Goes through ``try_insert`` so the replica receives them as well.
    Returns the products inserted.
    """
    if product_service.list_products():
        return []

    inserted: list[Product] = []
    for code in SEED_CODES:
        candidate, errors = Product.create(id=uuid.uuid4(), code=code)
        if errors:
            continue
        product, errors = product_service.try_insert(candidate)
        if not errors:
            inserted.append(product)
    return inserted
