"""Domain service: code uniqueness within the replica."""

from __future__ import annotations

from warehouse.query.domain.model.product import Product
from warehouse.query.domain.repository.product_repository import (
    ProductRepository,
)
from warehouse.shared.validation import ValidationError


class ProductValidator:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def validate_insert(self, product: Product) -> list[ValidationError]:
        if self._product_repo.get_by_code(product.code) is None:
            return []
        return [
            ValidationError(
                f"A product with code '{product.code}' already exists", "code"
            )
        ]
