"""Domain service: Product insertion rules that need the repository.

Code uniqueness spans every product, so it cannot be checked on the
entity alone. This is a pre-check: the store's unique index still has the
final word under concurrent inserts.
"""

from __future__ import annotations

from warehouse.command.domain.model.product import Product
from warehouse.command.domain.repository.product_repository import (
    ProductRepository,
)
from warehouse.shared.validation import ValidationError


class ProductValidator:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def validate_insert(self, product: Product) -> list[ValidationError]:
        errors: list[ValidationError] = []

        existing = self._product_repo.get_by_code(product.code)
        if existing is not None:
            errors.append(
                ValidationError(
                    f"A product with code '{product.code}' already exists",
                    "code",
                )
            )

        return errors
