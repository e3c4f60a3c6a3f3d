"""Product aggregate (command side).

The authoritative record of a warehouse item. Stock only moves one unit
at a time through ``add_stock`` / ``remove_stock``; rules are exposed as
``validate_*`` methods so callers can check before they mutate.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import NamedTuple

from warehouse.shared.exceptions import InvalidOperationError
from warehouse.shared.validation import ValidationError

CODE_LENGTH = 8

_IMMUTABLE_FIELDS = ("id", "code")


@dataclass
class Product:
    """Aggregate root for a warehouse item.

    Use ``Product.create()`` for new products. The ``__init__`` is kept
    simple so stores can reconstitute persisted products without
    re-validating them.

    Invariants:
    - ``stock`` is never negative
    - ``id`` and ``code`` never change once set
    """

    id: uuid.UUID
    code: str
    stock: int = 0

    def __setattr__(self, name: str, value) -> None:
        if name in _IMMUTABLE_FIELDS and name in self.__dict__:
            raise AttributeError(f"Product.{name} cannot be changed")
        super().__setattr__(name, value)

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(id: uuid.UUID, code: str) -> CreateResult:
        """Create a new product with zero stock.

        An invalid code returns ``(None, errors)``; no product is built.
        """
        errors = Product.validate_code(code)
        if errors:
            return CreateResult(None, errors)
        return CreateResult(Product(id=id, code=code), [])

    @staticmethod
    def validate_code(code: str | None) -> list[ValidationError]:
        if not code:
            return [ValidationError("Code field is required", "code")]
        if len(code) != CODE_LENGTH:
            return [
                ValidationError(
                    f"Code must be exactly {CODE_LENGTH} characters", "code"
                )
            ]
        return []

    def validate_attributes(self) -> list[ValidationError]:
        return Product.validate_code(self.code)

    # --- Stock ----------------------------------------------------------------

    def add_stock(self) -> None:
        self.stock += 1

    def remove_stock(self) -> None:
        """Take one unit out of stock.

        Raises InvalidOperationError at zero stock; callers that want a
        recoverable check call ``validate_remove_stock()`` first.
        """
        if self.stock <= 0:
            raise InvalidOperationError(
                "Cannot remove stock when stock level is zero"
            )
        self.stock -= 1

    def update_stock(self, stock: int) -> None:
        """Set the absolute stock level. Validate with ``validate_update_stock``."""
        self.stock = stock

    # --- Rules ----------------------------------------------------------------

    def validate_remove_stock(self) -> list[ValidationError]:
        if self.stock <= 0:
            return [
                ValidationError(
                    "Cannot remove stock when stock level is zero", "stock"
                )
            ]
        return []

    def validate_remove(self) -> list[ValidationError]:
        """A product can only be deleted while it holds no stock."""
        if self.stock != 0:
            return [
                ValidationError(
                    "Cannot remove a product when stock level is zero", "stock"
                )
            ]
        return []

    def validate_update_stock(self, stock: int) -> list[ValidationError]:
        if stock < 0:
            return [ValidationError("Stock cannot be negative", "stock")]
        return []


class CreateResult(NamedTuple):
    product: Product | None
    errors: list[ValidationError]
