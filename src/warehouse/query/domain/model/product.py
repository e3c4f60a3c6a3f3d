"""Product read model (query side).

Owned by the query service and independent of the command-side
aggregate; the two only agree on the event contract. Stock is set to
absolute values carried by ``ProductUpdated`` events, never moved one
unit at a time.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from warehouse.shared.validation import ValidationError

CODE_LENGTH = 8


@dataclass
class Product:

    id: uuid.UUID
    code: str
    stock: int = 0

    def __setattr__(self, name: str, value) -> None:
        if name in ("id", "code") and name in self.__dict__:
            raise AttributeError(f"Product.{name} cannot be changed")
        super().__setattr__(name, value)

    def validate_attributes(self) -> list[ValidationError]:
        if not self.code:
            return [ValidationError("Code field is required", "code")]
        if len(self.code) != CODE_LENGTH:
            return [
                ValidationError(
                    f"Code must be exactly {CODE_LENGTH} characters", "code"
                )
            ]
        return []

    def update_stock(self, stock: int) -> None:
        self.stock = stock

    def validate_update_stock(self, stock: int) -> list[ValidationError]:
        if stock < 0:
            return [ValidationError("Stock cannot be negative", "stock")]
        return []

    def validate_remove(self) -> list[ValidationError]:
        if self.stock != 0:
            return [
                ValidationError(
                    "Cannot remove a product when stock level is zero", "stock"
                )
            ]
        return []
