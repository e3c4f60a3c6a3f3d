"""Abstract repository for the command-side Product aggregate.

Changes made through the repository are pending until the unit of work
commits them. Tracked reads return the instance the next commit will
persist; detached reads return independent copies for display.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod

from warehouse.command.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def add(self, product: Product) -> None:
        """Stage a new product for insertion."""

    @abstractmethod
    def remove(self, product: Product) -> None:
        """Stage a product for deletion."""

    @abstractmethod
    def get_by_id(self, product_id: uuid.UUID) -> Product | None:
        """Return a tracked product by its ID, or None if not found."""

    @abstractmethod
    def get_by_id_detached(self, product_id: uuid.UUID) -> Product | None:
        """Return an untracked copy of a product, or None if not found."""

    @abstractmethod
    def get_by_code(self, code: str) -> Product | None:
        """Return the product holding ``code``, or None."""

    @abstractmethod
    def list(self) -> list[Product]:
        """Return every product, tracked."""

    @abstractmethod
    def list_detached(self) -> list[Product]:
        """Return untracked copies of every product."""
