"""Application service: Product replica (query side).

Mutations here are driven by consumed domain events, never by direct
commands, and nothing is published. Each event is validated again
before it is applied because the replica may have drifted or the event
may be a stale redelivery.

Results follow the command side's convention:
``(None, [])`` not found, ``(product, [...])`` rejected,
``(product, [])`` applied.
"""

from __future__ import annotations

import uuid
from typing import NamedTuple

import structlog

from warehouse.query.domain.model.product import Product
from warehouse.query.domain.repository.product_repository import (
    ProductRepository,
)
from warehouse.query.domain.repository.unit_of_work import UnitOfWork
from warehouse.query.domain.service.product_validator import ProductValidator
from warehouse.shared.events import ProductCreated, ProductDeleted, ProductUpdated
from warehouse.shared.validation import ValidationError

logger = structlog.get_logger(__name__)


class ServiceResult(NamedTuple):
    product: Product | None
    errors: list[ValidationError]


class ProductService:

    def __init__(
        self,
        product_repo: ProductRepository,
        product_validator: ProductValidator,
        unit_of_work: UnitOfWork,
    ) -> None:
        self._product_repo = product_repo
        self._product_validator = product_validator
        self._unit_of_work = unit_of_work

    # --- Queries --------------------------------------------------------------

    def get_product(self, product_id: uuid.UUID) -> Product | None:
        return self._product_repo.get_by_id_detached(product_id)

    def list_products(self) -> list[Product]:
        return self._product_repo.list_detached()

    # --- Local mutations ------------------------------------------------------

    def try_insert(self, product: Product) -> ServiceResult:
        """Insert into the replica only.

        A code already present (e.g. a redelivered ``ProductCreated``) is
        rejected with one error instead of reaching the unique index.
        """
        errors = self._product_validator.validate_insert(product)
        if errors:
            return ServiceResult(product, errors)

        self._product_repo.add(product)
        self._unit_of_work.commit()
        logger.info("Replica product inserted", product_id=str(product.id), code=product.code)
        return ServiceResult(product, [])

    def try_delete(self, product_id: uuid.UUID) -> ServiceResult:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            return ServiceResult(None, [])

        errors = product.validate_remove()
        if errors:
            return ServiceResult(product, errors)

        self._product_repo.remove(product)
        self._unit_of_work.commit()
        logger.info("Replica product deleted", product_id=str(product.id))
        return ServiceResult(product, [])

    # --- Event-driven entry points --------------------------------------------

    def try_insert_from_event(self, event: ProductCreated) -> ServiceResult:
        """Replicate a created product.

        Only the product's own attributes are checked before delegating;
        the event is the source of truth being replicated.
        """
        candidate = Product(id=event.id, code=event.code)
        errors = candidate.validate_attributes()
        if errors:
            return ServiceResult(candidate, errors)
        return self.try_insert(candidate)

    def try_delete_from_event(self, event: ProductDeleted) -> ServiceResult:
        return self.try_delete(event.id)

    def try_update_from_event(self, event: ProductUpdated) -> ServiceResult:
        """Set the replica's stock to the event's absolute value.

        Applying the same event twice leaves the same stock level.
        """
        product = self._product_repo.get_by_id(event.id)
        if product is None:
            return ServiceResult(None, [])

        errors = product.validate_update_stock(event.stock)
        if errors:
            return ServiceResult(product, errors)

        product.update_stock(event.stock)
        self._unit_of_work.commit()
        logger.info("Replica stock updated", product_id=str(product.id), stock=product.stock)
        return ServiceResult(product, [])
