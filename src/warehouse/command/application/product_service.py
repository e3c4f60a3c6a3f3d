"""Application service: Product commands (command side).

Every mutation follows the same order: load, validate, mutate, commit,
and only then publish the domain event. There is no transaction around
commit and publish. If publishing fails the committed change stays and
the failure is raised as ``EventDeliveryError`` so the event can be sent
again; consumers are idempotent enough to take a redelivery.

Expected outcomes are returned as data, never raised:
- ``(None, [])``       the product does not exist
- ``(product, [...])`` the product exists but a rule rejected the change
- ``(product, [])``    the change was committed and published
"""

from __future__ import annotations

import uuid
from typing import NamedTuple

import structlog

from warehouse.command.application.event_publisher import EventPublisher
from warehouse.command.domain.model.product import Product
from warehouse.command.domain.repository.product_repository import (
    ProductRepository,
)
from warehouse.command.domain.repository.unit_of_work import UnitOfWork
from warehouse.command.domain.service.product_validator import ProductValidator
from warehouse.shared.events import (
    ProductCreated,
    ProductDeleted,
    ProductEvent,
    ProductUpdated,
)
from warehouse.shared.exceptions import EventDeliveryError
from warehouse.shared.validation import ValidationError

logger = structlog.get_logger(__name__)


class ServiceResult(NamedTuple):
    product: Product | None
    errors: list[ValidationError]

    @property
    def succeeded(self) -> bool:
        return self.product is not None and not self.errors


class ProductService:

    def __init__(
        self,
        product_repo: ProductRepository,
        product_validator: ProductValidator,
        unit_of_work: UnitOfWork,
        publisher: EventPublisher,
    ) -> None:
        self._product_repo = product_repo
        self._product_validator = product_validator
        self._unit_of_work = unit_of_work
        self._publisher = publisher

    # --- Queries --------------------------------------------------------------

    def get_product(self, product_id: uuid.UUID) -> Product | None:
        return self._product_repo.get_by_id_detached(product_id)

    def list_products(self) -> list[Product]:
        return self._product_repo.list_detached()

    # --- Commands -------------------------------------------------------------

    def try_insert(self, product: Product) -> ServiceResult:
        """Insert a new product and publish ``ProductCreated``.

        A duplicate code returns the unpersisted product with one error;
        nothing is committed or published.
        """
        errors = self._product_validator.validate_insert(product)
        if errors:
            logger.info(
                "Product insert rejected",
                product_id=str(product.id),
                code=product.code,
                errors=[e.message for e in errors],
            )
            return ServiceResult(product, errors)

        self._product_repo.add(product)
        self._unit_of_work.commit()
        logger.info("Product inserted", product_id=str(product.id), code=product.code)

        self._publish(ProductCreated(id=product.id, code=product.code))
        return ServiceResult(product, [])

    def try_delete(self, product_id: uuid.UUID) -> ServiceResult:
        """Delete a product holding no stock and publish ``ProductDeleted``."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            return ServiceResult(None, [])

        errors = product.validate_remove()
        if errors:
            return ServiceResult(product, errors)

        self._product_repo.remove(product)
        self._unit_of_work.commit()
        logger.info("Product deleted", product_id=str(product.id))

        self._publish(ProductDeleted(id=product.id))
        return ServiceResult(product, [])

    def try_add_stock(self, product_id: uuid.UUID) -> ServiceResult:
        """Add one unit of stock and publish the new level."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            return ServiceResult(None, [])

        product.add_stock()
        self._unit_of_work.commit()
        logger.info("Stock added", product_id=str(product.id), stock=product.stock)

        self._publish(ProductUpdated(id=product.id, stock=product.stock))
        return ServiceResult(product, [])

    def try_remove_stock(self, product_id: uuid.UUID) -> ServiceResult:
        """Remove one unit of stock and publish the new level."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            return ServiceResult(None, [])

        errors = product.validate_remove_stock()
        if errors:
            return ServiceResult(product, errors)

        product.remove_stock()
        self._unit_of_work.commit()
        logger.info("Stock removed", product_id=str(product.id), stock=product.stock)

        self._publish(ProductUpdated(id=product.id, stock=product.stock))
        return ServiceResult(product, [])

    # --- Internal helpers -----------------------------------------------------

    def _publish(self, event: ProductEvent) -> None:
        """Publish after a successful commit. Committed state is never rolled back."""
        try:
            self._publisher.publish(event)
        except Exception as exc:
            logger.error(
                "Event publish failed after commit",
                event_type=type(event).__name__,
                product_id=str(event.id),
                error=str(exc),
            )
            raise EventDeliveryError(event, str(exc)) from exc
        logger.debug(
            "Event published", event_type=type(event).__name__, product_id=str(event.id)
        )
