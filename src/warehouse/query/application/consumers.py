"""Event consumers feeding the replica.

Each consumer turns one bus message into one service call. A rejected
event is raised as ``ProductValidationException`` so the transport can
dead-letter it; consumers never retry and never swallow a rejection.

Event lifecycle: received -> validated -> applied | rejected.
"""

from __future__ import annotations

import structlog

from warehouse.query.application.product_service import (
    ProductService,
    ServiceResult,
)
from warehouse.shared.events import (
    PRODUCT_CREATED_TOPIC,
    PRODUCT_DELETED_TOPIC,
    PRODUCT_UPDATED_TOPIC,
    ProductCreated,
    ProductDeleted,
    ProductEvent,
    ProductUpdated,
)
from warehouse.shared.exceptions import ProductValidationException

logger = structlog.get_logger(__name__)


class ProductConsumer:
    """Applies the events of one topic to the replica."""

    topic: str

    def __init__(self, product_service: ProductService) -> None:
        self._product_service = product_service

    def __call__(self, event: ProductEvent) -> None:
        self.consume(event)

    def consume(self, event: ProductEvent) -> None:
        raise NotImplementedError

    def _finish(self, event: ProductEvent, result: ServiceResult) -> None:
        product, errors = result
        if errors:
            logger.warning(
                "Replication event rejected",
                event_type=type(event).__name__,
                product_id=str(event.id),
                errors=[e.message for e in errors],
            )
            raise ProductValidationException(errors)
        if product is None:
            logger.info(
                "Replication event ignored, product not in replica",
                event_type=type(event).__name__,
                product_id=str(event.id),
            )


class ProductCreatedConsumer(ProductConsumer):

    topic = PRODUCT_CREATED_TOPIC

    def consume(self, event: ProductCreated) -> None:
        self._finish(event, self._product_service.try_insert_from_event(event))


class ProductUpdatedConsumer(ProductConsumer):

    topic = PRODUCT_UPDATED_TOPIC

    def consume(self, event: ProductUpdated) -> None:
        self._finish(event, self._product_service.try_update_from_event(event))


class ProductDeletedConsumer(ProductConsumer):

    topic = PRODUCT_DELETED_TOPIC

    def consume(self, event: ProductDeleted) -> None:
        self._finish(event, self._product_service.try_delete_from_event(event))


def build_consumers(product_service: ProductService) -> list[ProductConsumer]:
    return [
        ProductCreatedConsumer(product_service),
        ProductUpdatedConsumer(product_service),
        ProductDeletedConsumer(product_service),
    ]
