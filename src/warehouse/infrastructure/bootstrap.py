"""Composition root: wires concrete implementations to both services.

This is the only place in the codebase that knows about the command
side, the query side and the transport at once.
"""

from __future__ import annotations

from warehouse.command.application.product_service import (
    ProductService as CommandProductService,
)
from warehouse.command.domain.service.product_validator import (
    ProductValidator as CommandProductValidator,
)
from warehouse.command.infrastructure import json_product_repository as command_store
from warehouse.infrastructure.config import Settings
from warehouse.infrastructure.messaging.json_queue import (
    JsonQueuePublisher,
    JsonQueueReceiver,
)
from warehouse.query.application.consumers import ProductConsumer, build_consumers
from warehouse.query.application.product_service import (
    ProductService as QueryProductService,
)
from warehouse.query.domain.service.product_validator import (
    ProductValidator as QueryProductValidator,
)
from warehouse.query.infrastructure import json_product_repository as query_store


def command_product_service(settings: Settings) -> CommandProductService:
    session = command_store.open_product_session(settings.command_store_path)
    repo = command_store.JsonProductRepository(session)
    return CommandProductService(
        product_repo=repo,
        product_validator=CommandProductValidator(repo),
        unit_of_work=command_store.JsonUnitOfWork(session),
        publisher=JsonQueuePublisher(settings.queue_dir),
    )


def query_product_service(settings: Settings) -> QueryProductService:
    session = query_store.open_product_session(settings.query_store_path)
    repo = query_store.JsonProductRepository(session)
    return QueryProductService(
        product_repo=repo,
        product_validator=QueryProductValidator(repo),
        unit_of_work=query_store.JsonUnitOfWork(session),
    )


def queue_receiver(settings: Settings) -> JsonQueueReceiver:
    return JsonQueueReceiver(settings.queue_dir)


def replica_consumers(settings: Settings) -> list[ProductConsumer]:
    return build_consumers(query_product_service(settings))
