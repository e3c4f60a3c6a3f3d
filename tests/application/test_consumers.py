"""Tests for the replication consumers."""

import uuid

import pytest

from warehouse.query.application.consumers import (
    ProductConsumer,
    ProductCreatedConsumer,
    ProductDeletedConsumer,
    ProductUpdatedConsumer,
    build_consumers,
)
from warehouse.query.application.product_service import ProductService
from warehouse.query.domain.model.product import Product
from warehouse.query.domain.service.product_validator import ProductValidator
from warehouse.shared.events import (
    ALL_TOPICS,
    ProductCreated,
    ProductDeleted,
    ProductUpdated,
)
from warehouse.shared.exceptions import ProductValidationException
from tests.fakes import FakeReplicaRepository, FakeUnitOfWork


def _service(products: list[Product] | None = None):
    repo = FakeReplicaRepository(products)
    uow = FakeUnitOfWork()
    return ProductService(repo, ProductValidator(repo), uow), repo, uow


class TestProductCreatedConsumer:

    def test_applies_valid_event(self):
        service, repo, _ = _service()
        event = ProductCreated(id=uuid.uuid4(), code="ABCDEFGH")

        ProductCreatedConsumer(service).consume(event)

        assert repo.get_by_id(event.id).code == "ABCDEFGH"

    def test_invalid_code_raises_and_inserts_nothing(self):
        service, repo, uow = _service()

        with pytest.raises(ProductValidationException, match="exactly 8 characters") as exc_info:
            ProductCreatedConsumer(service).consume(ProductCreated(uuid.uuid4(), "123"))

        assert exc_info.value.errors[0].field == "code"
        assert repo.list() == []
        assert uow.commits == 0

    def test_duplicate_raises(self):
        existing = Product(id=uuid.uuid4(), code="ABCDEFGH")
        service, _, _ = _service([existing])

        with pytest.raises(ProductValidationException, match="already exists"):
            ProductCreatedConsumer(service).consume(ProductCreated(existing.id, "ABCDEFGH"))


class TestProductUpdatedConsumer:

    def test_redelivery_is_idempotent(self):
        product = Product(id=uuid.uuid4(), code="ABCDEFGH")
        service, _, _ = _service([product])
        consumer = ProductUpdatedConsumer(service)
        event = ProductUpdated(id=product.id, stock=5)

        consumer.consume(event)
        consumer.consume(event)

        assert product.stock == 5

    def test_negative_stock_raises(self):
        product = Product(id=uuid.uuid4(), code="ABCDEFGH")
        service, _, _ = _service([product])

        with pytest.raises(ProductValidationException, match="Stock cannot be negative"):
            ProductUpdatedConsumer(service)(ProductUpdated(product.id, -4))

    def test_unknown_product_is_ignored(self):
        service, _, uow = _service()
        ProductUpdatedConsumer(service).consume(ProductUpdated(uuid.uuid4(), 2))
        assert uow.commits == 0


class TestProductDeletedConsumer:

    def test_stocked_replica_raises(self):
        product = Product(id=uuid.uuid4(), code="ABCDEFGH", stock=3)
        service, repo, _ = _service([product])

        with pytest.raises(ProductValidationException):
            ProductDeletedConsumer(service).consume(ProductDeleted(product.id))

        assert repo.get_by_id(product.id) is product

    def test_deletes(self):
        product = Product(id=uuid.uuid4(), code="ABCDEFGH")
        service, repo, _ = _service([product])

        ProductDeletedConsumer(service).consume(ProductDeleted(product.id))

        assert repo.get_by_id(product.id) is None


def test_one_consumer_per_topic():
    service, _, _ = _service()
    assert sorted(c.topic for c in build_consumers(service)) == sorted(ALL_TOPICS)


def test_consumers_share_the_public_base():
    service, _, _ = _service()
    consumers = build_consumers(service)
    assert all(isinstance(c, ProductConsumer) for c in consumers)
    assert all(callable(c) for c in consumers)
