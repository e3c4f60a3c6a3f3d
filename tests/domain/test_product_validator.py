"""Unit tests for the code-uniqueness checks on both sides."""

import uuid

from warehouse.command.domain.model.product import Product
from warehouse.command.domain.service.product_validator import ProductValidator
from warehouse.query.domain.model.product import Product as ReplicaProduct
from warehouse.query.domain.service.product_validator import (
    ProductValidator as ReplicaProductValidator,
)
from tests.fakes import FakeProductRepository, FakeReplicaRepository


class TestProductValidator:

    def test_fresh_code_accepted(self):
        validator = ProductValidator(FakeProductRepository())
        assert validator.validate_insert(Product(uuid.uuid4(), "ABCDEFGH")) == []

    def test_duplicate_code_rejected(self):
        existing = Product(uuid.uuid4(), "ABCDEFGH")
        validator = ProductValidator(FakeProductRepository([existing]))

        errors = validator.validate_insert(Product(uuid.uuid4(), "ABCDEFGH"))

        assert len(errors) == 1
        assert errors[0].field == "code"
        assert errors[0].message == "A product with code 'ABCDEFGH' already exists"


class TestReplicaProductValidator:

    def test_duplicate_code_rejected(self):
        existing = ReplicaProduct(id=uuid.uuid4(), code="12345678")
        validator = ReplicaProductValidator(FakeReplicaRepository([existing]))

        errors = validator.validate_insert(ReplicaProduct(id=uuid.uuid4(), code="12345678"))

        assert [e.field for e in errors] == ["code"]

    def test_fresh_code_accepted(self):
        validator = ReplicaProductValidator(FakeReplicaRepository())
        assert validator.validate_insert(ReplicaProduct(id=uuid.uuid4(), code="12345678")) == []
