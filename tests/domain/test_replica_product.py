"""Unit tests for the query-side Product read model."""

import uuid

import pytest

from warehouse.query.domain.model.product import Product


class TestReplicaProduct:

    @pytest.mark.parametrize("code", ["", None, "123", "123456789"])
    def test_invalid_code(self, code):
        errors = Product(id=uuid.uuid4(), code=code).validate_attributes()
        assert [e.field for e in errors] == ["code"]

    def test_valid_code(self):
        assert Product(id=uuid.uuid4(), code="12345678").validate_attributes() == []

    def test_update_stock_validation(self):
        product = Product(id=uuid.uuid4(), code="12345678")
        assert product.validate_update_stock(-3)[0].message == "Stock cannot be negative"
        assert product.validate_update_stock(3) == []

    def test_remove_requires_zero_stock(self):
        assert Product(id=uuid.uuid4(), code="12345678", stock=1).validate_remove()
        assert Product(id=uuid.uuid4(), code="12345678").validate_remove() == []

    def test_code_is_immutable(self):
        product = Product(id=uuid.uuid4(), code="12345678")
        with pytest.raises(AttributeError):
            product.code = "87654321"
