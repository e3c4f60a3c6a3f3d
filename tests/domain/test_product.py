"""Unit tests for the command-side Product aggregate."""

import uuid

import pytest

from warehouse.command.domain.model.product import Product
from warehouse.shared.exceptions import InvalidOperationError
from warehouse.shared.validation import ValidationError


def _product(stock: int = 0) -> Product:
    return Product(id=uuid.uuid4(), code="ABCDEFGH", stock=stock)


class TestProductCreate:

    def test_valid_code_starts_at_zero_stock(self):
        product_id = uuid.uuid4()
        product, errors = Product.create(id=product_id, code="ABCDEFGH")
        assert errors == []
        assert product.id == product_id
        assert product.code == "ABCDEFGH"
        assert product.stock == 0

    @pytest.mark.parametrize("code", ["", None])
    def test_missing_code_returns_errors(self, code):
        product, errors = Product.create(id=uuid.uuid4(), code=code)
        assert product is None
        assert errors == [ValidationError("Code field is required", "code")]

    @pytest.mark.parametrize("code", ["A", "1234567", "123456789", "ABCDEFGHIJKLMNOPQRST"])
    def test_wrong_length_returns_errors(self, code):
        product, errors = Product.create(id=uuid.uuid4(), code=code)
        assert product is None
        assert [e.field for e in errors] == ["code"]
        assert "exactly 8 characters" in errors[0].message

    def test_invalid_code_does_not_raise(self):
        result = Product.create(id=uuid.uuid4(), code="short")
        assert result.product is None
        assert len(result.errors) == 1

    def test_validate_attributes_on_reconstituted_product(self):
        product = Product(id=uuid.uuid4(), code="123")
        errors = product.validate_attributes()
        assert len(errors) == 1
        assert errors[0].field == "code"


class TestProductImmutability:

    def test_code_cannot_change(self):
        product = _product()
        with pytest.raises(AttributeError):
            product.code = "ZZZZZZZZ"

    def test_id_cannot_change(self):
        product = _product()
        with pytest.raises(AttributeError):
            product.id = uuid.uuid4()


class TestProductStock:

    def test_add_then_remove_restores_stock(self):
        product = _product(stock=3)
        product.add_stock()
        assert product.stock == 4
        product.remove_stock()
        assert product.stock == 3

    def test_remove_stock_at_zero_raises(self):
        product = _product()
        with pytest.raises(InvalidOperationError, match="stock level is zero"):
            product.remove_stock()
        assert product.stock == 0

    def test_update_stock_sets_absolute_value(self):
        product = _product(stock=2)
        product.update_stock(7)
        assert product.stock == 7


class TestProductRules:

    def test_validate_remove_stock_at_zero(self):
        errors = _product().validate_remove_stock()
        assert errors == [
            ValidationError("Cannot remove stock when stock level is zero", "stock")
        ]

    def test_validate_remove_stock_with_stock(self):
        assert _product(stock=1).validate_remove_stock() == []

    def test_validate_remove_requires_zero_stock(self):
        errors = _product(stock=2).validate_remove()
        assert len(errors) == 1
        assert errors[0].field == "stock"

    def test_validate_remove_at_zero_stock(self):
        assert _product().validate_remove() == []

    def test_validate_update_stock_negative(self):
        assert _product().validate_update_stock(-1) == [
            ValidationError("Stock cannot be negative", "stock")
        ]

    @pytest.mark.parametrize("stock", [0, 1, 500])
    def test_validate_update_stock_non_negative(self, stock):
        assert _product().validate_update_stock(stock) == []
