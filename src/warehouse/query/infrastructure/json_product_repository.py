"""JSON-file-backed implementations of the replica store contracts."""

from __future__ import annotations

import uuid
from pathlib import Path

from warehouse.infrastructure.persistence.json_session import JsonSession
from warehouse.query.domain.model.product import Product
from warehouse.query.domain.repository.product_repository import (
    ProductRepository,
)
from warehouse.query.domain.repository.unit_of_work import UnitOfWork


def open_product_session(file_path: Path) -> JsonSession[Product]:
    return JsonSession(
        file_path,
        to_raw=_to_raw,
        to_domain=_to_domain,
        unique_fields=("code",),
    )


class JsonProductRepository(ProductRepository):

    def __init__(self, session: JsonSession[Product]) -> None:
        self._session = session

    def add(self, product: Product) -> None:
        self._session.add(str(product.id), product)

    def remove(self, product: Product) -> None:
        self._session.remove(str(product.id))

    def get_by_id(self, product_id: uuid.UUID) -> Product | None:
        return self._session.get(str(product_id))

    def get_by_id_detached(self, product_id: uuid.UUID) -> Product | None:
        return self._session.get_detached(str(product_id))

    def get_by_code(self, code: str) -> Product | None:
        return self._session.find_one(lambda raw: raw["code"] == code)

    def list(self) -> list[Product]:
        return self._session.all()

    def list_detached(self) -> list[Product]:
        return self._session.all_detached()


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, session: JsonSession[Product]) -> None:
        self._session = session

    def commit(self) -> None:
        self._session.commit()


# --- Serialization ------------------------------------------------------------


def _to_raw(product: Product) -> dict:
    return {
        "id": str(product.id),
        "code": product.code,
        "stock": product.stock,
    }


def _to_domain(raw: dict) -> Product:
    return Product(
        id=uuid.UUID(raw["id"]),
        code=raw["code"],
        stock=raw.get("stock", 0),
    )
