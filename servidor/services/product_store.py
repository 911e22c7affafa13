"""Almacen en memoria de productos, unico dueno de sus mutaciones."""

from __future__ import annotations

import logging
import secrets
import threading
from collections.abc import Callable
from dataclasses import fields, replace
from datetime import date
from typing import Any

from parametros import PRODUCT_ID_ALPHABET, PRODUCT_ID_LENGTH
from servidor.domain.models import Product, ProductFields, ProductSnapshot
from shared.errors import ValidationError

from .qr_codec import encode_payload
from .scan_rules import authorize_and_apply

LOGGER = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = frozenset({"id", "qr_payload"})
_PRODUCT_FIELDS = frozenset(field.name for field in fields(Product))


_TEXT_FIELDS = frozenset({"name", "location"})
_COUNTER_FIELDS = frozenset({"quantity", "scan_limit", "current_scans"})
_DATE_FIELDS = frozenset({"check_in_date", "check_out_date"})


def generate_product_id(length: int = PRODUCT_ID_LENGTH) -> str:
    """Genera un ID alfanumerico aleatorio."""
    return "".join(secrets.choice(PRODUCT_ID_ALPHABET) for _ in range(length))


def _is_valid_change(name: str, value: Any) -> bool:
    if name in _TEXT_FIELDS:
        return isinstance(value, str)
    if name in _COUNTER_FIELDS:
        return isinstance(value, int) and not isinstance(value, bool)
    if name == "price":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if name in _DATE_FIELDS:
        return value is None or isinstance(value, date)
    return True


def _validate_changes(changes: dict[str, Any]) -> None:
    """Rechaza campos desconocidos o valores de tipo incorrecto."""
    unknown = sorted(set(changes) - _PRODUCT_FIELDS)
    if unknown:
        raise ValidationError("Campos de producto desconocidos: " + ", ".join(unknown))

    invalid = sorted(name for name, value in changes.items() if not _is_valid_change(name, value))
    if invalid:
        raise ValidationError("Tipos invalidos en campos de producto: " + ", ".join(invalid))


class ProductStore:
    """Coleccion de productos indexada por ID.

    Toda lectura-verificacion-escritura se ejecuta bajo un mismo lock, de modo
    que dos escaneos concurrentes del mismo producto no pueden pasar ambos la
    validacion.
    """

    def __init__(self, id_factory: Callable[[], str] = generate_product_id) -> None:
        self._products: dict[str, Product] = {}
        self._id_factory = id_factory
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        with self._lock:
            return product_id in self._products

    def add(self, product_fields: ProductFields) -> Product:
        """Crea un producto con ID nuevo y payload QR fijo con cero escaneos."""
        product_id = self._id_factory()
        snapshot = ProductSnapshot(
            id=product_id,
            name=product_fields.name,
            location=product_fields.location,
            quantity=product_fields.quantity,
            price=product_fields.price,
            check_in_date=product_fields.check_in_date,
            check_out_date=product_fields.check_out_date,
            scan_limit=product_fields.scan_limit,
            current_scans=0,
        )
        product = Product(
            id=product_id,
            name=snapshot.name,
            location=snapshot.location,
            quantity=snapshot.quantity,
            price=snapshot.price,
            check_in_date=snapshot.check_in_date,
            check_out_date=snapshot.check_out_date,
            scan_limit=snapshot.scan_limit,
            current_scans=0,
            qr_payload=encode_payload(snapshot),
        )

        with self._lock:
            self._products[product_id] = product

        LOGGER.info("Producto agregado: id=%s, nombre=%s", product_id, product.name)
        return product

    def remove(self, product_id: str) -> None:
        """Elimina un producto; no hace nada si no existe."""
        with self._lock:
            removed = self._products.pop(product_id, None)

        if removed is None:
            LOGGER.debug("Eliminacion ignorada, producto inexistente: %s", product_id)
            return
        LOGGER.info("Producto eliminado: id=%s", product_id)

    def update(self, product_id: str, changes: dict[str, Any]) -> Product | None:
        """Fusiona cambios en un producto existente.

        ``id`` y ``qr_payload`` nunca se modifican. Retorna el registro
        actualizado o None si el producto no existe; los cambios solo se
        validan cuando el producto existe.
        """
        mutable_changes = {
            name: value for name, value in changes.items() if name not in _IMMUTABLE_FIELDS
        }

        with self._lock:
            current = self._products.get(product_id)
            if current is None:
                LOGGER.debug("Actualizacion ignorada, producto inexistente: %s", product_id)
                return None

            _validate_changes(mutable_changes)
            ignored = sorted(set(changes) & _IMMUTABLE_FIELDS)
            if ignored:
                LOGGER.warning(
                    "Campos inmutables ignorados en actualizacion: %s", ", ".join(ignored)
                )
            updated = replace(current, **mutable_changes)
            self._products[product_id] = updated

        LOGGER.info(
            "Producto actualizado: id=%s, campos=%s",
            product_id,
            ", ".join(sorted(mutable_changes)) or "-",
        )
        return updated

    def get(self, product_id: str) -> Product | None:
        """Busca un producto por ID."""
        with self._lock:
            return self._products.get(product_id)

    def list_all(self) -> list[Product]:
        """Lista los productos en orden de creacion."""
        with self._lock:
            return list(self._products.values())

    def attempt_scan(self, product_id: str) -> tuple[Product, bool] | None:
        """Aplica un escaneo de forma atomica.

        Retorna el registro resultante y si el escaneo fue aceptado, o None si
        el producto no existe.
        """
        with self._lock:
            current = self._products.get(product_id)
            if current is None:
                return None

            product, accepted = authorize_and_apply(current)
            if accepted:
                self._products[product_id] = product

        return product, accepted

    def apply_scan(self, product_id: str) -> Product | None:
        """Aplica un escaneo y retorna el registro resultante, o None."""
        result = self.attempt_scan(product_id)
        if result is None:
            return None

        product, _ = result
        return product
