"""Gateway de comunicacion cliente-servidor."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from servidor.domain.models import Product, ProductFields, ScanOutcome
from servidor.services.product_store import ProductStore
from servidor.services.scan_orchestrator import ScanOrchestrator
from shared.errors import ServiceError, ValidationError

LOGGER = logging.getLogger(__name__)


class ServerGateway(Protocol):
    """Interfaz de acceso del cliente a servicios del servidor."""

    def add_product(self, product_fields: ProductFields) -> Product:
        """Solicita la creacion de un producto."""

    def update_product(self, product_id: str, changes: dict[str, Any]) -> Product | None:
        """Solicita la actualizacion parcial de un producto."""

    def delete_product(self, product_id: str) -> None:
        """Solicita la eliminacion de un producto."""

    def get_product(self, product_id: str) -> Product | None:
        """Busca un producto por ID."""

    def list_products(self) -> list[Product]:
        """Lista todos los productos."""

    def handle_scanned_text(self, raw_text: str) -> ScanOutcome:
        """Procesa un texto leido desde un QR."""


class LocalServerGateway:
    """Implementacion local del gateway usando servicios en memoria."""

    def __init__(
        self,
        store: ProductStore | None = None,
        orchestrator: ScanOrchestrator | None = None,
    ) -> None:
        self._store = store if store is not None else ProductStore()
        self._orchestrator = (
            orchestrator if orchestrator is not None else ScanOrchestrator(self._store)
        )

    def add_product(self, product_fields: ProductFields) -> Product:
        """Crea un producto delegando en el store."""
        try:
            return self._store.add(product_fields)
        except (ServiceError, ValidationError):
            raise
        except Exception as exc:
            LOGGER.exception("Fallo inesperado al agregar producto.")
            raise ServiceError("No fue posible agregar el producto.") from exc

    def update_product(self, product_id: str, changes: dict[str, Any]) -> Product | None:
        """Actualiza un producto existente."""
        try:
            return self._store.update(product_id, changes)
        except (ServiceError, ValidationError):
            raise
        except Exception as exc:
            LOGGER.exception("Fallo inesperado al actualizar producto: %s", product_id)
            raise ServiceError("No fue posible actualizar el producto.") from exc

    def delete_product(self, product_id: str) -> None:
        """Elimina un producto; no falla si no existe."""
        try:
            self._store.remove(product_id)
        except Exception as exc:
            LOGGER.exception("Fallo inesperado al eliminar producto: %s", product_id)
            raise ServiceError("No fue posible eliminar el producto.") from exc

    def get_product(self, product_id: str) -> Product | None:
        """Busca un producto por ID."""
        return self._store.get(product_id)

    def list_products(self) -> list[Product]:
        """Lista los productos en orden de creacion."""
        return self._store.list_all()

    def handle_scanned_text(self, raw_text: str) -> ScanOutcome:
        """Delegacion directa: el orquestador no lanza excepciones."""
        return self._orchestrator.handle_scanned_text(raw_text)
