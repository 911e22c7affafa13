"""Modelos de dominio de inventario."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from shared.errors import DecodeError


class ProductStatus(str, Enum):
    """Estado derivado de un producto, nunca almacenado."""

    AVAILABLE = "available"
    SCAN_LIMIT_REACHED = "scan_limit_reached"
    OUT_OF_STOCK = "out_of_stock"
    SOLD_OUT = "sold_out"


@dataclass(slots=True, frozen=True)
class ProductFields:
    """Campos administrables con los que se crea un producto."""

    name: str
    location: str
    quantity: int
    price: float
    check_in_date: date | None
    check_out_date: date | None
    scan_limit: int


@dataclass(slots=True, frozen=True)
class ProductSnapshot:
    """Campos identificatorios de un producto embebidos en su QR."""

    id: str
    name: str
    location: str
    quantity: int
    price: float
    check_in_date: date | None
    check_out_date: date | None
    scan_limit: int
    current_scans: int = 0


@dataclass(slots=True, frozen=True)
class Product:
    """Representa un producto en inventario.

    Los registros son inmutables: el store reemplaza el registro completo en
    cada actualizacion o escaneo aceptado. ``qr_payload`` se calcula una sola
    vez al crear el producto y nunca se regenera.
    """

    id: str
    name: str
    location: str
    quantity: int
    price: float
    check_in_date: date | None
    check_out_date: date | None
    scan_limit: int
    current_scans: int
    qr_payload: str

    def snapshot(self) -> ProductSnapshot:
        """Retorna los campos identificatorios con el estado actual."""
        return ProductSnapshot(
            id=self.id,
            name=self.name,
            location=self.location,
            quantity=self.quantity,
            price=self.price,
            check_in_date=self.check_in_date,
            check_out_date=self.check_out_date,
            scan_limit=self.scan_limit,
            current_scans=self.current_scans,
        )


class ScanOutcomeKind(str, Enum):
    """Resultado posible de procesar un texto escaneado."""

    APPLIED = "applied"
    REJECTED = "rejected"
    NOT_FOUND = "not_found"
    INVALID = "invalid"


@dataclass(slots=True, frozen=True)
class ScanOutcome:
    """Resultado estructurado de un escaneo para el llamador."""

    kind: ScanOutcomeKind
    product: Product | None = None
    product_id: str | None = None
    error: DecodeError | None = None

    @property
    def decoded(self) -> bool:
        """Indica si el payload pudo decodificarse."""
        return self.kind is not ScanOutcomeKind.INVALID
