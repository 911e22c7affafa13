"""DTOs del protocolo cliente-servidor."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(slots=True)
class ProductDraft:
    """DTO para capturar datos del formulario de producto."""

    name: str
    location: str
    quantity: int
    price: float
    check_in_date: str
    check_out_date: str
    scan_limit: int
    current_scans: int | None = None


class NotificationLevel(str, Enum):
    """Nivel de un mensaje para el usuario."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(slots=True, frozen=True)
class Notification:
    """Mensaje de retroalimentacion para el usuario."""

    level: NotificationLevel
    message: str


@dataclass(slots=True)
class ProductRow:
    """Fila de la tabla de administracion de productos."""

    product_id: str
    name: str
    location: str
    quantity: int
    price: str
    check_in_date: str
    check_out_date: str
    scans: str
    status: str
    status_key: str


@dataclass(slots=True)
class ScanView:
    """Resultado de un escaneo listo para mostrar en el lector."""

    notification: Notification
    title: str = ""
    detail_lines: list[str] = field(default_factory=list)
    error_message: str = ""
    status_key: str = ""
