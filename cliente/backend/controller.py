"""Controlador principal del cliente."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from servidor.domain.models import Product, ProductStatus, ScanOutcome, ScanOutcomeKind
from servidor.services.scan_rules import rejection_reason, status_of
from shared.errors import AuthenticationError, ValidationError
from shared.protocol import (
    Notification,
    NotificationLevel,
    ProductDraft,
    ProductRow,
    ScanView,
)

from .gateway import ServerGateway
from .product_details_formatter import (
    format_admin_scans,
    format_date,
    format_price,
    format_scan_detail_lines,
    scan_limit_error_message,
    status_label,
)
from .qr_image import render_qr_png
from .session import AdminSession
from .validators import build_product_changes, validate_product_draft

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

LOGGER = logging.getLogger(__name__)

_REJECTION_MESSAGES: dict[ProductStatus, str] = {
    ProductStatus.SCAN_LIMIT_REACHED: "Limite de escaneos alcanzado para este producto.",
    ProductStatus.SOLD_OUT: "Limite de escaneos alcanzado para este producto.",
    ProductStatus.OUT_OF_STOCK: "Producto sin stock.",
}


class AppController:
    """Coordina acciones de UI y servicios de negocio."""

    def __init__(
        self,
        gateway: ServerGateway,
        session: AdminSession | None = None,
    ) -> None:
        self._gateway = gateway
        self._session = session if session is not None else AdminSession()
        self._token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        """Indica si la sesion abierta por este controller sigue activa."""
        return self._token is not None and self._session.token == self._token

    def _require_session(self) -> None:
        if self._token is None:
            raise AuthenticationError("Debes iniciar sesion como administrador.")
        self._session.require_active(self._token)

    def on_login(self, username: str, password: str) -> Notification:
        """Inicia sesion de administrador."""
        self._token = self._session.login(username.strip(), password)
        return Notification(NotificationLevel.SUCCESS, "Sesion iniciada correctamente.")

    def on_logout(self) -> Notification:
        """Cierra la sesion de administrador."""
        self._session.logout()
        self._token = None
        return Notification(NotificationLevel.SUCCESS, "Sesion cerrada correctamente.")

    def on_add_product(self, draft: ProductDraft) -> Product:
        """Valida el formulario y crea un producto."""
        self._require_session()
        product_fields = validate_product_draft(draft)
        product = self._gateway.add_product(product_fields)
        LOGGER.info("Producto creado desde UI: id=%s", product.id)
        return product

    def on_update_product(self, product_id: str, draft: ProductDraft) -> Product:
        """Valida el formulario de edicion y actualiza el producto."""
        self._require_session()
        changes = build_product_changes(draft)
        product = self._gateway.update_product(product_id, changes)
        if product is None:
            raise ValidationError(f"El producto {product_id} ya no existe.")
        return product

    def on_delete_product(self, product_id: str) -> None:
        """Elimina un producto."""
        self._require_session()
        self._gateway.delete_product(product_id)

    def get_product(self, product_id: str) -> Product | None:
        """Busca un producto por ID."""
        return self._gateway.get_product(product_id)

    def build_draft(self, product: Product) -> ProductDraft:
        """Construye el formulario de edicion con los datos actuales."""
        return ProductDraft(
            name=product.name,
            location=product.location,
            quantity=product.quantity,
            price=product.price,
            check_in_date=format_date(product.check_in_date),
            check_out_date=format_date(product.check_out_date),
            scan_limit=product.scan_limit,
            current_scans=product.current_scans,
        )

    def list_product_rows(self) -> list[ProductRow]:
        """Lista productos como filas de la tabla de administracion."""
        self._require_session()
        rows: list[ProductRow] = []
        for product in self._gateway.list_products():
            status = status_of(product)
            rows.append(
                ProductRow(
                    product_id=product.id,
                    name=product.name,
                    location=product.location,
                    quantity=product.quantity,
                    price=format_price(product.price),
                    check_in_date=format_date(product.check_in_date),
                    check_out_date=format_date(product.check_out_date),
                    scans=format_admin_scans(product),
                    status=status_label(status),
                    status_key=status.value,
                )
            )
        return rows

    def render_product_qr(self, product_id: str) -> bytes:
        """Retorna la imagen PNG del QR de un producto."""
        product = self._gateway.get_product(product_id)
        if product is None:
            raise ValidationError(f"El producto {product_id} ya no existe.")
        return render_qr_png(product.qr_payload)

    def on_scan_text(self, raw_text: str) -> ScanView:
        """Procesa un texto escaneado y arma la vista del resultado."""
        outcome = self._gateway.handle_scanned_text(raw_text)
        return self.build_scan_view(outcome)

    @staticmethod
    def build_notification(outcome: ScanOutcome) -> Notification:
        """Traduce un resultado de escaneo a un mensaje para el usuario."""
        if outcome.kind is ScanOutcomeKind.APPLIED:
            return Notification(NotificationLevel.SUCCESS, "Producto escaneado correctamente.")

        if outcome.kind is ScanOutcomeKind.REJECTED and outcome.product is not None:
            reason = rejection_reason(outcome.product)
            message = _REJECTION_MESSAGES.get(reason, "Escaneo rechazado.")
            return Notification(NotificationLevel.ERROR, message)

        if outcome.kind is ScanOutcomeKind.NOT_FOUND:
            return Notification(NotificationLevel.ERROR, "Producto no encontrado.")

        return Notification(NotificationLevel.ERROR, "Codigo QR invalido.")

    @classmethod
    def build_scan_view(cls, outcome: ScanOutcome) -> ScanView:
        """Arma la vista del lector para un resultado de escaneo."""
        notification = cls.build_notification(outcome)
        product = outcome.product
        if product is None:
            return ScanView(notification=notification)

        error_message = ""
        if product.current_scans >= product.scan_limit:
            error_message = scan_limit_error_message(product)

        return ScanView(
            notification=notification,
            title="Detalles del producto",
            detail_lines=format_scan_detail_lines(product),
            error_message=error_message,
            status_key=status_of(product).value,
        )

    def on_exit(
        self,
        app: QApplication | Callable[[], None] | None,
    ) -> None:
        """Cierra la aplicacion."""
        LOGGER.info("Accion ejecutada: salir")

        if callable(app):
            app()
            return

        if app is not None:
            app.quit()
