"""Dialogo para crear o editar productos."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QDialog,
    QDoubleSpinBox,
    QFormLayout,
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from cliente.frontend.dialogs import show_error, show_info
from shared.errors import ServiceError, ValidationError
from shared.protocol import ProductDraft

if TYPE_CHECKING:
    from cliente.backend.controller import AppController
    from servidor.domain.models import Product

_MAX_COUNTER = 1_000_000
_MAX_PRICE = 1_000_000_000.0


class ProductFormDialog(QDialog):
    """Dialogo modal de alta/edicion de producto."""

    def __init__(
        self,
        controller: AppController,
        product: Product | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._product = product

        self._name_input: QLineEdit
        self._location_input: QLineEdit
        self._quantity_input: QSpinBox
        self._price_input: QDoubleSpinBox
        self._check_in_input: QLineEdit
        self._check_out_input: QLineEdit
        self._scan_limit_input: QSpinBox
        self._current_scans_input: QSpinBox | None = None

        title = "Editar producto" if product is not None else "Agregar producto"
        self.setWindowTitle(title)
        self.setModal(True)
        self.setMinimumSize(460, 420)

        self._build_ui(title)
        self._apply_styles()
        if product is not None:
            self._load_draft(self._controller.build_draft(product))

    def _build_ui(self, title: str) -> None:
        """Construye widgets del dialogo."""
        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(18, 18, 18, 18)

        card = QFrame(self)
        card.setObjectName("dialogCard")
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(24, 24, 24, 24)
        card_layout.setSpacing(12)

        title_label = QLabel(title, card)
        title_label.setObjectName("titleLabel")
        title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        form_layout = QFormLayout()
        form_layout.setSpacing(10)

        self._name_input = QLineEdit(card)
        self._location_input = QLineEdit(card)

        self._quantity_input = QSpinBox(card)
        self._quantity_input.setRange(0, _MAX_COUNTER)

        self._price_input = QDoubleSpinBox(card)
        self._price_input.setRange(0.0, _MAX_PRICE)
        self._price_input.setDecimals(2)

        self._check_in_input = QLineEdit(card)
        self._check_in_input.setPlaceholderText("AAAA-MM-DD")
        self._check_out_input = QLineEdit(card)
        self._check_out_input.setPlaceholderText("AAAA-MM-DD")

        self._scan_limit_input = QSpinBox(card)
        self._scan_limit_input.setRange(1, _MAX_COUNTER)
        self._scan_limit_input.setValue(1)

        form_layout.addRow("Nombre", self._name_input)
        form_layout.addRow("Ubicacion", self._location_input)
        form_layout.addRow("Cantidad", self._quantity_input)
        form_layout.addRow("Precio", self._price_input)
        form_layout.addRow("Fecha de ingreso", self._check_in_input)
        form_layout.addRow("Fecha de salida", self._check_out_input)
        form_layout.addRow("Limite de escaneos", self._scan_limit_input)

        if self._product is not None:
            self._current_scans_input = QSpinBox(card)
            self._current_scans_input.setRange(0, _MAX_COUNTER)
            form_layout.addRow("Escaneos actuales", self._current_scans_input)

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch(1)

        cancel_button = QPushButton("Cancelar", card)
        cancel_button.setObjectName("cancelButton")
        save_button = QPushButton("Guardar", card)

        cancel_button.clicked.connect(self.reject)
        save_button.clicked.connect(self._on_save_clicked)

        buttons_layout.addWidget(cancel_button)
        buttons_layout.addWidget(save_button)

        card_layout.addWidget(title_label)
        card_layout.addLayout(form_layout)
        card_layout.addLayout(buttons_layout)

        shadow = QGraphicsDropShadowEffect(card)
        shadow.setBlurRadius(30)
        shadow.setOffset(0, 6)
        shadow.setColor(QColor(0, 0, 0, 35))
        card.setGraphicsEffect(shadow)

        root_layout.addWidget(card)
        self._name_input.setFocus()

    def _apply_styles(self) -> None:
        """Aplica estilos visuales consistentes con la app."""
        self.setStyleSheet(
            """
            QDialog {
                background-color: #eef1f4;
            }
            QFrame#dialogCard {
                background-color: #ffffff;
                border-radius: 16px;
            }
            QLabel#titleLabel {
                color: #20232a;
                font-family: "Segoe UI";
                font-size: 22px;
                font-weight: 700;
            }
            QLabel {
                color: #334155;
                font-family: "Segoe UI";
                font-size: 13px;
            }
            QLineEdit, QSpinBox, QDoubleSpinBox {
                background-color: #f8fafc;
                border: 1px solid #d1d5db;
                border-radius: 8px;
                color: #111827;
                font-family: "Segoe UI";
                font-size: 13px;
                padding: 8px;
            }
            QLineEdit:focus, QSpinBox:focus, QDoubleSpinBox:focus {
                border: 1px solid #2563eb;
                background-color: #ffffff;
            }
            QPushButton {
                background-color: #2563eb;
                border: none;
                border-radius: 10px;
                color: #ffffff;
                font-family: "Segoe UI";
                font-size: 13px;
                font-weight: 600;
                min-height: 40px;
                min-width: 100px;
                padding: 8px 12px;
            }
            QPushButton:hover {
                background-color: #1d4ed8;
            }
            QPushButton#cancelButton {
                background-color: #e5e7eb;
                color: #1f2937;
            }
            QPushButton#cancelButton:hover {
                background-color: #d1d5db;
            }
            """
        )

    def _load_draft(self, draft: ProductDraft) -> None:
        """Carga los valores actuales del producto en el formulario."""
        self._name_input.setText(draft.name)
        self._location_input.setText(draft.location)
        self._quantity_input.setValue(draft.quantity)
        self._price_input.setValue(draft.price)
        self._check_in_input.setText(draft.check_in_date)
        self._check_out_input.setText(draft.check_out_date)
        self._scan_limit_input.setValue(draft.scan_limit)
        if self._current_scans_input is not None and draft.current_scans is not None:
            self._current_scans_input.setValue(draft.current_scans)

    def _collect_data(self) -> ProductDraft:
        """Construye el DTO con los valores del formulario."""
        current_scans = None
        if self._current_scans_input is not None:
            current_scans = self._current_scans_input.value()

        return ProductDraft(
            name=self._name_input.text(),
            location=self._location_input.text(),
            quantity=self._quantity_input.value(),
            price=self._price_input.value(),
            check_in_date=self._check_in_input.text(),
            check_out_date=self._check_out_input.text(),
            scan_limit=self._scan_limit_input.value(),
            current_scans=current_scans,
        )

    def _on_save_clicked(self) -> None:
        """Valida y guarda el producto usando el controller."""
        data = self._collect_data()
        try:
            if self._product is None:
                product = self._controller.on_add_product(data)
                message = "Producto agregado correctamente."
            else:
                product = self._controller.on_update_product(self._product.id, data)
                message = "Producto actualizado correctamente."
        except (ValidationError, ServiceError) as exc:
            show_error(self, "Error al guardar producto", str(exc))
            return

        show_info(self, "Producto guardado", f"{message}\nID: {product.id}")
        self.accept()
