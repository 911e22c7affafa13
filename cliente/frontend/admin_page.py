"""Pagina de administracion de productos."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QFrame,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QStackedWidget,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from cliente.frontend.dialogs import show_error, show_info, show_notification
from cliente.frontend.product_form_dialog import ProductFormDialog
from cliente.frontend.qr_dialog import QrCodeDialog
from shared.errors import ServiceError, ValidationError
from shared.protocol import ProductRow

if TYPE_CHECKING:
    from cliente.backend.controller import AppController

TABLE_HEADERS: tuple[str, ...] = (
    "Nombre",
    "Ubicacion",
    "Cantidad",
    "Precio",
    "Ingreso",
    "Salida",
    "Escaneos",
    "Estado",
)

STATUS_COLORS: dict[str, str] = {
    "available": "#16a34a",
    "scan_limit_reached": "#ca8a04",
    "out_of_stock": "#dc2626",
    "sold_out": "#dc2626",
}


class AdminPage(QWidget):
    """Login de administrador y tabla de productos."""

    def __init__(
        self,
        controller: AppController,
        on_back: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._on_back = on_back
        self._rows: list[ProductRow] = []

        self._stack: QStackedWidget
        self._login_view: QWidget
        self._products_view: QWidget
        self._username_input: QLineEdit
        self._password_input: QLineEdit
        self._table: QTableWidget

        self._build_ui()
        self._apply_styles()

    def _build_ui(self) -> None:
        """Construye las vistas de login y productos."""
        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(24, 24, 24, 24)

        self._stack = QStackedWidget(self)
        self._login_view = self._build_login_view()
        self._products_view = self._build_products_view()
        self._stack.addWidget(self._login_view)
        self._stack.addWidget(self._products_view)

        root_layout.addWidget(self._stack)

    def _build_login_view(self) -> QWidget:
        """Construye el formulario de inicio de sesion."""
        view = QWidget(self)
        layout = QVBoxLayout(view)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        card = QFrame(view)
        card.setObjectName("adminCard")
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(32, 32, 32, 32)
        card_layout.setSpacing(12)

        title_label = QLabel("Acceso de administrador", card)
        title_label.setObjectName("titleLabel")
        title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._username_input = QLineEdit(card)
        self._username_input.setPlaceholderText("Usuario")
        self._password_input = QLineEdit(card)
        self._password_input.setPlaceholderText("Contrasena")
        self._password_input.setEchoMode(QLineEdit.EchoMode.Password)
        self._password_input.returnPressed.connect(self._on_login_clicked)

        login_button = QPushButton("Ingresar", card)
        back_button = QPushButton("Regresar", card)
        back_button.setObjectName("backButton")
        login_button.clicked.connect(self._on_login_clicked)
        back_button.clicked.connect(self._on_back_clicked)

        card_layout.addWidget(title_label)
        card_layout.addWidget(self._username_input)
        card_layout.addWidget(self._password_input)
        card_layout.addWidget(login_button)
        card_layout.addWidget(back_button)

        layout.addWidget(card)
        return view

    def _build_products_view(self) -> QWidget:
        """Construye la tabla de productos y sus acciones."""
        view = QWidget(self)
        layout = QVBoxLayout(view)
        layout.setSpacing(12)

        title_label = QLabel("Productos", view)
        title_label.setObjectName("titleLabel")

        self._table = QTableWidget(0, len(TABLE_HEADERS), view)
        self._table.setHorizontalHeaderLabels(TABLE_HEADERS)
        self._table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self._table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self._table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self._table.verticalHeader().setVisible(False)
        self._table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)

        buttons_layout = QHBoxLayout()
        buttons_layout.setSpacing(10)

        add_button = QPushButton("Agregar", view)
        edit_button = QPushButton("Editar", view)
        delete_button = QPushButton("Eliminar", view)
        delete_button.setObjectName("dangerButton")
        qr_button = QPushButton("Ver QR", view)
        logout_button = QPushButton("Cerrar sesion", view)
        logout_button.setObjectName("backButton")
        back_button = QPushButton("Regresar", view)
        back_button.setObjectName("backButton")

        add_button.clicked.connect(self._on_add_clicked)
        edit_button.clicked.connect(self._on_edit_clicked)
        delete_button.clicked.connect(self._on_delete_clicked)
        qr_button.clicked.connect(self._on_qr_clicked)
        logout_button.clicked.connect(self._on_logout_clicked)
        back_button.clicked.connect(self._on_back_clicked)

        for button in (add_button, edit_button, delete_button, qr_button):
            buttons_layout.addWidget(button)
        buttons_layout.addStretch(1)
        buttons_layout.addWidget(logout_button)
        buttons_layout.addWidget(back_button)

        layout.addWidget(title_label)
        layout.addWidget(self._table)
        layout.addLayout(buttons_layout)
        return view

    def _apply_styles(self) -> None:
        """Aplica estilos visuales consistentes con la app."""
        self.setStyleSheet(
            """
            QFrame#adminCard {
                background-color: #ffffff;
                border-radius: 16px;
                min-width: 380px;
            }
            QLabel#titleLabel {
                color: #20232a;
                font-family: "Segoe UI";
                font-size: 22px;
                font-weight: 700;
            }
            QLineEdit {
                background-color: #f8fafc;
                border: 1px solid #d1d5db;
                border-radius: 8px;
                color: #111827;
                font-family: "Segoe UI";
                font-size: 13px;
                padding: 10px;
            }
            QTableWidget {
                background-color: #ffffff;
                border: 1px solid #dbe2ea;
                border-radius: 10px;
                font-family: "Segoe UI";
                font-size: 13px;
            }
            QPushButton {
                background-color: #2563eb;
                border: none;
                border-radius: 10px;
                color: #ffffff;
                font-family: "Segoe UI";
                font-size: 13px;
                font-weight: 600;
                min-height: 38px;
                min-width: 96px;
                padding: 6px 12px;
            }
            QPushButton:hover {
                background-color: #1d4ed8;
            }
            QPushButton#dangerButton {
                background-color: #C80202;
            }
            QPushButton#dangerButton:hover {
                background-color: #A30202;
            }
            QPushButton#backButton {
                background-color: #e5e7eb;
                color: #1f2937;
            }
            QPushButton#backButton:hover {
                background-color: #d1d5db;
            }
            """
        )

    def refresh(self) -> None:
        """Muestra login o la tabla segun el estado de la sesion."""
        if not self._controller.is_authenticated:
            self._password_input.clear()
            self._stack.setCurrentWidget(self._login_view)
            self._username_input.setFocus()
            return

        self._reload_table()
        self._stack.setCurrentWidget(self._products_view)

    def _reload_table(self) -> None:
        """Recarga las filas de la tabla desde el controller."""
        try:
            self._rows = self._controller.list_product_rows()
        except (ValidationError, ServiceError) as exc:
            show_error(self, "Error al listar productos", str(exc))
            self._rows = []

        self._table.setRowCount(len(self._rows))
        for row_index, row in enumerate(self._rows):
            values = (
                row.name,
                row.location,
                str(row.quantity),
                row.price,
                row.check_in_date,
                row.check_out_date,
                row.scans,
                row.status,
            )
            for column_index, value in enumerate(values):
                self._table.setItem(row_index, column_index, QTableWidgetItem(value))

            status_item = self._table.item(row_index, len(values) - 1)
            status_item.setForeground(QColor(STATUS_COLORS.get(row.status_key, "#6b7280")))

    def _selected_product_id(self) -> str | None:
        """Retorna el ID del producto seleccionado o None."""
        row_index = self._table.currentRow()
        if row_index < 0 or row_index >= len(self._rows):
            show_info(self, "Productos", "Selecciona un producto de la tabla.")
            return None
        return self._rows[row_index].product_id

    def _on_login_clicked(self) -> None:
        """Valida credenciales con el controller."""
        try:
            notification = self._controller.on_login(
                self._username_input.text(),
                self._password_input.text(),
            )
        except ValidationError as exc:
            show_error(self, "Acceso denegado", str(exc))
            return

        show_notification(self, "Administracion", notification)
        self.refresh()

    def _on_logout_clicked(self) -> None:
        """Cierra la sesion y vuelve al login."""
        notification = self._controller.on_logout()
        show_notification(self, "Administracion", notification)
        self.refresh()

    def _on_add_clicked(self) -> None:
        """Abre el formulario para crear un producto."""
        dialog = ProductFormDialog(controller=self._controller, parent=self)
        if dialog.exec():
            self._reload_table()

    def _on_edit_clicked(self) -> None:
        """Abre el formulario de edicion del producto seleccionado."""
        product_id = self._selected_product_id()
        if product_id is None:
            return

        product = self._controller.get_product(product_id)
        if product is None:
            show_error(self, "Editar producto", "El producto ya no existe.")
            self._reload_table()
            return

        dialog = ProductFormDialog(
            controller=self._controller,
            product=product,
            parent=self,
        )
        if dialog.exec():
            self._reload_table()

    def _on_delete_clicked(self) -> None:
        """Elimina el producto seleccionado tras confirmacion."""
        product_id = self._selected_product_id()
        if product_id is None:
            return

        answer = QMessageBox.question(
            self,
            "Eliminar producto",
            "Se eliminara el producto seleccionado. Deseas continuar?",
        )
        if answer != QMessageBox.StandardButton.Yes:
            return

        try:
            self._controller.on_delete_product(product_id)
        except (ValidationError, ServiceError) as exc:
            show_error(self, "Error al eliminar producto", str(exc))
            return

        show_info(self, "Producto eliminado", "Producto eliminado correctamente.")
        self._reload_table()

    def _on_qr_clicked(self) -> None:
        """Muestra el QR del producto seleccionado."""
        product_id = self._selected_product_id()
        if product_id is None:
            return

        product = self._controller.get_product(product_id)
        try:
            png_bytes = self._controller.render_product_qr(product_id)
        except (ValidationError, ServiceError) as exc:
            show_error(self, "Error al generar QR", str(exc))
            return

        title = product.name if product is not None else product_id
        QrCodeDialog(title=title, png_bytes=png_bytes, parent=self).exec()

    def _on_back_clicked(self) -> None:
        """Regresa al menu principal."""
        self._on_back()
