"""Pagina del lector de codigos QR."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from shared.protocol import NotificationLevel, ScanView

if TYPE_CHECKING:
    from cliente.backend.controller import AppController

NOTIFICATION_COLORS: dict[NotificationLevel, str] = {
    NotificationLevel.SUCCESS: "#16a34a",
    NotificationLevel.ERROR: "#dc2626",
    NotificationLevel.INFO: "#2563eb",
}


class ScannerPage(QWidget):
    """Recibe texto de un lector QR tipo teclado y muestra el resultado."""

    def __init__(
        self,
        controller: AppController,
        on_back: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._on_back = on_back

        self._scan_input: QLineEdit
        self._notification_label: QLabel
        self._details_card: QFrame
        self._details_title: QLabel
        self._details_label: QLabel
        self._error_label: QLabel

        self._build_ui()
        self._apply_styles()

    def _build_ui(self) -> None:
        """Construye el campo de lectura y el panel de detalles."""
        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(24, 24, 24, 24)
        root_layout.setSpacing(14)

        title_label = QLabel("Escanear codigo QR", self)
        title_label.setObjectName("titleLabel")

        self._scan_input = QLineEdit(self)
        self._scan_input.setPlaceholderText("Apunta el lector al codigo QR o pega su contenido")
        self._scan_input.returnPressed.connect(self._on_scan_submitted)

        self._notification_label = QLabel("", self)
        self._notification_label.setObjectName("notificationLabel")

        self._details_card = QFrame(self)
        self._details_card.setObjectName("detailsCard")
        details_layout = QVBoxLayout(self._details_card)
        details_layout.setContentsMargins(20, 20, 20, 20)

        self._details_title = QLabel("", self._details_card)
        self._details_title.setObjectName("detailsTitle")
        self._details_label = QLabel("", self._details_card)
        self._details_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        self._error_label = QLabel("", self._details_card)
        self._error_label.setObjectName("errorLabel")
        self._error_label.setWordWrap(True)

        details_layout.addWidget(self._details_title)
        details_layout.addWidget(self._details_label)
        details_layout.addWidget(self._error_label)
        self._details_card.setVisible(False)

        buttons_layout = QHBoxLayout()
        back_button = QPushButton("Regresar", self)
        back_button.setObjectName("backButton")
        back_button.clicked.connect(self._on_back_clicked)
        buttons_layout.addStretch(1)
        buttons_layout.addWidget(back_button)

        root_layout.addWidget(title_label)
        root_layout.addWidget(self._scan_input)
        root_layout.addWidget(self._notification_label)
        root_layout.addWidget(self._details_card)
        root_layout.addStretch(1)
        root_layout.addLayout(buttons_layout)

    def _apply_styles(self) -> None:
        """Aplica estilos visuales consistentes con la app."""
        self.setStyleSheet(
            """
            QLabel#titleLabel, QLabel#detailsTitle {
                color: #20232a;
                font-family: "Segoe UI";
                font-size: 20px;
                font-weight: 700;
            }
            QLabel {
                font-family: "Segoe UI";
                font-size: 14px;
            }
            QLabel#errorLabel {
                color: #b91c1c;
                font-weight: 700;
            }
            QFrame#detailsCard {
                background-color: #ffffff;
                border: 1px solid #dbe2ea;
                border-radius: 14px;
            }
            QLineEdit {
                background-color: #f8fafc;
                border: 1px solid #d1d5db;
                border-radius: 8px;
                font-family: "Segoe UI";
                font-size: 14px;
                padding: 10px;
            }
            QPushButton#backButton {
                background-color: #e5e7eb;
                border: none;
                border-radius: 10px;
                color: #1f2937;
                font-family: "Segoe UI";
                font-weight: 600;
                min-height: 38px;
                min-width: 100px;
            }
            """
        )

    def reset(self) -> None:
        """Limpia el ultimo resultado y deja el campo listo para leer."""
        self._scan_input.clear()
        self._notification_label.clear()
        self._details_card.setVisible(False)
        self._scan_input.setFocus()

    def _on_scan_submitted(self) -> None:
        """Envia el texto leido al controller."""
        raw_text = self._scan_input.text()
        self._scan_input.clear()
        if not raw_text.strip():
            return

        self._show_view(self._controller.on_scan_text(raw_text))

    def _show_view(self, view: ScanView) -> None:
        """Muestra notificacion y detalles del ultimo escaneo."""
        color = NOTIFICATION_COLORS.get(view.notification.level, "#334155")
        self._notification_label.setStyleSheet(f"color: {color}; font-weight: 600;")
        self._notification_label.setText(view.notification.message)

        if not view.detail_lines:
            # Sin producto resuelto se conserva el ultimo panel mostrado.
            return

        self._details_title.setText(view.title)
        self._details_label.setText("\n".join(view.detail_lines))
        self._error_label.setText(view.error_message)
        self._error_label.setVisible(bool(view.error_message))
        self._details_card.setVisible(True)

    def _on_back_clicked(self) -> None:
        """Regresa al menu principal."""
        self._on_back()
