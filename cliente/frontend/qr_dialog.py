"""Dialogo para visualizar el QR de un producto."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPixmap
from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)


class QrCodeDialog(QDialog):
    """Muestra la imagen QR generada para un producto."""

    def __init__(
        self,
        title: str,
        png_bytes: bytes,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._title = title.strip()
        self._pixmap = QPixmap()
        self._pixmap.loadFromData(png_bytes, "PNG")

        self.setWindowTitle("Codigo QR")
        self.setModal(True)

        self._build_ui()
        self.setStyleSheet(
            """
            QDialog {
                background-color: #ffffff;
            }
            QLabel#qrTitle {
                color: #334155;
                font-family: "Segoe UI";
                font-size: 15px;
                font-weight: 600;
            }
            QPushButton {
                background-color: #e5e7eb;
                border: none;
                border-radius: 10px;
                color: #1f2937;
                font-family: "Segoe UI";
                font-size: 13px;
                font-weight: 600;
                min-height: 36px;
                padding: 6px 12px;
            }
            """
        )

    def _build_ui(self) -> None:
        """Construye layout y widgets del dialogo."""
        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(18, 18, 18, 18)
        root_layout.setSpacing(12)

        title_label = QLabel(self._title, self)
        title_label.setObjectName("qrTitle")
        title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        image_label = QLabel(self)
        image_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        image_label.setPixmap(self._pixmap)

        buttons_layout = QHBoxLayout()
        close_button = QPushButton("Cerrar", self)
        close_button.clicked.connect(self.close)
        buttons_layout.addStretch(1)
        buttons_layout.addWidget(close_button)

        root_layout.addWidget(title_label)
        root_layout.addWidget(image_label)
        root_layout.addLayout(buttons_layout)
