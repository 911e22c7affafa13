"""Helpers de dialogos para frontend."""

from __future__ import annotations

from PyQt6.QtWidgets import QMessageBox, QWidget

from shared.protocol import Notification, NotificationLevel


def show_info(parent: QWidget | None, title: str, message: str) -> None:
    """Muestra un dialogo informativo."""
    QMessageBox.information(parent, title, message)


def show_error(parent: QWidget | None, title: str, message: str) -> None:
    """Muestra un dialogo de error."""
    QMessageBox.critical(parent, title, message)


def show_notification(parent: QWidget | None, title: str, notification: Notification) -> None:
    """Muestra una notificacion del controller segun su nivel."""
    if notification.level is NotificationLevel.ERROR:
        show_error(parent, title, notification.message)
        return
    show_info(parent, title, notification.message)
