"""Inicializacion de la aplicacion de cliente."""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from cliente.backend.controller import AppController
from cliente.backend.gateway import LocalServerGateway
from cliente.backend.session import AdminSession
from cliente.frontend.main_window import MainWindow
from parametros import APP_NAME
from servidor.services.product_store import ProductStore

LOGGER = logging.getLogger(__name__)


def main() -> int:
    """Ejecuta la aplicacion grafica."""
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    store = ProductStore()
    LOGGER.info("Store de productos inicializado en memoria.")

    gateway = LocalServerGateway(store=store)
    controller = AppController(gateway=gateway, session=AdminSession())
    window = MainWindow(controller=controller)
    window.showMaximized()

    LOGGER.info("Aplicacion iniciada.")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
