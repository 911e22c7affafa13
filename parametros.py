"""Parametros globales del proyecto."""

from __future__ import annotations

import logging
import string

APP_NAME = "QR Inventory"

PRODUCT_ID_LENGTH = 9
PRODUCT_ID_ALPHABET = string.ascii_lowercase + string.digits

ADMIN_USERNAME = "Its_ayodhya"
ADMIN_PASSWORD = "Jayshreeram"
SESSION_TOKEN_BYTES = 24

QR_BOX_SIZE = 10
QR_BORDER = 4
QR_IMAGE_FORMAT = "PNG"

CURRENCY_SYMBOL = "₹"
DATE_FORMAT = "%Y-%m-%d"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
