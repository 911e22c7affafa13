"""Renderizado de imagenes QR para los payloads de producto."""

from __future__ import annotations

from io import BytesIO

import qrcode

from parametros import QR_BORDER, QR_BOX_SIZE, QR_IMAGE_FORMAT


def render_qr_png(payload: str) -> bytes:
    """Genera la imagen QR de un payload y la retorna como bytes PNG."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=QR_BOX_SIZE,
        border=QR_BORDER,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buffer = BytesIO()
    img.save(buffer, format=QR_IMAGE_FORMAT)
    return buffer.getvalue()
