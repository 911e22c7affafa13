"""Pure formatters for product details shown in the admin table and scanner."""

from __future__ import annotations

import math
from datetime import date

from parametros import CURRENCY_SYMBOL
from servidor.domain.models import Product, ProductStatus
from servidor.services.scan_rules import display_scan_count, status_of

STATUS_LABELS: dict[ProductStatus, str] = {
    ProductStatus.AVAILABLE: "Disponible",
    ProductStatus.SCAN_LIMIT_REACHED: "Limite de escaneos alcanzado",
    ProductStatus.OUT_OF_STOCK: "Sin stock",
    ProductStatus.SOLD_OUT: "Agotado",
}


def status_label(status: ProductStatus) -> str:
    """Returns the display text for a status."""
    return STATUS_LABELS.get(status, "Desconocido")


def format_price(price: float) -> str:
    """Formats a price with currency symbol, no trailing zeros."""
    return f"{CURRENCY_SYMBOL}{_format_number(price)}"


def format_date(value: date | None) -> str:
    """Formats an optional date as ISO text."""
    if value is None:
        return ""
    return value.isoformat()


def format_scan_count(product: Product) -> str:
    """Builds ``"n / limite"`` using the scanner display counter."""
    return f"{display_scan_count(product)} / {product.scan_limit}"


def format_admin_scans(product: Product) -> str:
    """Builds the real scan counter shown in the admin table."""
    return f"{product.current_scans} / {product.scan_limit}"


def scan_limit_error_message(product: Product) -> str:
    """Message shown instead of details when the scan limit was reached."""
    return (
        f"Se alcanzo el maximo de escaneos permitidos ({product.scan_limit}) "
        "para este producto."
    )


def format_scan_detail_lines(product: Product) -> list[str]:
    """Builds the scanner panel as ``Campo: valor`` lines.

    Once the scan limit is reached only the name is shown.
    """
    lines = [f"Nombre: {product.name}"]
    if product.current_scans >= product.scan_limit:
        return lines

    lines.extend(
        [
            f"Ubicacion: {product.location}",
            f"Precio: {format_price(product.price)}",
            f"Estado: {status_label(status_of(product))}",
            f"Cantidad restante: {max(0, product.quantity)}",
            f"Escaneos: {format_scan_count(product)}",
            f"Fecha de ingreso: {format_date(product.check_in_date)}",
            f"Fecha de salida: {format_date(product.check_out_date)}",
        ]
    )
    return lines


def _format_number(value: float) -> str:
    """Formats number with at most two decimals and no trailing zeros."""
    rounded_integer = round(value)
    if math.isclose(value, rounded_integer, abs_tol=1e-9):
        return str(int(rounded_integer))

    formatted = f"{value:.2f}".rstrip("0").rstrip(".")
    if formatted == "-0":
        return "0"
    return formatted
