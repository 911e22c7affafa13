"""Reglas de autorizacion de escaneos y clasificacion de estado."""

from __future__ import annotations

from dataclasses import replace

from servidor.domain.models import Product, ProductStatus


def classify_status(quantity: int, current_scans: int, scan_limit: int) -> ProductStatus:
    """Clasifica el estado de un producto a partir de stock y escaneos.

    ``SOLD_OUT`` tiene precedencia cuando se cumplen ambas condiciones.
    """
    scan_limit_reached = current_scans >= scan_limit
    no_stock = quantity <= 0

    if scan_limit_reached and no_stock:
        return ProductStatus.SOLD_OUT
    if scan_limit_reached:
        return ProductStatus.SCAN_LIMIT_REACHED
    if no_stock:
        return ProductStatus.OUT_OF_STOCK
    return ProductStatus.AVAILABLE


def status_of(product: Product) -> ProductStatus:
    """Clasifica el estado actual de un producto."""
    return classify_status(product.quantity, product.current_scans, product.scan_limit)


def is_scan_allowed(product: Product) -> bool:
    """Indica si un nuevo escaneo puede aceptarse."""
    return product.current_scans < product.scan_limit and product.quantity > 0


def rejection_reason(product: Product) -> ProductStatus | None:
    """Retorna la condicion que bloquea el escaneo, o None si esta permitido."""
    if is_scan_allowed(product):
        return None
    return status_of(product)


def authorize_and_apply(product: Product) -> tuple[Product, bool]:
    """Aplica un escaneo si esta permitido.

    Si se rechaza, retorna el mismo registro sin cambios. El llamador debe
    ejecutar esta funcion dentro de la seccion critica del producto.
    """
    if not is_scan_allowed(product):
        return product, False

    updated = replace(
        product,
        quantity=product.quantity - 1,
        current_scans=product.current_scans + 1,
    )
    return updated, True


def display_scan_count(product: Product) -> int:
    """Contador de escaneo a mostrar tras un escaneo ya procesado.

    Bajo el limite muestra el numero que alcanzaria el proximo escaneo; al
    alcanzar el limite muestra el conteo real.
    """
    if product.current_scans >= product.scan_limit:
        return product.current_scans
    return product.current_scans + 1
