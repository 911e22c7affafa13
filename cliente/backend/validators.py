"""Validaciones para entradas del cliente."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any

from parametros import DATE_FORMAT
from servidor.domain.models import ProductFields
from shared.errors import ValidationError
from shared.protocol import ProductDraft


def parse_optional_date(value: str, label: str) -> date | None:
    """Parsea una fecha ``YYYY-MM-DD``; texto vacio significa sin fecha."""
    text = (value or "").strip()
    if not text:
        return None

    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as exc:
        raise ValidationError(f"{label} debe tener formato AAAA-MM-DD.") from exc


def validate_product_draft(draft: ProductDraft) -> ProductFields:
    """Valida el formulario de producto y retorna los campos normalizados."""
    errors: list[str] = []

    name = draft.name.strip()
    if not name:
        errors.append("Nombre")
    if draft.quantity < 0:
        errors.append("Cantidad (no puede ser negativa)")
    if not math.isfinite(draft.price) or draft.price < 0:
        errors.append("Precio (no puede ser negativo)")
    if draft.scan_limit < 1:
        errors.append("Limite de escaneos (debe ser al menos 1)")
    if draft.current_scans is not None and draft.current_scans < 0:
        errors.append("Escaneos actuales (no puede ser negativo)")

    check_in_date: date | None = None
    check_out_date: date | None = None
    try:
        check_in_date = parse_optional_date(draft.check_in_date, "Fecha de ingreso")
    except ValidationError:
        errors.append("Fecha de ingreso (formato AAAA-MM-DD)")
    try:
        check_out_date = parse_optional_date(draft.check_out_date, "Fecha de salida")
    except ValidationError:
        errors.append("Fecha de salida (formato AAAA-MM-DD)")

    if errors:
        raise ValidationError("Revisa los campos: " + ", ".join(errors))

    return ProductFields(
        name=name,
        location=draft.location.strip(),
        quantity=draft.quantity,
        price=draft.price,
        check_in_date=check_in_date,
        check_out_date=check_out_date,
        scan_limit=draft.scan_limit,
    )


def build_product_changes(draft: ProductDraft) -> dict[str, Any]:
    """Valida un formulario de edicion y retorna los cambios a aplicar."""
    product_fields = validate_product_draft(draft)
    changes: dict[str, Any] = {
        "name": product_fields.name,
        "location": product_fields.location,
        "quantity": product_fields.quantity,
        "price": product_fields.price,
        "check_in_date": product_fields.check_in_date,
        "check_out_date": product_fields.check_out_date,
        "scan_limit": product_fields.scan_limit,
    }
    if draft.current_scans is not None:
        changes["current_scans"] = draft.current_scans
    return changes
