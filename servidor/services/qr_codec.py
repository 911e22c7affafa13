"""Codificacion y decodificacion del payload embebido en los QR de producto."""

from __future__ import annotations

import json
import math
from datetime import date
from typing import Any

from servidor.domain.models import ProductSnapshot
from shared.errors import DecodeError, DecodeErrorReason

# Claves del payload en el orden en que se serializan.
PAYLOAD_KEYS: tuple[str, ...] = (
    "id",
    "name",
    "location",
    "quantity",
    "price",
    "checkInDate",
    "checkOutDate",
    "scanLimit",
    "currentScans",
)


def encode_payload(snapshot: ProductSnapshot) -> str:
    """Serializa un snapshot de producto como texto JSON determinista."""
    data = {
        "id": snapshot.id,
        "name": snapshot.name,
        "location": snapshot.location,
        "quantity": snapshot.quantity,
        "price": snapshot.price,
        "checkInDate": _format_date(snapshot.check_in_date),
        "checkOutDate": _format_date(snapshot.check_out_date),
        "scanLimit": snapshot.scan_limit,
        "currentScans": snapshot.current_scans,
    }
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def decode_payload(payload: str | bytes | None) -> ProductSnapshot:
    """Parsea el texto leido de un QR y retorna el snapshot del producto.

    El payload proviene de un escaneo, por lo que puede contener cualquier
    texto. Todo contenido invalido termina en ``DecodeError``; nunca se
    propaga otra excepcion.
    """
    text = _as_text(payload)

    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise DecodeError(
            DecodeErrorReason.MALFORMED,
            "El contenido del QR no es JSON valido.",
        ) from exc

    if not isinstance(data, dict):
        raise DecodeError(
            DecodeErrorReason.MALFORMED,
            "El contenido del QR debe ser un objeto JSON.",
        )

    for key in PAYLOAD_KEYS:
        if key not in data:
            raise DecodeError(
                DecodeErrorReason.MISSING_FIELD,
                f"Falta el campo requerido en el QR: {key}",
                field=key,
            )

    product_id = data["id"]
    if not isinstance(product_id, str) or not product_id.strip():
        raise _malformed_field("id")

    return ProductSnapshot(
        id=product_id,
        name=_read_text(data, "name"),
        location=_read_text(data, "location"),
        quantity=_read_int(data, "quantity", minimum=0),
        price=_read_price(data, "price"),
        check_in_date=_read_date(data, "checkInDate"),
        check_out_date=_read_date(data, "checkOutDate"),
        scan_limit=_read_int(data, "scanLimit", minimum=1),
        current_scans=_read_int(data, "currentScans", minimum=0),
    )


def _as_text(payload: str | bytes | None) -> str:
    """Normaliza el payload recibido a texto."""
    if isinstance(payload, str):
        return payload

    if isinstance(payload, (bytes, bytearray)):
        try:
            return bytes(payload).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(
                DecodeErrorReason.MALFORMED,
                "El contenido del QR no es texto UTF-8.",
            ) from exc

    raise DecodeError(DecodeErrorReason.MALFORMED, "El QR no contiene texto.")


def _malformed_field(key: str) -> DecodeError:
    return DecodeError(
        DecodeErrorReason.MALFORMED,
        f"Valor invalido en el campo del QR: {key}",
        field=key,
    )


def _read_text(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise _malformed_field(key)
    return value


def _read_int(data: dict[str, Any], key: str, minimum: int) -> int:
    value = data[key]
    if isinstance(value, bool):
        raise _malformed_field(key)

    if isinstance(value, float):
        if not value.is_integer():
            raise _malformed_field(key)
        value = int(value)

    if not isinstance(value, int) or value < minimum:
        raise _malformed_field(key)
    return value


def _read_price(data: dict[str, Any], key: str) -> float:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _malformed_field(key)

    if isinstance(value, float) and not math.isfinite(value):
        raise _malformed_field(key)

    if value < 0:
        raise _malformed_field(key)
    return value


def _read_date(data: dict[str, Any], key: str) -> date | None:
    value = data[key]
    if value is None or value == "":
        return None

    if not isinstance(value, str):
        raise _malformed_field(key)

    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise _malformed_field(key) from exc


def _format_date(value: date | None) -> str:
    """Formatea una fecha como ISO; ``None`` se serializa como texto vacio."""
    if value is None:
        return ""
    return value.isoformat()
