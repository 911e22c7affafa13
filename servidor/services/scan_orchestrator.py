"""Punto de entrada para textos decodificados por el lector QR."""

from __future__ import annotations

import logging

from servidor.domain.models import ScanOutcome, ScanOutcomeKind
from shared.errors import DecodeError

from .product_store import ProductStore
from .qr_codec import decode_payload

LOGGER = logging.getLogger(__name__)


class ScanOrchestrator:
    """Conecta codec, store y reglas de escaneo."""

    def __init__(self, store: ProductStore) -> None:
        self._store = store

    def handle_scanned_text(self, raw_text: str | bytes | None) -> ScanOutcome:
        """Procesa un texto escaneado y retorna el resultado estructurado.

        Nunca lanza excepciones: payload invalido, producto inexistente y
        escaneo rechazado se representan como variantes de ``ScanOutcome``.
        """
        try:
            snapshot = decode_payload(raw_text)
        except DecodeError as exc:
            LOGGER.warning("QR invalido (%s): %s", exc.reason.value, exc)
            return ScanOutcome(kind=ScanOutcomeKind.INVALID, error=exc)

        result = self._store.attempt_scan(snapshot.id)
        if result is None:
            LOGGER.info("Producto escaneado no encontrado: id=%s", snapshot.id)
            return ScanOutcome(kind=ScanOutcomeKind.NOT_FOUND, product_id=snapshot.id)

        product, accepted = result
        kind = ScanOutcomeKind.APPLIED if accepted else ScanOutcomeKind.REJECTED
        LOGGER.info(
            "Escaneo %s: id=%s, cantidad=%s, escaneos=%s/%s",
            kind.value,
            product.id,
            product.quantity,
            product.current_scans,
            product.scan_limit,
        )
        return ScanOutcome(kind=kind, product=product, product_id=product.id)
