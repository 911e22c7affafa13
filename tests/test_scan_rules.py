"""Tests para reglas de autorizacion de escaneos y estados."""

from __future__ import annotations

import itertools
import unittest
from dataclasses import replace
from datetime import date

from servidor.domain.models import Product, ProductStatus
from servidor.services.scan_rules import (
    authorize_and_apply,
    classify_status,
    display_scan_count,
    is_scan_allowed,
    rejection_reason,
    status_of,
)


def _build_product(quantity: int, scan_limit: int, current_scans: int) -> Product:
    return Product(
        id="prod00001",
        name="Silla",
        location="Pasillo 3",
        quantity=quantity,
        price=1500.0,
        check_in_date=date(2024, 1, 10),
        check_out_date=None,
        scan_limit=scan_limit,
        current_scans=current_scans,
        qr_payload='{"id":"prod00001"}',
    )


class ClassifyStatusTests(unittest.TestCase):
    """Valida la clasificacion de estado."""

    def test_each_status(self) -> None:
        """Debe cubrir los cuatro estados definidos."""
        self.assertEqual(classify_status(3, 0, 2), ProductStatus.AVAILABLE)
        self.assertEqual(classify_status(1, 2, 2), ProductStatus.SCAN_LIMIT_REACHED)
        self.assertEqual(classify_status(0, 1, 5), ProductStatus.OUT_OF_STOCK)
        self.assertEqual(classify_status(0, 5, 5), ProductStatus.SOLD_OUT)

    def test_classification_is_total_and_consistent(self) -> None:
        """Cada triple valido debe caer exactamente en el estado de sus condiciones."""
        for quantity, current_scans, scan_limit in itertools.product(
            range(0, 4), range(0, 5), range(1, 4)
        ):
            with self.subTest(q=quantity, c=current_scans, l=scan_limit):
                status = classify_status(quantity, current_scans, scan_limit)
                limit = current_scans >= scan_limit
                stock = quantity <= 0
                expected = {
                    (True, True): ProductStatus.SOLD_OUT,
                    (True, False): ProductStatus.SCAN_LIMIT_REACHED,
                    (False, True): ProductStatus.OUT_OF_STOCK,
                    (False, False): ProductStatus.AVAILABLE,
                }[(limit, stock)]
                self.assertEqual(status, expected)
                self.assertEqual(status, classify_status(quantity, current_scans, scan_limit))

    def test_over_limit_after_admin_edit_is_still_limit_reached(self) -> None:
        """Escaneos sobre el limite (edicion manual) siguen bloqueando."""
        self.assertEqual(classify_status(4, 9, 2), ProductStatus.SCAN_LIMIT_REACHED)


class AuthorizeAndApplyTests(unittest.TestCase):
    """Valida la compuerta de escaneo."""

    def test_accepts_and_moves_counters_by_one(self) -> None:
        """Bajo el limite y con stock debe aceptar y mover contadores en 1."""
        product = _build_product(quantity=3, scan_limit=2, current_scans=0)

        updated, accepted = authorize_and_apply(product)

        self.assertTrue(accepted)
        self.assertEqual(updated.quantity, 2)
        self.assertEqual(updated.current_scans, 1)
        self.assertEqual(
            replace(updated, quantity=product.quantity, current_scans=product.current_scans),
            product,
        )
        self.assertEqual(product.quantity, 3)

    def test_rejects_when_gate_closed(self) -> None:
        """Con limite alcanzado o sin stock debe rechazar sin cambios."""
        closed = [
            _build_product(quantity=1, scan_limit=2, current_scans=2),
            _build_product(quantity=0, scan_limit=5, current_scans=1),
            _build_product(quantity=0, scan_limit=1, current_scans=1),
        ]
        for product in closed:
            with self.subTest(product=product):
                result, accepted = authorize_and_apply(product)
                self.assertFalse(accepted)
                self.assertIs(result, product)
                again, accepted_again = authorize_and_apply(result)
                self.assertFalse(accepted_again)
                self.assertEqual(again, product)

    def test_repeated_scans_stop_at_limit(self) -> None:
        """El conteo nunca supera el limite y la cantidad nunca es negativa."""
        product = _build_product(quantity=10, scan_limit=3, current_scans=0)
        accepted_count = 0
        for _ in range(6):
            product, accepted = authorize_and_apply(product)
            accepted_count += int(accepted)

        self.assertEqual(accepted_count, 3)
        self.assertEqual(product.current_scans, 3)
        self.assertEqual(product.quantity, 7)

        product = _build_product(quantity=2, scan_limit=10, current_scans=0)
        for _ in range(5):
            product, _ = authorize_and_apply(product)
        self.assertEqual(product.quantity, 0)
        self.assertEqual(product.current_scans, 2)

    def test_rejection_reason(self) -> None:
        """Debe informar la condicion que cerro la compuerta."""
        self.assertIsNone(rejection_reason(_build_product(3, 2, 0)))
        self.assertEqual(
            rejection_reason(_build_product(1, 2, 2)),
            ProductStatus.SCAN_LIMIT_REACHED,
        )
        self.assertEqual(rejection_reason(_build_product(0, 2, 0)), ProductStatus.OUT_OF_STOCK)
        self.assertTrue(is_scan_allowed(_build_product(1, 1, 0)))
        self.assertEqual(status_of(_build_product(0, 1, 1)), ProductStatus.SOLD_OUT)


class DisplayScanCountTests(unittest.TestCase):
    """Valida el contador mostrado tras un escaneo."""

    def test_below_limit_previews_next_scan(self) -> None:
        """Bajo el limite muestra el conteo del proximo escaneo."""
        self.assertEqual(display_scan_count(_build_product(2, 2, 1)), 2)
        self.assertEqual(display_scan_count(_build_product(3, 2, 0)), 1)

    def test_at_limit_shows_actual_count(self) -> None:
        """Al alcanzar el limite muestra el conteo real."""
        self.assertEqual(display_scan_count(_build_product(1, 2, 2)), 2)
        self.assertEqual(display_scan_count(_build_product(1, 2, 5)), 5)


if __name__ == "__main__":
    unittest.main()
