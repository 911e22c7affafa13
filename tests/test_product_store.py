"""Tests para el store de productos en memoria."""

from __future__ import annotations

import threading
import unittest
from datetime import date

from parametros import PRODUCT_ID_ALPHABET
from servidor.domain.models import ProductFields
from servidor.services.product_store import ProductStore, generate_product_id
from servidor.services.qr_codec import decode_payload
from shared.errors import ValidationError


def _build_fields(**overrides: object) -> ProductFields:
    data: dict[str, object] = {
        "name": "Mesa",
        "location": "Bodega B",
        "quantity": 3,
        "price": 2500.0,
        "check_in_date": date(2024, 5, 2),
        "check_out_date": date(2024, 6, 2),
        "scan_limit": 2,
    }
    data.update(overrides)
    return ProductFields(**data)  # type: ignore[arg-type]


class ProductStoreTests(unittest.TestCase):
    """Valida operaciones del store."""

    def test_generate_product_id(self) -> None:
        """Debe generar IDs de 9 caracteres alfanumericos."""
        product_id = generate_product_id()

        self.assertEqual(len(product_id), 9)
        self.assertTrue(set(product_id) <= set(PRODUCT_ID_ALPHABET))
        self.assertEqual(len({generate_product_id() for _ in range(200)}), 200)

    def test_add_assigns_id_and_initial_payload(self) -> None:
        """Debe crear el producto con cero escaneos y payload decodificable."""
        store = ProductStore()

        product = store.add(_build_fields())

        self.assertEqual(product.current_scans, 0)
        self.assertIs(store.get(product.id), product)
        snapshot = decode_payload(product.qr_payload)
        self.assertEqual(snapshot, product.snapshot())
        self.assertEqual(snapshot.current_scans, 0)

    def test_add_uses_id_factory(self) -> None:
        """Debe usar la fabrica de IDs inyectada."""
        ids = iter(["first0001", "second002"])
        store = ProductStore(id_factory=lambda: next(ids))

        first = store.add(_build_fields(name="Uno"))
        second = store.add(_build_fields(name="Dos"))

        self.assertEqual([first.id, second.id], ["first0001", "second002"])
        self.assertEqual([product.name for product in store.list_all()], ["Uno", "Dos"])
        self.assertEqual(len(store), 2)
        self.assertIn("first0001", store)

    def test_get_and_remove_missing_are_not_errors(self) -> None:
        """Buscar o eliminar un ID inexistente no debe fallar."""
        store = ProductStore()

        self.assertIsNone(store.get("missing"))
        store.remove("missing")
        self.assertIsNone(store.update("missing", {"name": "X"}))
        self.assertIsNone(store.apply_scan("missing"))
        self.assertIsNone(store.attempt_scan("missing"))

    def test_remove_deletes_product(self) -> None:
        """Debe eliminar el producto existente."""
        store = ProductStore()
        product = store.add(_build_fields())

        store.remove(product.id)

        self.assertIsNone(store.get(product.id))
        self.assertEqual(store.list_all(), [])

    def test_update_merges_and_keeps_id_and_payload(self) -> None:
        """Debe fusionar campos sin tocar ID ni payload QR."""
        store = ProductStore()
        product = store.add(_build_fields())

        updated = store.update(
            product.id,
            {
                "name": "Mesa grande",
                "quantity": 10,
                "current_scans": 7,
                "id": "hijacked",
                "qr_payload": "otro",
            },
        )

        self.assertIsNotNone(updated)
        assert updated is not None
        self.assertEqual(updated.id, product.id)
        self.assertEqual(updated.qr_payload, product.qr_payload)
        self.assertEqual(updated.name, "Mesa grande")
        self.assertEqual(updated.quantity, 10)
        self.assertEqual(updated.current_scans, 7)
        self.assertEqual(updated.location, product.location)
        self.assertIsNone(store.get("hijacked"))

    def test_update_rejects_unknown_fields(self) -> None:
        """Campos desconocidos deben rechazarse."""
        store = ProductStore()
        product = store.add(_build_fields())

        with self.assertRaises(ValidationError):
            store.update(product.id, {"color": "rojo"})

    def test_update_missing_product_ignores_unknown_fields(self) -> None:
        """Sin producto la actualizacion es un no-op aunque haya campos desconocidos."""
        store = ProductStore()

        self.assertIsNone(store.update("missing", {"color": "rojo", "quantity": "5"}))
        self.assertEqual(len(store), 0)

    def test_update_rejects_wrong_value_types(self) -> None:
        """Valores con tipo incorrecto no deben llegar al registro."""
        store = ProductStore()
        product = store.add(_build_fields())

        for changes in (
            {"quantity": "5"},
            {"scan_limit": 2.5},
            {"current_scans": True},
            {"price": "99"},
            {"name": None},
            {"check_in_date": "2024-01-01"},
        ):
            with self.subTest(changes=changes):
                with self.assertRaises(ValidationError):
                    store.update(product.id, changes)

        self.assertIs(store.get(product.id), product)
        self.assertEqual(store.apply_scan(product.id).current_scans, 1)  # type: ignore[union-attr]

    def test_update_accepts_integer_price_and_empty_dates(self) -> None:
        """Precio entero y fechas vacias son valores validos."""
        store = ProductStore()
        product = store.add(_build_fields())

        updated = store.update(
            product.id,
            {"price": 100, "check_in_date": None, "check_out_date": date(2024, 3, 1)},
        )

        assert updated is not None
        self.assertEqual(updated.price, 100)
        self.assertIsNone(updated.check_in_date)
        self.assertEqual(updated.check_out_date, date(2024, 3, 1))

    def test_payload_is_not_regenerated_after_scans(self) -> None:
        """El payload conserva el snapshot inicial con cero escaneos."""
        store = ProductStore()
        product = store.add(_build_fields())

        scanned = store.apply_scan(product.id)

        self.assertIsNotNone(scanned)
        assert scanned is not None
        self.assertEqual(scanned.current_scans, 1)
        self.assertEqual(scanned.qr_payload, product.qr_payload)
        self.assertEqual(decode_payload(scanned.qr_payload).current_scans, 0)
        self.assertEqual(decode_payload(scanned.qr_payload).quantity, 3)

    def test_apply_scan_returns_unchanged_record_when_rejected(self) -> None:
        """Un escaneo rechazado retorna el registro sin cambios."""
        store = ProductStore()
        product = store.add(_build_fields(quantity=0, scan_limit=5))

        result = store.attempt_scan(product.id)

        self.assertEqual(result, (product, False))
        self.assertIs(store.apply_scan(product.id), product)

    def test_concurrent_scans_never_exceed_limit(self) -> None:
        """Escaneos concurrentes no deben superar limite ni stock."""
        store = ProductStore()
        product = store.add(_build_fields(quantity=50, scan_limit=20))
        accepted: list[bool] = []
        accepted_lock = threading.Lock()

        def scan_many() -> None:
            for _ in range(10):
                result = store.attempt_scan(product.id)
                assert result is not None
                with accepted_lock:
                    accepted.append(result[1])

        threads = [threading.Thread(target=scan_many) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        final = store.get(product.id)
        assert final is not None
        self.assertEqual(sum(accepted), 20)
        self.assertEqual(final.current_scans, 20)
        self.assertEqual(final.quantity, 30)


if __name__ == "__main__":
    unittest.main()
