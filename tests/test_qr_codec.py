"""Tests para el codec de payloads QR."""

from __future__ import annotations

import json
import unittest
from datetime import date

from servidor.domain.models import ProductSnapshot
from servidor.services.qr_codec import PAYLOAD_KEYS, decode_payload, encode_payload
from shared.errors import DecodeError, DecodeErrorReason


def _build_snapshot(**overrides: object) -> ProductSnapshot:
    data: dict[str, object] = {
        "id": "abc123xyz",
        "name": "Lampara",
        "location": "Bodega A",
        "quantity": 3,
        "price": 499.5,
        "check_in_date": date(2024, 3, 1),
        "check_out_date": date(2024, 3, 15),
        "scan_limit": 2,
        "current_scans": 0,
    }
    data.update(overrides)
    return ProductSnapshot(**data)  # type: ignore[arg-type]


class QrCodecTests(unittest.TestCase):
    """Valida codificacion y decodificacion de payloads."""

    def test_round_trip_preserves_snapshot(self) -> None:
        """decode(encode(s)) debe ser igual a s."""
        snapshots = [
            _build_snapshot(),
            _build_snapshot(check_in_date=None, check_out_date=None),
            _build_snapshot(name="Cafe ñandú", price=0, quantity=0),
            _build_snapshot(current_scans=7, scan_limit=7, price=12.0),
        ]
        for snapshot in snapshots:
            with self.subTest(snapshot=snapshot):
                self.assertEqual(decode_payload(encode_payload(snapshot)), snapshot)

    def test_encode_is_deterministic_and_uses_wire_keys(self) -> None:
        """Debe serializar siempre el mismo texto con las claves en orden."""
        snapshot = _build_snapshot()
        payload = encode_payload(snapshot)

        self.assertEqual(payload, encode_payload(snapshot))
        self.assertEqual(tuple(json.loads(payload)), PAYLOAD_KEYS)
        self.assertIn('"checkInDate":"2024-03-01"', payload)

    def test_decode_accepts_bytes(self) -> None:
        """Debe aceptar payload UTF-8 en bytes."""
        snapshot = _build_snapshot()
        self.assertEqual(decode_payload(encode_payload(snapshot).encode("utf-8")), snapshot)

    def test_decode_ignores_extra_keys(self) -> None:
        """Claves adicionales no deben impedir la lectura."""
        data = json.loads(encode_payload(_build_snapshot()))
        data["qrCode"] = "data:image/png;base64,AAAA"

        self.assertEqual(decode_payload(json.dumps(data)).id, "abc123xyz")

    def test_decode_garbage_is_malformed(self) -> None:
        """Texto no JSON o JSON que no es objeto debe marcarse como malformado."""
        for payload in ("not json", "", "[1, 2, 3]", "42", "null", "{", b"\xff\xfe", None):
            with self.subTest(payload=payload):
                with self.assertRaises(DecodeError) as context:
                    decode_payload(payload)  # type: ignore[arg-type]
                self.assertEqual(context.exception.reason, DecodeErrorReason.MALFORMED)

    def test_decode_missing_field(self) -> None:
        """Debe indicar el campo faltante."""
        data = json.loads(encode_payload(_build_snapshot()))
        del data["scanLimit"]

        with self.assertRaises(DecodeError) as context:
            decode_payload(json.dumps(data))

        self.assertEqual(context.exception.reason, DecodeErrorReason.MISSING_FIELD)
        self.assertEqual(context.exception.field, "scanLimit")

    def test_decode_only_id_is_missing_field(self) -> None:
        """Un objeto con solo ID no es un snapshot completo."""
        with self.assertRaises(DecodeError) as context:
            decode_payload('{"id": "zzz"}')

        self.assertEqual(context.exception.reason, DecodeErrorReason.MISSING_FIELD)

    def test_decode_rejects_invalid_values(self) -> None:
        """Tipos o rangos invalidos deben marcarse como malformados."""
        invalid_values = {
            "id": ["", 123, None],
            "quantity": [-1, 1.5, True, "3"],
            "price": [-0.5, "10", False],
            "scanLimit": [0, None],
            "currentScans": [-2],
            "checkInDate": ["2024-13-01", 20240101],
            "name": [None, 5],
        }
        base = json.loads(encode_payload(_build_snapshot()))
        for key, values in invalid_values.items():
            for value in values:
                with self.subTest(key=key, value=value):
                    data = dict(base)
                    data[key] = value
                    with self.assertRaises(DecodeError) as context:
                        decode_payload(json.dumps(data))
                    self.assertEqual(context.exception.reason, DecodeErrorReason.MALFORMED)
                    self.assertEqual(context.exception.field, key)

    def test_decode_non_finite_price_is_malformed(self) -> None:
        """NaN e Infinity no son precios validos."""
        payload = encode_payload(_build_snapshot()).replace('"price":499.5', '"price":NaN')

        with self.assertRaises(DecodeError):
            decode_payload(payload)

    def test_decode_accepts_integral_floats_for_counters(self) -> None:
        """Contadores como 3.0 deben leerse como enteros."""
        data = json.loads(encode_payload(_build_snapshot()))
        data["quantity"] = 3.0

        snapshot = decode_payload(json.dumps(data))

        self.assertEqual(snapshot.quantity, 3)
        self.assertIsInstance(snapshot.quantity, int)

    def test_decode_deeply_nested_json_is_malformed(self) -> None:
        """JSON excesivamente anidado no debe propagar RecursionError."""
        payload = "[" * 100_000 + "]" * 100_000

        with self.assertRaises(DecodeError):
            decode_payload(payload)


if __name__ == "__main__":
    unittest.main()
