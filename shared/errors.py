"""Excepciones compartidas del proyecto."""

from __future__ import annotations

from enum import Enum


class ValidationError(Exception):
    """Error de validacion de datos de entrada."""


class ServiceError(Exception):
    """Error en la ejecucion de servicios."""


class DecodeErrorReason(str, Enum):
    """Motivo por el que un payload QR fue rechazado."""

    MALFORMED = "malformed"
    MISSING_FIELD = "missing_field"


class DecodeError(ValidationError):
    """Payload QR invalido: no parseable o sin campos requeridos."""

    def __init__(
        self,
        reason: DecodeErrorReason,
        message: str,
        field: str | None = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.field = field


class AuthenticationError(ValidationError):
    """Credenciales invalidas o sesion de administrador inactiva."""
