"""Sesion de administrador del cliente."""

from __future__ import annotations

import hmac
import logging
import secrets

from parametros import ADMIN_PASSWORD, ADMIN_USERNAME, SESSION_TOKEN_BYTES
from shared.errors import AuthenticationError

LOGGER = logging.getLogger(__name__)


class AdminSession:
    """Mantiene el token de la sesion de administracion activa.

    Solo la capa de administracion la usa; el nucleo de escaneo no conoce el
    concepto de autenticacion.
    """

    def __init__(
        self,
        username: str = ADMIN_USERNAME,
        password: str = ADMIN_PASSWORD,
    ) -> None:
        self._username = username
        self._password = password
        self._token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        """Indica si hay una sesion activa."""
        return self._token is not None

    @property
    def token(self) -> str | None:
        """Token de la sesion activa, si existe."""
        return self._token

    def login(self, username: str, password: str) -> str:
        """Valida credenciales y abre una sesion nueva."""
        valid_username = hmac.compare_digest(username.encode(), self._username.encode())
        valid_password = hmac.compare_digest(password.encode(), self._password.encode())
        if not (valid_username and valid_password):
            LOGGER.warning("Intento de inicio de sesion fallido: usuario=%s", username)
            raise AuthenticationError("Credenciales invalidas.")

        self._token = secrets.token_urlsafe(SESSION_TOKEN_BYTES)
        LOGGER.info("Sesion de administrador iniciada: usuario=%s", username)
        return self._token

    def logout(self) -> None:
        """Cierra la sesion activa, si existe."""
        if self._token is None:
            return
        self._token = None
        LOGGER.info("Sesion de administrador cerrada.")

    def require_active(self, token: str | None = None) -> None:
        """Valida que exista sesion activa y, si se entrega, que el token coincida."""
        if self._token is None:
            raise AuthenticationError("Debes iniciar sesion como administrador.")

        if token is not None and not hmac.compare_digest(token, self._token):
            raise AuthenticationError("La sesion de administrador no es valida.")
