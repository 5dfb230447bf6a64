"""Excepciones del dominio.

El motor de reglas nunca lanza: toda decisión es un `Outcome`. Estas
excepciones solo cruzan el borde con los adaptadores (almacenamiento) y las
captura el servicio.
"""

from __future__ import annotations


class RosterError(Exception):
    """Base de errores de la aplicación."""


class RosterStorageError(RosterError):
    """El blob persistido no se pudo leer, está corrupto o no se pudo escribir."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key
