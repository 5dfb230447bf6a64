"""Contrato del almacenamiento clave-valor (equivalente a localStorage)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Roster


@runtime_checkable
class BlobStore(Protocol):
    """Guarda blobs de texto bajo una clave.

    - `read` devuelve `None` si la clave no existe.
    - `write` es síncrono y reemplaza el valor completo.
    """

    def read(self, key: str) -> str | None:
        ...

    def write(self, key: str, blob: str) -> None:
        ...


@runtime_checkable
class RosterPersistence(Protocol):
    """Carga/guarda el roster completo (no diffs)."""

    def load(self) -> Roster:
        ...

    def save(self, roster: Roster) -> None:
        ...
