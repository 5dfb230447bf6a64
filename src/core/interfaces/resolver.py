"""Contrato del proveedor de países.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir REST Countries por un resolver en memoria en tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import CountryRecord


@runtime_checkable
class CountryResolver(Protocol):
    """Contrato mínimo para resolver un nombre libre a un país.

    Reglas de diseño:
    - `resolve` es asíncrono porque típicamente hará I/O (HTTP).
    - Devuelve `None` tanto si no existe como si la consulta falló: el Core
      no distingue ambos casos.
    """

    async def resolve(self, name: str) -> CountryRecord | None:
        ...
