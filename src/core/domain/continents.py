"""Normalización de continentes.

El proveedor de países devuelve regiones en inglés (`Americas`, `Europe`...).
El roster agrupa por las cinco categorías canónicas en español. Cualquier
etiqueta desconocida (p.ej. `Antarctic`) se devuelve tal cual y cuenta como
su propia categoría.
"""

from __future__ import annotations

AMERICA = "América"
EUROPA = "Europa"
ASIA = "Asia"
AFRICA = "África"
OCEANIA = "Oceanía"

CANONICAL_CONTINENTS: tuple[str, ...] = (AMERICA, EUROPA, ASIA, AFRICA, OCEANIA)

_REGION_TO_CONTINENT: dict[str, str] = {
    "Americas": AMERICA,
    "Europe": EUROPA,
    "Asia": ASIA,
    "Africa": AFRICA,
    "Oceania": OCEANIA,
}


def normalize_continent(raw_label: str) -> str:
    # Coincidencia exacta (sensible a mayúsculas), sin heurísticas.
    return _REGION_TO_CONTINENT.get(raw_label, raw_label)
