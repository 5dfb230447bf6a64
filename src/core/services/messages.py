"""Mensajes de estado para el usuario.

Traduce un `Outcome` a texto. Los textos en español conservan la redacción
del formulario original; los límites y el continente se interpolan desde el
propio `Outcome`.
"""

from __future__ import annotations

from core.domain.language import Language
from core.domain.models import Outcome, OutcomeKind

_MESSAGES: dict[Language, dict[OutcomeKind, str]] = {
    Language.SPANISH: {
        OutcomeKind.REJECTED_EMPTY_INPUT: "⚠️ Escriba el nombre de un país.",
        OutcomeKind.REJECTED_NOT_FOUND: "❌ País no encontrado en la API.",
        OutcomeKind.REJECTED_DUPLICATE_COUNTRY: "❌ Este país ya fue registrado.",
        OutcomeKind.REJECTED_ROSTER_FULL: "❌ Ya se registraron los {limit} países permitidos.",
        OutcomeKind.REJECTED_CONTINENT_FULL: "❌ Ya hay {limit} países registrados del continente {continent}.",
        OutcomeKind.ACCEPTED_INSERTED: '✅ País "{name}" agregado correctamente.',
        OutcomeKind.ACCEPTED_UPDATED: "✅ País actualizado correctamente.",
        OutcomeKind.ACCEPTED_DELETED: "ℹ️ País eliminado.",
        OutcomeKind.EDIT_STARTED: "✏️ Modo edición activado. Modifica el nombre y presiona Actualizar.",
        OutcomeKind.EDIT_CANCELLED: "✖️ Edición cancelada.",
        OutcomeKind.NO_CHANGE: "ℹ️ Sin cambios.",
        OutcomeKind.OPERATION_FAILED: "❌ No se pudo completar la operación. Recarga la lista e inténtalo de nuevo.",
    },
    Language.ENGLISH: {
        OutcomeKind.REJECTED_EMPTY_INPUT: "⚠️ Enter a country name.",
        OutcomeKind.REJECTED_NOT_FOUND: "❌ Country not found in the API.",
        OutcomeKind.REJECTED_DUPLICATE_COUNTRY: "❌ This country is already registered.",
        OutcomeKind.REJECTED_ROSTER_FULL: "❌ All {limit} allowed countries are already registered.",
        OutcomeKind.REJECTED_CONTINENT_FULL: "❌ There are already {limit} countries registered from {continent}.",
        OutcomeKind.ACCEPTED_INSERTED: '✅ Country "{name}" added.',
        OutcomeKind.ACCEPTED_UPDATED: "✅ Country updated.",
        OutcomeKind.ACCEPTED_DELETED: "ℹ️ Country removed.",
        OutcomeKind.EDIT_STARTED: "✏️ Edit mode on. Change the name and submit to update.",
        OutcomeKind.EDIT_CANCELLED: "✖️ Edit cancelled.",
        OutcomeKind.NO_CHANGE: "ℹ️ Nothing changed.",
        OutcomeKind.OPERATION_FAILED: "❌ The operation could not be completed. Reload the list and try again.",
    },
}

# Redacción de los rechazos en modo edición.
_EDIT_MESSAGES: dict[Language, dict[OutcomeKind, str]] = {
    Language.SPANISH: {
        OutcomeKind.REJECTED_DUPLICATE_COUNTRY: "❌ Este país ya está registrado.",
        OutcomeKind.REJECTED_CONTINENT_FULL: "❌ Ya hay {limit} países del continente {continent}.",
    },
    Language.ENGLISH: {
        OutcomeKind.REJECTED_DUPLICATE_COUNTRY: "❌ That country is already in the roster.",
        OutcomeKind.REJECTED_CONTINENT_FULL: "❌ There are already {limit} countries from {continent}.",
    },
}

_RULES: dict[Language, tuple[str, ...]] = {
    Language.SPANISH: (
        "Máximo {max_countries} países en total.",
        "Máximo {max_per_continent} países por continente.",
        "No se pueden repetir países.",
        "El país debe existir en la API.",
    ),
    Language.ENGLISH: (
        "At most {max_countries} countries in total.",
        "At most {max_per_continent} countries per continent.",
        "Countries cannot be repeated.",
        "The country must exist in the API.",
    ),
}


def describe(outcome: Outcome, language: Language = Language.SPANISH) -> str:
    template = _MESSAGES[language][outcome.kind]
    if outcome.editing:
        template = _EDIT_MESSAGES[language].get(outcome.kind, template)
    name = outcome.country.name if outcome.country else (outcome.code or "")
    return template.format(
        name=name,
        continent=outcome.continent or "",
        limit=outcome.limit if outcome.limit is not None else "",
    )


def rules(
    *,
    max_countries: int,
    max_per_continent: int,
    language: Language = Language.SPANISH,
) -> list[str]:
    """Reglas que el formulario muestra antes de registrar países."""

    return [
        line.format(max_countries=max_countries, max_per_continent=max_per_continent)
        for line in _RULES[language]
    ]
