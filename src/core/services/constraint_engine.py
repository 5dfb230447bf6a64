"""Motor de reglas del roster.

Decide si una operación (alta, edición, baja) es legal y calcula el nuevo
estado. Es síncrono, total y sin efectos: no consulta el proveedor, no
persiste y no lanza excepciones para entradas válidas. Cuando rechaza,
devuelve exactamente el mismo objeto `Roster` que recibió.

Orden de evaluación (la primera regla que falla gana):

1. nombre vacío tras `strip()`
2. país no resuelto
3. alta: roster lleno -> duplicado -> continente lleno
   edición: objetivo inexistente -> duplicado en *otra* entrada ->
   continente lleno (sin contar la entrada que se reemplaza)
   baja: elimina si existe, si no es un no-op
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.domain.models import (
    CountryRecord,
    DeleteRequest,
    EditSession,
    InsertRequest,
    OperationRequest,
    Outcome,
    OutcomeKind,
    Roster,
    UpdateRequest,
)

logger = logging.getLogger(__name__)

MAX_COUNTRIES = 16
MAX_PER_CONTINENT = 4


@dataclass(frozen=True)
class RosterLimits:
    """Límites de cardinalidad del roster."""

    max_countries: int = MAX_COUNTRIES
    max_per_continent: int = MAX_PER_CONTINENT


@dataclass(frozen=True)
class EngineResult:
    """Salida de `apply`: siguiente roster, estado y sesión de edición."""

    roster: Roster
    outcome: Outcome
    session: EditSession

    @property
    def changed(self) -> bool:
        return self.outcome.accepted


def apply(
    roster: Roster,
    request: OperationRequest,
    resolved: CountryRecord | None = None,
    session: EditSession | None = None,
    *,
    limits: RosterLimits | None = None,
) -> EngineResult:
    """Aplica `request` sobre `roster` y devuelve el resultado.

    `resolved` es la salida del resolver para `request.raw_name` (ignorado en
    bajas). `session` es la sesión de edición vigente; se devuelve limpia tras
    una edición aceptada o una inconsistencia.
    """

    limits = limits or RosterLimits()
    session = session or EditSession.idle()

    if isinstance(request, DeleteRequest):
        return _apply_delete(roster, request, session)

    if not request.raw_name:
        return _reject(roster, session, OutcomeKind.REJECTED_EMPTY_INPUT)
    if resolved is None:
        return _reject(roster, session, OutcomeKind.REJECTED_NOT_FOUND)

    if isinstance(request, UpdateRequest):
        return _apply_update(roster, request, resolved, session, limits)
    if isinstance(request, InsertRequest):
        return _apply_insert(roster, resolved, session, limits)

    raise TypeError(f"Unsupported request: {type(request).__name__}")


def _reject(
    roster: Roster,
    session: EditSession,
    kind: OutcomeKind,
    **data: object,
) -> EngineResult:
    logger.debug("rejected: %s %s", kind.value, data)
    return EngineResult(roster=roster, outcome=Outcome(kind=kind, **data), session=session)


def _apply_insert(
    roster: Roster,
    resolved: CountryRecord,
    session: EditSession,
    limits: RosterLimits,
) -> EngineResult:
    if len(roster) >= limits.max_countries:
        return _reject(
            roster, session, OutcomeKind.REJECTED_ROSTER_FULL, limit=limits.max_countries
        )

    if roster.contains(resolved.code):
        return _reject(roster, session, OutcomeKind.REJECTED_DUPLICATE_COUNTRY, code=resolved.code)

    if roster.count_continent(resolved.continent) >= limits.max_per_continent:
        return _reject(
            roster,
            session,
            OutcomeKind.REJECTED_CONTINENT_FULL,
            continent=resolved.continent,
            limit=limits.max_per_continent,
        )

    return EngineResult(
        roster=roster.appended(resolved),
        outcome=Outcome(kind=OutcomeKind.ACCEPTED_INSERTED, country=resolved, code=resolved.code),
        session=session,
    )


def _apply_update(
    roster: Roster,
    request: UpdateRequest,
    resolved: CountryRecord,
    session: EditSession,
    limits: RosterLimits,
) -> EngineResult:
    target = request.target_code

    if not roster.contains(target):
        # El objetivo desapareció (p.ej. borrado mientras se editaba).
        logger.warning("update target %s is no longer in the roster", target)
        return EngineResult(
            roster=roster,
            outcome=Outcome(
                kind=OutcomeKind.OPERATION_FAILED,
                code=target,
                detail="update_target_missing",
            ),
            session=EditSession.idle(),
        )

    if resolved.code != target and roster.contains(resolved.code):
        return _reject(
            roster, session, OutcomeKind.REJECTED_DUPLICATE_COUNTRY, code=resolved.code, editing=True
        )

    if roster.count_continent(resolved.continent, exclude=target) >= limits.max_per_continent:
        return _reject(
            roster,
            session,
            OutcomeKind.REJECTED_CONTINENT_FULL,
            continent=resolved.continent,
            limit=limits.max_per_continent,
            editing=True,
        )

    return EngineResult(
        roster=roster.replaced(target, resolved),
        outcome=Outcome(kind=OutcomeKind.ACCEPTED_UPDATED, country=resolved, code=target),
        session=EditSession.idle(),
    )


def _apply_delete(roster: Roster, request: DeleteRequest, session: EditSession) -> EngineResult:
    if not roster.contains(request.target_code):
        return EngineResult(
            roster=roster,
            outcome=Outcome(kind=OutcomeKind.NO_CHANGE, code=request.target_code),
            session=session,
        )

    # Borrar el país que se está editando invalida la sesión.
    if session.active and session.target_code == request.target_code:
        session = EditSession.idle()

    return EngineResult(
        roster=roster.without(request.target_code),
        outcome=Outcome(kind=OutcomeKind.ACCEPTED_DELETED, code=request.target_code),
        session=session,
    )


def find_violations(roster: Roster, limits: RosterLimits | None = None) -> list[str]:
    """Lista las invariantes que incumple `roster` (vacía si es válido).

    Se usa al cargar datos persistidos, que no pasaron por el motor.
    """

    limits = limits or RosterLimits()
    problems: list[str] = []

    if len(roster) > limits.max_countries:
        problems.append(f"size {len(roster)} > {limits.max_countries}")

    seen: set[str] = set()
    for code in roster.codes:
        if code in seen:
            problems.append(f"duplicate code {code}")
        seen.add(code)

    for continent, count in sorted(roster.continent_counts().items()):
        if count > limits.max_per_continent:
            problems.append(f"{continent}: {count} > {limits.max_per_continent}")

    return problems
