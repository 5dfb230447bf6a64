"""Orquestación del registro de países.

Este módulo une las dos fases del flujo: una resolución asíncrona (el
proveedor de países) seguida de la validación síncrona del motor y la
persistencia. La CLI y cualquier otro front-end delegan aquí; así la
presentación (prompts, tablas, confirmaciones) queda fuera de la lógica.

Concurrencia:
- Un único `asyncio.Lock` envuelve resolver -> aplicar -> reemplazar, de modo
  que dos envíos nunca compiten sobre el mismo roster y se aplican en orden
  de llegada al lock.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Union

from adapters.json_storage import JsonFileBlobStore, RosterRepository
from adapters.restcountries import RestCountriesResolver
from core.config import AppSettings
from core.domain.language import Language
from core.domain.models import (
    CountryRecord,
    DeleteRequest,
    EditSession,
    Outcome,
    OutcomeKind,
    Roster,
)
from core.errors import RosterStorageError
from core.interfaces.resolver import CountryResolver
from core.services import constraint_engine
from core.services.constraint_engine import EngineResult, RosterLimits
from core.services.messages import describe, rules
from core.services.roster_store import RosterStore

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[CountryRecord], Union[bool, Awaitable[bool]]]


@dataclass
class ServiceResult:
    """Lo que un front-end necesita tras cada acción."""

    outcome: Outcome
    message: str
    roster: Roster
    session: EditSession
    prefill: str = ""


@dataclass
class RosterSummary:
    count: int
    max_countries: int
    max_per_continent: int
    per_continent: dict[str, int] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return f"{self.count}/{self.max_countries}"


class RosterService:
    def __init__(
        self,
        store: RosterStore,
        resolver: CountryResolver,
        *,
        limits: RosterLimits | None = None,
        language: Language = Language.SPANISH,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._limits = limits or RosterLimits()
        self._language = language
        self._session = EditSession.idle()
        self._lock = asyncio.Lock()

    @property
    def roster(self) -> Roster:
        return self._store.current()

    @property
    def session(self) -> EditSession:
        return self._session

    @property
    def limits(self) -> RosterLimits:
        return self._limits

    async def submit(self, raw_name: str) -> ServiceResult:
        """Alta o edición según la sesión vigente (botón Agregar/Actualizar)."""

        async with self._lock:
            request = self._session.request_for(raw_name)
            resolved: CountryRecord | None = None
            # Sin nombre no se consulta el proveedor.
            if request.raw_name:
                resolved = await self._resolver.resolve(request.raw_name)
            result = constraint_engine.apply(
                self._store.current(),
                request,
                resolved,
                self._session,
                limits=self._limits,
            )
            return self._commit(result)

    async def delete(self, code: str, *, confirm: ConfirmCallback | None = None) -> ServiceResult:
        """Baja tras la confirmación del usuario (si se proporciona `confirm`)."""

        async with self._lock:
            roster = self._store.current()
            target = roster.find(code)
            if target is not None and confirm is not None:
                answer = confirm(target)
                if inspect.isawaitable(answer):
                    answer = await answer
                if not answer:
                    return self._result(Outcome(kind=OutcomeKind.NO_CHANGE, code=code))

            result = constraint_engine.apply(roster, DeleteRequest(target_code=code), None, self._session)
            return self._commit(result)

    def start_edit(self, code: str) -> ServiceResult:
        """Activa el modo edición para `code` y devuelve su nombre para prellenar."""

        country = self._store.current().find(code)
        if country is None:
            return self._result(
                Outcome(kind=OutcomeKind.OPERATION_FAILED, code=code, detail="edit_target_missing")
            )
        self._session = EditSession.editing(code)
        return self._result(
            Outcome(kind=OutcomeKind.EDIT_STARTED, country=country, code=code),
            prefill=country.name,
        )

    def cancel_edit(self) -> ServiceResult:
        if not self._session.active:
            return self._result(Outcome(kind=OutcomeKind.NO_CHANGE))
        code = self._session.target_code
        self._session = EditSession.idle()
        return self._result(Outcome(kind=OutcomeKind.EDIT_CANCELLED, code=code))

    def summary(self) -> RosterSummary:
        roster = self._store.current()
        return RosterSummary(
            count=len(roster),
            max_countries=self._limits.max_countries,
            max_per_continent=self._limits.max_per_continent,
            per_continent=roster.continent_counts(),
        )

    def rules(self) -> list[str]:
        return rules(
            max_countries=self._limits.max_countries,
            max_per_continent=self._limits.max_per_continent,
            language=self._language,
        )

    def _commit(self, result: EngineResult) -> ServiceResult:
        outcome = result.outcome
        if result.changed:
            try:
                self._store.replace(result.roster)
            except RosterStorageError as exc:
                logger.exception("could not persist roster (key=%s) after %s", exc.key, outcome.kind.value)
                return self._result(
                    Outcome(kind=OutcomeKind.OPERATION_FAILED, code=outcome.code, detail="persist_failed")
                )
            logger.info("%s %s", outcome.kind.value, outcome.code)
        self._session = result.session
        return self._result(outcome)

    def _result(self, outcome: Outcome, *, prefill: str = "") -> ServiceResult:
        return ServiceResult(
            outcome=outcome,
            message=describe(outcome, self._language),
            roster=self._store.current(),
            session=self._session,
            prefill=prefill,
        )


def build_roster_service(
    settings: AppSettings | None = None,
    *,
    resolver: CountryResolver | None = None,
    language: Language | None = None,
) -> RosterService:
    """Arma el servicio con los adaptadores por defecto (REST Countries + JSON)."""

    settings = settings or AppSettings()
    repository = RosterRepository(
        JsonFileBlobStore(settings.storage_path),
        key=settings.storage_key,
        on_corrupt=settings.on_corrupt_storage,
        limits=RosterLimits(settings.max_countries, settings.max_per_continent),
    )
    store = RosterStore.open(repository)
    return RosterService(
        store,
        resolver or RestCountriesResolver(settings),
        limits=repository.limits,
        language=language or settings.default_language,
    )
