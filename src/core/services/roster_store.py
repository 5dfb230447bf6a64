"""Roster Store: dueño explícito del roster vigente.

No valida nada: confía en la salida del motor. Cada `replace` persiste el
roster completo antes de publicarlo en memoria, así que si la escritura
falla el estado en memoria sigue siendo el anterior.
"""

from __future__ import annotations

import logging

from core.domain.models import Roster
from core.interfaces.storage import RosterPersistence

logger = logging.getLogger(__name__)


class RosterStore:
    def __init__(self, initial: Roster | None = None, persistence: RosterPersistence | None = None) -> None:
        self._roster = initial if initial is not None else Roster()
        self._persistence = persistence

    @classmethod
    def open(cls, persistence: RosterPersistence) -> "RosterStore":
        """Carga el roster persistido (una sola vez, al arrancar)."""

        roster = persistence.load()
        logger.info("loaded roster with %d countries", len(roster))
        return cls(roster, persistence)

    def current(self) -> Roster:
        return self._roster

    def replace(self, next_roster: Roster) -> None:
        # Puede lanzar RosterStorageError; en ese caso no tocamos memoria.
        if self._persistence is not None:
            self._persistence.save(next_roster)
        self._roster = next_roster
