"""Persistencia del roster en un archivo JSON clave-valor.

Por qué JSON:
- Es el mismo formato que usa el formulario web (`localStorage`), así que
  un blob exportado del navegador se puede pegar tal cual.
- Un único archivo mapea clave -> blob de texto; el roster vive bajo
  `selectedCountries` como lista ordenada de `{name, continent, code}`.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Literal

from pydantic import TypeAdapter, ValidationError

from core.domain.models import CountryRecord, Roster
from core.errors import RosterStorageError
from core.interfaces.storage import BlobStore, RosterPersistence
from core.services.constraint_engine import RosterLimits, find_violations

logger = logging.getLogger(__name__)

_COUNTRY_LIST = TypeAdapter(list[CountryRecord])


class JsonFileBlobStore(BlobStore):
    """Equivalente a `localStorage` respaldado por un archivo JSON."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise RosterStorageError(f"cannot read {self._path}: {exc}") from exc
        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise RosterStorageError(f"{self._path} is not a key/value JSON object")
        return data

    def read(self, key: str) -> str | None:
        return self._read_all().get(key)

    def write(self, key: str, blob: str) -> None:
        try:
            data = self._read_all()
        except RosterStorageError:
            # Un archivo ilegible se sobrescribe; la política de carga ya decidió.
            data = {}
        data[key] = blob

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".storage-", suffix=".json", dir=self._path.parent)
        except OSError as exc:
            raise RosterStorageError(f"cannot write {self._path}: {exc}", key=key) from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True) + "\n")
            os.replace(tmp_name, self._path)
        except OSError as exc:
            os.unlink(tmp_name)
            raise RosterStorageError(f"cannot write {self._path}: {exc}", key=key) from exc


def encode_roster(roster: Roster) -> str:
    payload = [c.model_dump(mode="json") for c in roster.countries]
    return json.dumps(payload, ensure_ascii=False)


def decode_roster(blob: str) -> Roster:
    """Decodifica un blob; lanza `RosterStorageError` si no es una lista válida."""

    try:
        data = json.loads(blob)
    except ValueError as exc:
        raise RosterStorageError(f"roster blob is not JSON: {exc}") from exc
    if not isinstance(data, list):
        raise RosterStorageError("roster blob is not a JSON list")
    try:
        countries = _COUNTRY_LIST.validate_python(data)
    except ValidationError as exc:
        raise RosterStorageError(f"invalid country entry: {exc.error_count()} error(s)") from exc
    return Roster(countries=tuple(countries))


class RosterRepository(RosterPersistence):
    """Carga/guarda el roster completo bajo una clave del `BlobStore`.

    Datos corruptos (JSON inválido, entradas incompletas o un roster que viola
    los límites) se tratan según `on_corrupt`:
    - "reset": se registra un warning y se arranca con un roster vacío.
    - "fail": se propaga `RosterStorageError`.
    """

    def __init__(
        self,
        store: BlobStore,
        *,
        key: str = "selectedCountries",
        on_corrupt: Literal["reset", "fail"] = "reset",
        limits: RosterLimits | None = None,
    ) -> None:
        self._store = store
        self._key = key
        self._on_corrupt = on_corrupt
        self.limits = limits or RosterLimits()

    def load(self) -> Roster:
        try:
            blob = self._store.read(self._key)
            if blob is None:
                return Roster()
            roster = decode_roster(blob)
            problems = find_violations(roster, self.limits)
            if problems:
                raise RosterStorageError("stored roster breaks limits: " + "; ".join(problems), key=self._key)
            return roster
        except RosterStorageError as exc:
            if self._on_corrupt == "fail":
                raise
            logger.warning("discarding stored roster (%s); starting empty", exc)
            return Roster()

    def save(self, roster: Roster) -> None:
        self._store.write(self._key, encode_roster(roster))
