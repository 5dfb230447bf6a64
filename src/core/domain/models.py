"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los modelos congelados hacen que cada operación produzca un roster nuevo en
  vez de mutar el actual (todo o nada).

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class CountryRecord(BaseModel):
    """País ya resuelto por el proveedor. Identidad = `code`."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(
        ...,
        min_length=1,
        description="Nombre para mostrar (p.ej. 'Japan').",
    )
    continent: str = Field(
        ...,
        description="Continente normalizado (América, Europa, Asia, África, Oceanía u otro).",
    )
    code: str = Field(
        ...,
        min_length=1,
        max_length=8,
        description="Código estable y único (ISO-3166 alpha-3).",
    )


class Roster(BaseModel):
    """Colección ordenada de países registrados, única por código.

    Por qué inmutable:
    - El motor devuelve el mismo objeto cuando rechaza, y uno nuevo cuando
      acepta; así nunca existe un estado a medio aplicar.
    """

    model_config = ConfigDict(frozen=True)

    countries: tuple[CountryRecord, ...] = Field(
        default=(),
        description="Países en orden de registro.",
    )

    def __len__(self) -> int:
        return len(self.countries)

    @property
    def codes(self) -> list[str]:
        return [c.code for c in self.countries]

    def find(self, code: str) -> CountryRecord | None:
        for country in self.countries:
            if country.code == code:
                return country
        return None

    def contains(self, code: str) -> bool:
        return self.find(code) is not None

    def count_continent(self, continent: str, *, exclude: str | None = None) -> int:
        """Cuenta países del continente, ignorando el código `exclude` si se indica."""

        return sum(
            1
            for c in self.countries
            if c.continent == continent and (exclude is None or c.code != exclude)
        )

    def continent_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for c in self.countries:
            counts[c.continent] = counts.get(c.continent, 0) + 1
        return counts

    def appended(self, country: CountryRecord) -> "Roster":
        return Roster(countries=(*self.countries, country))

    def replaced(self, code: str, country: CountryRecord) -> "Roster":
        return Roster(countries=tuple(country if c.code == code else c for c in self.countries))

    def without(self, code: str) -> "Roster":
        return Roster(countries=tuple(c for c in self.countries if c.code != code))


class _NamedRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw_name: str = Field(default="", description="Texto libre introducido por el usuario.")

    @field_validator("raw_name")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()


class InsertRequest(_NamedRequest):
    kind: Literal["insert"] = "insert"


class UpdateRequest(_NamedRequest):
    kind: Literal["update"] = "update"
    target_code: str = Field(..., min_length=1, description="Código del país que se reemplaza.")


class DeleteRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["delete"] = "delete"
    target_code: str = Field(..., min_length=1)


OperationRequest = Annotated[
    Union[InsertRequest, UpdateRequest, DeleteRequest],
    Field(discriminator="kind"),
]


class EditSession(BaseModel):
    """Estado transitorio de edición (no se persiste)."""

    model_config = ConfigDict(frozen=True)

    active: bool = False
    target_code: str | None = None

    @classmethod
    def idle(cls) -> "EditSession":
        return cls()

    @classmethod
    def editing(cls, code: str) -> "EditSession":
        return cls(active=True, target_code=code)

    def request_for(self, raw_name: str) -> InsertRequest | UpdateRequest:
        """Construye la petición que corresponde al modo actual (alta o edición)."""

        if self.active and self.target_code:
            return UpdateRequest(raw_name=raw_name, target_code=self.target_code)
        return InsertRequest(raw_name=raw_name)


class OutcomeKind(str, Enum):
    """Vocabulario de estados que ve el usuario."""

    REJECTED_EMPTY_INPUT = "rejected_empty_input"
    REJECTED_NOT_FOUND = "rejected_not_found"
    REJECTED_DUPLICATE_COUNTRY = "rejected_duplicate_country"
    REJECTED_ROSTER_FULL = "rejected_roster_full"
    REJECTED_CONTINENT_FULL = "rejected_continent_full"
    ACCEPTED_INSERTED = "accepted_inserted"
    ACCEPTED_UPDATED = "accepted_updated"
    ACCEPTED_DELETED = "accepted_deleted"
    EDIT_STARTED = "edit_started"
    EDIT_CANCELLED = "edit_cancelled"
    NO_CHANGE = "no_change"
    OPERATION_FAILED = "operation_failed"

    @property
    def is_rejection(self) -> bool:
        return self.value.startswith("rejected_")

    @property
    def is_mutation(self) -> bool:
        return self in (
            OutcomeKind.ACCEPTED_INSERTED,
            OutcomeKind.ACCEPTED_UPDATED,
            OutcomeKind.ACCEPTED_DELETED,
        )


class Outcome(BaseModel):
    """Resultado de una operación, con los datos a interpolar en el mensaje."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    country: CountryRecord | None = None
    continent: str | None = None
    code: str | None = None
    limit: int | None = None
    editing: bool = Field(
        default=False,
        description="Rechazo producido al editar (cambia la redacción del mensaje).",
    )
    detail: str | None = Field(
        default=None,
        description="Motivo interno (solo logging), nunca se muestra al usuario.",
    )

    @property
    def accepted(self) -> bool:
        return self.kind.is_mutation
