from __future__ import annotations

import pytest

from core.domain.models import CountryRecord, Roster

POOL: dict[str, list[tuple[str, str]]] = {
    "Asia": [("Japan", "JPN"), ("China", "CHN"), ("South Korea", "KOR"), ("India", "IND"), ("Thailand", "THA")],
    "Europa": [("France", "FRA"), ("Spain", "ESP"), ("Germany", "DEU"), ("Italy", "ITA"), ("Portugal", "PRT")],
    "América": [("Brazil", "BRA"), ("Argentina", "ARG"), ("Mexico", "MEX"), ("Chile", "CHL"), ("Peru", "PER")],
    "África": [("Egypt", "EGY"), ("Nigeria", "NGA"), ("Morocco", "MAR"), ("Ghana", "GHA"), ("Kenya", "KEN")],
    "Oceanía": [("Australia", "AUS"), ("New Zealand", "NZL"), ("Fiji", "FJI")],
}


def _country(continent: str, index: int) -> CountryRecord:
    name, code = POOL[continent][index]
    return CountryRecord(name=name, continent=continent, code=code)


class FakeResolver:
    """Resolver en memoria: busca por nombre (case-insensitive) y registra llamadas."""

    def __init__(self, countries: list[CountryRecord] | None = None) -> None:
        self.calls: list[str] = []
        self._by_name: dict[str, CountryRecord] = {}
        for country in countries or all_countries():
            self.add(country)

    def add(self, country: CountryRecord, *aliases: str) -> None:
        for key in (country.name, *aliases):
            self._by_name[key.lower()] = country

    async def resolve(self, name: str) -> CountryRecord | None:
        self.calls.append(name)
        return self._by_name.get(name.lower())


def all_countries() -> list[CountryRecord]:
    return [_country(continent, i) for continent, items in POOL.items() for i in range(len(items))]


@pytest.fixture
def country():
    """Factory: `country("Asia", 0)` -> Japan/JPN."""

    return _country


@pytest.fixture
def asia_full_roster() -> Roster:
    # JPN, CHN, KOR, IND + dos europeos
    return Roster(
        countries=(
            _country("Asia", 0),
            _country("Europa", 0),
            _country("Asia", 1),
            _country("Asia", 2),
            _country("Europa", 1),
            _country("Asia", 3),
        )
    )


@pytest.fixture
def full_roster() -> Roster:
    """16 países: 4 de América, Europa, Asia y África."""

    return Roster(
        countries=tuple(
            _country(continent, i)
            for continent in ("América", "Europa", "Asia", "África")
            for i in range(4)
        )
    )


@pytest.fixture
def fake_resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def country_pool() -> list[CountryRecord]:
    return all_countries()
