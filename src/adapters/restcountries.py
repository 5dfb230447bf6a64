"""Resolver de países: REST Countries v3.1.

Implementación:
- `GET {base}/name/{name}` y se toma la primera coincidencia.
- `name.common` -> nombre, `region` (o `continents[0]`, o "") -> continente
  normalizado, `cca3` -> código.

Notas:
- Cualquier error de red, status no-2xx o payload inesperado se colapsa a
  `None`. El Core no distingue "no existe" de "falló la consulta".
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.continents import normalize_continent
from core.domain.models import CountryRecord
from core.interfaces.resolver import CountryResolver

logger = logging.getLogger(__name__)


def _raw_region(match: dict[str, Any]) -> str:
    region = match.get("region")
    if isinstance(region, str) and region:
        return region
    continents = match.get("continents")
    if isinstance(continents, list) and continents and isinstance(continents[0], str):
        return continents[0]
    return ""


def parse_country_payload(data: object) -> CountryRecord | None:
    """Convierte la respuesta JSON del proveedor en un `CountryRecord`."""

    if not isinstance(data, list) or not data:
        return None
    match = data[0]
    if not isinstance(match, dict):
        return None

    names = match.get("name")
    common = names.get("common") if isinstance(names, dict) else None
    code = match.get("cca3")
    if not isinstance(common, str) or not isinstance(code, str):
        return None

    try:
        return CountryRecord(
            name=common,
            continent=normalize_continent(_raw_region(match)),
            code=code,
        )
    except ValidationError:
        return None


class RestCountriesResolver(CountryResolver):
    """Resuelve nombres libres contra restcountries.com."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def url_for(self, name: str) -> str:
        base = self._settings.resolver_base_url.rstrip("/")
        return f"{base}/name/{quote(name, safe='')}"

    async def resolve(self, name: str) -> CountryRecord | None:
        url = self.url_for(name)
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                resp = await client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("country lookup failed for %r: %s", name, exc)
            return None

        if not resp.is_success:
            logger.debug("country lookup %r -> HTTP %s", name, resp.status_code)
            return None

        try:
            data = resp.json()
        except ValueError:
            logger.warning("country lookup %r returned invalid JSON", name)
            return None

        country = parse_country_payload(data)
        if country is None:
            logger.warning("country lookup %r returned an unexpected payload", name)
        return country
