import asyncio

import httpx

from adapters.restcountries import RestCountriesResolver, parse_country_payload
from core.config import AppSettings

JAPAN_PAYLOAD = [
    {
        "name": {"common": "Japan", "official": "Japan"},
        "cca3": "JPN",
        "region": "Asia",
        "continents": ["Asia"],
    }
]


def _resolver(handler) -> RestCountriesResolver:
    settings = AppSettings(resolver_base_url="https://countries.test/v3.1")
    return RestCountriesResolver(settings, transport=httpx.MockTransport(handler))


def test_parse_first_match():
    country = parse_country_payload(JAPAN_PAYLOAD + [{"name": {"common": "Other"}, "cca3": "OTH"}])

    assert country is not None
    assert (country.name, country.continent, country.code) == ("Japan", "Asia", "JPN")


def test_parse_region_fallbacks():
    from_continents = parse_country_payload(
        [{"name": {"common": "X"}, "cca3": "XXX", "region": "", "continents": ["Europe"]}]
    )
    empty = parse_country_payload([{"name": {"common": "Y"}, "cca3": "YYY"}])

    assert from_continents.continent == "Europa"
    assert empty.continent == ""


def test_parse_malformed_payloads():
    assert parse_country_payload({"status": 404, "message": "Not Found"}) is None
    assert parse_country_payload([]) is None
    assert parse_country_payload(["Japan"]) is None
    assert parse_country_payload([{"name": "Japan", "cca3": "JPN"}]) is None
    assert parse_country_payload([{"name": {"common": "Japan"}}]) is None
    assert parse_country_payload([{"name": {"common": ""}, "cca3": "JPN"}]) is None


def test_resolve_success_builds_url():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=JAPAN_PAYLOAD)

    country = asyncio.run(_resolver(handler).resolve("Japón"))

    assert country is not None and country.code == "JPN"
    assert seen == ["https://countries.test/v3.1/name/Jap%C3%B3n"]


def test_resolve_not_found_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"status": 404, "message": "Not Found"})

    assert asyncio.run(_resolver(handler).resolve("Atlantis")) is None


def test_resolve_transport_error_collapses_to_none():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    assert asyncio.run(_resolver(handler).resolve("Japan")) is None


def test_resolve_invalid_json_collapses_to_none():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    assert asyncio.run(_resolver(handler).resolve("Japan")) is None
