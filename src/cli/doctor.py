"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.json_storage import JsonFileBlobStore, RosterRepository
from adapters.restcountries import RestCountriesResolver
from core.config import AppSettings, write_user_env_vars
from core.errors import RosterStorageError
from core.services.constraint_engine import RosterLimits

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_resolver(settings: AppSettings) -> tuple[bool, str]:
    country = await RestCountriesResolver(settings).resolve("Japan")
    if country is None:
        return False, f"lookup failed ({settings.resolver_base_url})"
    return True, f"{country.name} -> {country.continent} ({country.code})"


def _check_storage(settings: AppSettings) -> tuple[bool, str]:
    store = JsonFileBlobStore(settings.storage_path)
    repository = RosterRepository(
        store,
        key=settings.storage_key,
        on_corrupt="fail",
        limits=RosterLimits(settings.max_countries, settings.max_per_continent),
    )
    try:
        roster = repository.load()
    except RosterStorageError as exc:
        return False, str(exc)
    return True, f"{len(roster)} countries in {store.path}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="country-roster Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Limits", "OK", f"{settings.max_countries} total / {settings.max_per_continent} per continent")
    table.add_row("Language", "OK", settings.default_language.label())

    ok_http, detail_http = asyncio.run(_check_resolver(settings))
    table.add_row("REST Countries", "OK" if ok_http else "FAIL", detail_http)

    ok_storage, detail_storage = _check_storage(settings)
    table.add_row("Storage", "OK" if ok_storage else "FAIL", detail_storage)

    _console.print(table)

    if not ok_storage:
        _console.print(
            "\n[yellow]Note:[/yellow] with COUNTRY_ROSTER_ON_CORRUPT_STORAGE=reset the corrupt roster is discarded on next start."
        )


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    language = typer.prompt("Language (es/en)", default="es", show_default=True).strip().lower()
    if language not in ("es", "en"):
        raise typer.BadParameter("language must be 'es' or 'en'")
    base_url = typer.prompt(
        "REST Countries base URL",
        default="https://restcountries.com/v3.1",
        show_default=True,
    ).strip()
    on_corrupt = typer.prompt("On corrupt storage (reset/fail)", default="reset", show_default=True).strip().lower()
    if on_corrupt not in ("reset", "fail"):
        raise typer.BadParameter("on_corrupt must be 'reset' or 'fail'")

    env_path = write_user_env_vars(
        {
            "COUNTRY_ROSTER_DEFAULT_LANGUAGE": language,
            "COUNTRY_ROSTER_RESOLVER_BASE_URL": base_url,
            "COUNTRY_ROSTER_ON_CORRUPT_STORAGE": on_corrupt,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
