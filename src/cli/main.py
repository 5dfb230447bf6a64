"""CLI del registro de países (Typer + Rich).

La CLI es solo presentación: pide datos, confirma bajas y muestra el estado.
Toda regla vive en `core.services`.
"""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console

from cli import doctor
from cli.ui_components import (
    build_rules_panel,
    build_status_panel,
    print_banner,
    print_roster,
)
from core.config import AppSettings
from core.domain.language import Language
from core.errors import RosterStorageError
from core.services.roster_service import RosterService, ServiceResult, build_roster_service

app = typer.Typer(no_args_is_help=True, help="Registro de países con límites por continente.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _service(ctx: typer.Context) -> RosterService:
    obj = ctx.ensure_object(dict)
    if "service" not in obj:
        settings: AppSettings = obj.get("settings") or AppSettings()
        try:
            obj["service"] = build_roster_service(settings, language=obj.get("language"))
        except RosterStorageError as exc:
            _console.print(f"[red]No se pudo cargar el roster:[/red] {exc}")
            raise typer.Exit(code=2) from exc
    return obj["service"]


def _show(result: ServiceResult) -> None:
    _console.print(build_status_panel(result))


@app.callback()
def main(
    ctx: typer.Context,
    english: bool = typer.Option(False, "--english", "-e", help="Mensajes en inglés."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Logging DEBUG."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    obj = ctx.ensure_object(dict)
    obj["settings"] = settings
    obj["language"] = Language.ENGLISH if english else settings.default_language


@app.command(name="list")
def list_countries(ctx: typer.Context) -> None:
    """Muestra los países registrados."""

    service = _service(ctx)
    print_roster(_console, service.roster, service.summary())


@app.command()
def rules(ctx: typer.Context) -> None:
    """Muestra las reglas de registro."""

    _console.print(build_rules_panel(_service(ctx).rules()))


@app.command()
def add(ctx: typer.Context, name: str = typer.Argument(..., help="Nombre del país (p.ej. Japón).")) -> None:
    """Registra un país nuevo."""

    service = _service(ctx)
    result = asyncio.run(service.submit(name))
    _show(result)
    if not result.outcome.accepted:
        raise typer.Exit(code=1)


@app.command()
def edit(
    ctx: typer.Context,
    code: str = typer.Argument(..., help="Código del país a reemplazar (p.ej. JPN)."),
    name: str = typer.Argument(..., help="Nuevo nombre a buscar."),
) -> None:
    """Reemplaza un país registrado, conservando su posición."""

    service = _service(ctx)
    started = service.start_edit(code.upper())
    if not started.session.active:
        _show(started)
        raise typer.Exit(code=1)
    result = asyncio.run(service.submit(name))
    _show(result)
    if not result.outcome.accepted:
        raise typer.Exit(code=1)


@app.command()
def delete(
    ctx: typer.Context,
    code: str = typer.Argument(..., help="Código del país a eliminar."),
    yes: bool = typer.Option(False, "--yes", "-y", help="No pedir confirmación."),
) -> None:
    """Elimina un país del roster."""

    service = _service(ctx)
    code = code.upper()
    confirmed = yes or _confirm_delete(service, code)
    _show(asyncio.run(service.delete(code, confirm=lambda _c: confirmed)))


def _confirm_delete(service: RosterService, code: str) -> bool:
    country = service.roster.find(code)
    if country is None:
        return True
    return typer.confirm(f"¿Eliminar {country.name}?")


@app.command()
def interactive(ctx: typer.Context) -> None:
    """Formulario interactivo: agregar, editar, cancelar y eliminar."""

    service = _service(ctx)
    print_banner(_console)
    _console.print(build_rules_panel(service.rules()))
    asyncio.run(_interactive_loop(service))


async def _interactive_loop(service: RosterService) -> None:
    prefill = ""
    while True:
        print_roster(_console, service.roster, service.summary())
        editing = service.session.active
        actions = "[u]pdate, [c]ancel" if editing else "[a]dd, [e]dit"
        choice = typer.prompt(f"{actions}, [d]elete, [q]uit", default="u" if editing else "a").strip().lower()

        if choice == "q":
            return
        if choice in ("a", "u"):
            name = typer.prompt("País", default=prefill or "", show_default=bool(prefill))
            result = await service.submit(name)
            if result.outcome.accepted:
                prefill = ""
        elif choice == "e":
            result = service.start_edit(typer.prompt("Código").strip().upper())
            prefill = result.prefill
        elif choice == "c":
            result = service.cancel_edit()
            prefill = ""
        elif choice == "d":
            code = typer.prompt("Código").strip().upper()
            confirmed = _confirm_delete(service, code)
            result = await service.delete(code, confirm=lambda _c: confirmed)
            if not result.session.active:
                prefill = ""
        else:
            continue
        _show(result)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
