"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.continents import CANONICAL_CONTINENTS
from core.domain.models import OutcomeKind, Roster
from core.services.roster_service import RosterSummary, ServiceResult


def print_banner(console: Console) -> None:
    title = Text("🌍 Registro de Países", style="bold cyan")
    subtitle = Text("GlobalSportsTech • roster de selecciones", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_roster_table(roster: Roster, summary: RosterSummary) -> Table:
    """Tabla del roster con el contador `n/max` en el título."""

    table = Table(title=f"🌐 Países registrados ({summary.label})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Código", style="cyan", no_wrap=True)
    table.add_column("País", style="bold white")
    table.add_column("Continente", style="magenta")
    for idx, country in enumerate(roster.countries, start=1):
        table.add_row(str(idx), country.code, country.name, country.continent)
    return table


def build_continent_table(summary: RosterSummary) -> Table:
    table = Table(title="Por continente")
    table.add_column("Continente", style="magenta")
    table.add_column("Países", justify="right")
    counts = {continent: 0 for continent in CANONICAL_CONTINENTS}
    counts.update(summary.per_continent)
    for continent, count in counts.items():
        style = "red" if count >= summary.max_per_continent else "white"
        table.add_row(continent or "?", f"[{style}]{count}/{summary.max_per_continent}[/{style}]")
    return table


def build_rules_panel(lines: list[str]) -> Panel:
    body = Text()
    for line in lines:
        body.append(f"- {line}\n")
    return Panel(body, title="Reglas", border_style="blue")


def build_status_panel(result: ServiceResult) -> Panel:
    """Panel del mensaje de estado, coloreado según el tipo de resultado."""

    kind = result.outcome.kind
    if kind.is_mutation:
        style = "green"
    elif kind.is_rejection or kind is OutcomeKind.OPERATION_FAILED:
        style = "red"
    else:
        style = "yellow"
    return Panel(Text(result.message), border_style=style)


def print_roster(console: Console, roster: Roster, summary: RosterSummary) -> None:
    if not roster.countries:
        console.print(f"[dim]No hay países registrados aún. ({summary.label})[/dim]")
        return
    console.print(build_roster_table(roster, summary))
    console.print(build_continent_table(summary))
