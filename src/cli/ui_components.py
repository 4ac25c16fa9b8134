"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- El core devuelve un `BatchResult`; aquí solo se presenta.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.domain.models import BatchResult, FileOutcome

_OUTCOME_STYLES: dict[FileOutcome, str] = {
    FileOutcome.STAMPED: "green",
    FileOutcome.SKIPPED: "yellow",
    FileOutcome.FAILED: "red",
}


def build_summary_table(result: BatchResult) -> Table:
    """Tabla Rich con el resultado de cada archivo procesado."""

    table = Table(title="pdfstamp")
    table.add_column("Input", style="cyan")
    table.add_column("Status", no_wrap=True)
    table.add_column("Output / Error", style="dim")

    for item in result.files:
        status = Text(item.outcome.value, style=_OUTCOME_STYLES[item.outcome])
        detail = str(item.output_path) if item.output_path else (item.detail or "")
        table.add_row(str(item.input_path), status, detail)
    return table


def print_summary(console: Console, result: BatchResult) -> None:
    console.print(build_summary_table(result))
    console.print(
        f"[green]{result.count(FileOutcome.STAMPED)} stamped[/green], "
        f"[yellow]{result.count(FileOutcome.SKIPPED)} skipped[/yellow], "
        f"[red]{result.count(FileOutcome.FAILED)} failed[/red]"
    )
