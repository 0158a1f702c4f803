"""Команда config — просмотр и проверка конфигурации.

Подкоманды:
    show: Показать текущую конфигурацию.
    check: Проверить настройки backend'а и логирования.

Usage:
    searchable config show
    searchable config check
"""

import json

import typer
from pydantic import ValidationError
from rich.table import Table

from searchable.cli.commands._errors import fail
from searchable.cli.console import console
from searchable.config import find_config_file
from searchable.exceptions import SearchableError

app = typer.Typer(
    help="🔧 Просмотр и проверка конфигурации.",
)


@app.command("show")
def show() -> None:
    """Показать текущую конфигурацию."""
    from searchable.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    try:
        config = cli_ctx.get_config()
    except (ValidationError, SearchableError) as e:
        fail(e, "Ошибка загрузки конфигурации")

    toml_path = find_config_file()

    if cli_ctx.json_output:
        data = {
            "source": str(toml_path) if toml_path else None,
            "config": config.to_toml_dict(),
        }
        console.print_json(json.dumps(data))
        return

    source = str(toml_path) if toml_path else "defaults + environment"
    console.print("\n[bold]⚙️  Текущая конфигурация[/bold]")
    console.print(f"[dim]Источник: {source}[/dim]\n")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Настройка", style="cyan")
    table.add_column("Значение")

    for section, values in config.to_toml_dict().items():
        for key, value in values.items():
            table.add_row(f"{section}.{key}", str(value))

    if not config.log_file:
        table.add_row("logging.file", "[dim]not set[/dim]")

    console.print(table)


@app.command("check")
def check() -> None:
    """Проверить, что backend создаётся и логирование настроено корректно."""
    from searchable.cli.app import get_cli_context
    from searchable.utils.logger import LoggingConfig
    from searchable.utils.logger.diagnostics import check_config, get_sqlite_info

    cli_ctx = get_cli_context()

    try:
        config = cli_ctx.get_config()
        backend = cli_ctx.get_backend()
    except (ValidationError, SearchableError) as e:
        fail(e, "Конфигурация некорректна")

    warnings = check_config(LoggingConfig(level=config.log_level, log_file=config.log_file))
    if config.backend == "memory":
        warnings.append("Backend memory не сохраняет индекс между запусками CLI")
    sqlite_info = get_sqlite_info()

    if cli_ctx.json_output:
        data = {
            "ok": not warnings,
            "backend": backend.name,
            "sqlite": sqlite_info,
            "warnings": warnings,
        }
        console.print_json(json.dumps(data))
        return

    console.print(f"[green]✓[/green] Backend: [cyan]{backend.name}[/cyan]")
    for key, value in sqlite_info.items():
        console.print(f"[dim]{key}: {value}[/dim]")

    if warnings:
        for warning in warnings:
            console.print(f"[yellow]⚠️  {warning}[/yellow]")
    else:
        console.print("[green]✓[/green] Логирование настроено корректно")
