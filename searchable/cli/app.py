"""Typer приложение — главный CLI.

Определяет глобальные опции и монтирует команды.

Attributes:
    app: Главное Typer приложение.
"""

from pathlib import Path
from typing import Optional

import typer

from searchable.cli.context import CLIContext

app = typer.Typer(
    name="searchable",
    help="🔍 searchable CLI — обслуживание поискового индекса моделей.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

_cli_context: Optional[CLIContext] = None


def get_cli_context() -> CLIContext:
    """Текущий CLI контекст (дефолтный, если команда вызвана напрямую)."""
    if _cli_context is None:
        return CLIContext()
    return _cli_context


def version_callback(value: bool) -> None:
    """Показать версию и выйти."""
    if value:
        from searchable import __version__

        typer.echo(f"searchable v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    index_path: Optional[Path] = typer.Option(
        None,
        "--index-path",
        "-i",
        help="Путь к файлу SQLite индекса.",
        envvar="SEARCHABLE_INDEX_PATH",
    ),
    backend: Optional[str] = typer.Option(
        None,
        "--backend",
        "-b",
        help="Поисковый backend: memory, sqlite.",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Уровень логирования: TRACE, DEBUG, INFO, WARNING, ERROR.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Вывод в формате JSON (для скриптов).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Показать версию и выйти.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """🔍 searchable CLI — обслуживание поискового индекса моделей."""
    global _cli_context

    _cli_context = CLIContext(
        index_path=index_path,
        backend=backend,
        log_level=log_level,
        json_output=json_output,
    )
    ctx.obj = _cli_context


# === Монтирование команд ===

from searchable.cli.commands import config_cmd, index_cmd, search_cmd  # noqa: E402

app.add_typer(config_cmd.app, name="config")
app.command("search")(search_cmd.search)
app.command("stats")(index_cmd.stats)
app.command("flush")(index_cmd.flush)
app.command("reindex")(index_cmd.reindex)


__all__ = ["app", "get_cli_context"]
