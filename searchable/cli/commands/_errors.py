"""Единый вывод ошибок CLI команд."""

from typing import NoReturn

import typer
from rich.markup import escape
from rich.panel import Panel

from searchable.cli.console import console
from searchable.exceptions import ConfigurationError, SearchBackendError


def fail(error: Exception, title: str = "Ошибка") -> NoReturn:
    """Печатает ошибку в панели и завершает команду с кодом 1.

    Args:
        error: Пойманное исключение.
        title: Заголовок панели.

    Raises:
        typer.Exit: Всегда, с кодом 1.
    """
    hint = ""
    if isinstance(error, ConfigurationError):
        hint = "\n\n[dim]Проверьте searchable.toml и переменные SEARCHABLE_*[/dim]"
    elif isinstance(error, SearchBackendError) and error.backend:
        hint = f"\n\n[dim]Backend: {error.backend}[/dim]"

    console.print(
        Panel(
            f"[red]{escape(str(error))}[/red]{hint}",
            title=f"❌ {title}",
            border_style="red",
        )
    )
    raise typer.Exit(1)
