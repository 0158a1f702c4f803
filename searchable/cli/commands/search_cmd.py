"""Команда search — поиск по коллекции индекса.

Usage:
    searchable search articles "python orm"
    searchable search articles "python" --limit 5 --filter published=true
"""

import json
from typing import Any, Optional

import typer
from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from searchable.cli.commands._errors import fail
from searchable.cli.console import console
from searchable.exceptions import ConfigurationError, SearchableError


def parse_filters(raw: list[str]) -> dict[str, Any]:
    """Разбирает фильтры вида field=value.

    Значения true/false и целые числа приводятся к bool/int,
    остальное остаётся строкой.

    Raises:
        ConfigurationError: Если фильтр без знака '='.
    """
    filters: dict[str, Any] = {}
    for item in raw:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise ConfigurationError(f"Invalid filter '{item}', expected field=value")

        lowered = value.lower()
        if lowered in ("true", "false"):
            filters[name] = lowered == "true"
        elif value.lstrip("-").isdigit():
            filters[name] = int(value)
        else:
            filters[name] = value
    return filters


def _preview(fields: dict[str, Any], width: int = 60) -> str:
    text = ", ".join(f"{k}={v}" for k, v in fields.items())
    if len(text) > width:
        return text[: width - 3] + "..."
    return text


def search(
    index_type: str = typer.Argument(..., help="Коллекция индекса."),
    query: str = typer.Argument(..., help="Поисковый запрос."),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        min=1,
        help="Максимум совпадений (по умолчанию search.limit).",
    ),
    filters: list[str] = typer.Option(
        [],
        "--filter",
        "-f",
        help="Фильтр field=value, можно указать несколько раз.",
    ),
) -> None:
    """🔍 Поиск по коллекции индекса в порядке релевантности."""
    from searchable.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    try:
        parsed = parse_filters(filters)
        backend = cli_ctx.get_index_backend()
        size = limit or cli_ctx.get_config().search_limit
        results = backend.search(
            index_type, lambda q: q.match(query).filter(**parsed).limit(size)
        )
    except (ValidationError, SearchableError) as e:
        fail(e, "Ошибка поиска")

    if cli_ctx.json_output:
        data = {
            "index_type": index_type,
            "query": query,
            "total": results.total,
            "hits": [
                {"key": hit.key, "score": hit.score, "fields": hit.fields}
                for hit in results
            ],
        }
        console.print_json(json.dumps(data, default=str))
        return

    if results.is_empty():
        console.print(f"[yellow]Ничего не найдено в '{escape(index_type)}'[/yellow]")
        return

    table = Table(
        title=f"🔍 {escape(query)} · {len(results)} из {results.total}",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Key", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Fields")

    for position, hit in enumerate(results, start=1):
        table.add_row(
            str(position),
            escape(str(hit.key)),
            f"{hit.score:.3f}",
            escape(_preview(hit.fields)),
        )

    console.print(table)
