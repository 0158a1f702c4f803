"""Команды обслуживания индекса.

Команды:
    stats: Количество документов коллекции.
    flush: Удалить все документы коллекции.
    reindex: Проиндексировать все строки модели заново.

Usage:
    searchable stats articles
    searchable flush articles --yes
    searchable reindex myapp.models:Article --batch-size 200
"""

import importlib
import json
from typing import Optional

import typer
from peewee import Model
from pydantic import ValidationError
from rich.markup import escape

from searchable.cli.commands._errors import fail
from searchable.cli.console import console
from searchable.exceptions import ConfigurationError, SearchableError
from searchable.integrations.base import SearchIndex
from searchable.integrations.search_proxy import SearchProxy


def load_model(target: str) -> type[Model]:
    """Импортирует модель по строке вида 'package.module:Model'.

    Raises:
        ConfigurationError: Если модуль или класс не найдены,
            либо класс не является Peewee моделью.
    """
    module_name, sep, class_name = target.partition(":")
    if not sep or not module_name or not class_name:
        raise ConfigurationError(
            f"Invalid model path '{target}', expected 'package.module:Model'"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import module '{module_name}': {e}") from e

    model = getattr(module, class_name, None)
    if not isinstance(model, type) or not issubclass(model, Model):
        raise ConfigurationError(f"'{target}' is not a peewee Model")
    return model


def find_search_index(model: type[Model], attribute: Optional[str] = None) -> SearchProxy:
    """Находит дескриптор SearchIndex модели.

    Args:
        model: Класс модели.
        attribute: Имя атрибута дескриптора, если их несколько.

    Raises:
        ConfigurationError: Если дескриптор не найден или выбор неоднозначен.
    """
    descriptors = {
        name: value
        for klass in reversed(model.__mro__)
        for name, value in vars(klass).items()
        if isinstance(value, SearchIndex)
    }

    if attribute is not None:
        if attribute not in descriptors:
            raise ConfigurationError(
                f"{model.__name__} has no SearchIndex attribute '{attribute}'"
            )
        return SearchProxy(model, descriptors[attribute])

    if not descriptors:
        raise ConfigurationError(f"{model.__name__} has no SearchIndex descriptor")
    if len(descriptors) > 1:
        raise ConfigurationError(
            f"{model.__name__} has several SearchIndex descriptors "
            f"({', '.join(sorted(descriptors))}), pass --index"
        )

    return SearchProxy(model, next(iter(descriptors.values())))


def stats(
    index_type: str = typer.Argument(..., help="Коллекция индекса."),
) -> None:
    """📊 Количество документов коллекции."""
    from searchable.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    try:
        backend = cli_ctx.get_index_backend()
        count = backend.count(index_type)
    except (ValidationError, SearchableError) as e:
        fail(e, "Ошибка получения статистики")

    if cli_ctx.json_output:
        console.print_json(
            json.dumps({"index_type": index_type, "backend": backend.name, "count": count})
        )
        return

    console.print(
        f"📊 [cyan]{escape(index_type)}[/cyan]: [bold]{count}[/bold] документов "
        f"[dim]({backend.name})[/dim]"
    )


def flush(
    index_type: str = typer.Argument(..., help="Коллекция индекса."),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Не спрашивать подтверждение.",
    ),
) -> None:
    """🗑️  Удалить все документы коллекции."""
    from searchable.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    if not yes and not cli_ctx.json_output:
        typer.confirm(f"Удалить все документы '{index_type}'?", abort=True)

    try:
        removed = cli_ctx.get_index_backend().drop(index_type)
    except (ValidationError, SearchableError) as e:
        fail(e, "Ошибка очистки индекса")

    if cli_ctx.json_output:
        console.print_json(json.dumps({"index_type": index_type, "removed": removed}))
        return

    console.print(f"[green]✓[/green] Удалено документов: [bold]{removed}[/bold]")


def reindex(
    target: str = typer.Argument(..., help="Модель в виде 'package.module:Model'."),
    batch_size: int = typer.Option(
        500,
        "--batch-size",
        "-s",
        min=1,
        help="Размер пачки при обходе таблицы.",
    ),
    attribute: Optional[str] = typer.Option(
        None,
        "--index",
        help="Атрибут SearchIndex, если у модели их несколько.",
    ),
) -> None:
    """🔄 Проиндексировать все строки модели заново.

    Документы пишутся в индекс клиента, указанного в дескрипторе модели.
    """
    from searchable.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    try:
        cli_ctx.get_config()
        proxy = find_search_index(load_model(target), attribute)
        failures_before = proxy.descriptor.binder.failures
        with console.status(f"Индексация {escape(proxy.index_type)}..."):
            indexed = proxy.reindex(batch_size=batch_size)
        failed = proxy.descriptor.binder.failures - failures_before
    except (ValidationError, SearchableError) as e:
        fail(e, "Ошибка переиндексации")

    if cli_ctx.json_output:
        console.print_json(
            json.dumps(
                {"index_type": proxy.index_type, "indexed": indexed, "failures": failed}
            )
        )
        return

    console.print(
        f"[green]✓[/green] [cyan]{escape(proxy.index_type)}[/cyan]: "
        f"проиндексировано [bold]{indexed}[/bold]"
    )
    if failed:
        console.print(f"[yellow]⚠️  Ошибок индексации: {failed}[/yellow]")
