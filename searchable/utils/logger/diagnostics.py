"""Диагностические утилиты для системы логирования.

Функции:
    dump_debug_info()
        Собирает информацию о системе для баг-репортов.

    check_config()
        Валидирует конфигурацию логирования.

    get_handlers_info()
        Возвращает информацию об активных хендлерах.
"""

from __future__ import annotations

import logging
import os
import platform
import sqlite3
import sys
from datetime import datetime
from importlib import metadata
from pathlib import Path
from typing import Any

from .config import LoggingConfig

ROOT_LOGGER_NAME: str = "searchable"


def get_package_versions() -> dict[str, str]:
    """Версии пакета и его основных зависимостей."""
    versions: dict[str, str] = {}

    for package in ("searchable", "peewee", "pydantic", "pydantic-settings", "rich", "typer"):
        try:
            versions[package] = metadata.version(package)
        except metadata.PackageNotFoundError:
            versions[package] = "not installed"

    return versions


def get_sqlite_info() -> dict[str, str]:
    """Версия SQLite и доступность FTS5."""
    info: dict[str, str] = {"sqlite_version": sqlite3.sqlite_version}

    conn = sqlite3.connect(":memory:")
    try:
        conn.execute("CREATE VIRTUAL TABLE probe USING fts5(content)")
        info["fts5"] = "available"
    except sqlite3.OperationalError:
        info["fts5"] = "not available"
    finally:
        conn.close()

    return info


def get_handlers_info() -> list[dict[str, Any]]:
    """Получает информацию об активных хендлерах логирования.

    Returns:
        Список словарей с типом, уровнем, файлом и фильтрами хендлера.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers_info: list[dict[str, Any]] = []

    for handler in root_logger.handlers:
        handler_info: dict[str, Any] = {
            "type": type(handler).__name__,
            "level": logging.getLevelName(handler.level),
        }

        if isinstance(handler, logging.FileHandler):
            handler_info["file"] = handler.baseFilename

        if handler.formatter:
            handler_info["formatter"] = type(handler.formatter).__name__

        filters = [type(f).__name__ for f in handler.filters]
        if filters:
            handler_info["filters"] = filters

        handlers_info.append(handler_info)

    return handlers_info


def get_environment_vars() -> dict[str, str]:
    """Значения SEARCHABLE_* переменных окружения (секреты скрыты)."""
    prefix = "SEARCHABLE_"
    env_vars: dict[str, str] = {}

    for key, value in os.environ.items():
        if key.startswith(prefix):
            if any(secret in key.upper() for secret in ("KEY", "SECRET", "TOKEN", "PASSWORD")):
                env_vars[key] = "***SET***"
            else:
                env_vars[key] = value

    return env_vars


def dump_debug_info(config: LoggingConfig | None = None) -> str:
    """Собирает полную диагностическую информацию.

    Отчёт включает систему, версии пакетов, конфигурацию логирования,
    переменные SEARCHABLE_*, SQLite/FTS5 и активные хендлеры.

    Args:
        config: Конфигурация логирования (если None, берётся текущая).

    Returns:
        Отформатированный текстовый отчёт.
    """
    if config is None:
        from . import get_current_config

        config = get_current_config()

    lines: list[str] = [
        "=" * 40,
        "Searchable Debug Info",
        "=" * 40,
        f"Generated: {datetime.now().isoformat()}",
        "",
        "[System]",
        f"Python: {sys.version.split()[0]}",
        f"Platform: {platform.platform()}",
        "",
        "[Packages]",
    ]

    for package, version in sorted(get_package_versions().items()):
        lines.append(f"{package}: {version}")
    lines.append("")

    lines.append("[Logging Config]")
    lines.append(f"level: {config.level}")
    lines.append(f"file_level: {config.file_level}")
    lines.append(f"log_file: {config.log_file or 'None (console only)'}")
    lines.append(f"json_format: {config.json_format}")
    lines.append(f"redact_secrets: {config.redact_secrets}")
    lines.append("")

    lines.append("[Environment Variables]")
    env_vars = get_environment_vars()
    if env_vars:
        for key, value in sorted(env_vars.items()):
            lines.append(f"{key}: {value}")
    else:
        lines.append("No SEARCHABLE_* variables set")
    lines.append("")

    lines.append("[SQLite]")
    for key, value in get_sqlite_info().items():
        lines.append(f"{key}: {value}")
    lines.append("")

    lines.append("[Active Handlers]")
    handlers = get_handlers_info()
    if handlers:
        for i, h in enumerate(handlers, 1):
            handler_str = f"{i}. {h['type']} (level={h['level']})"
            if "file" in h:
                handler_str += f" → {h['file']}"
            lines.append(handler_str)
    else:
        lines.append("No handlers configured")

    lines.append("=" * 40)

    return "\n".join(lines)


def check_config(config: LoggingConfig | None = None) -> list[str]:
    """Валидирует конфигурацию логирования.

    Args:
        config: Конфигурация для проверки (если None, берётся текущая).

    Returns:
        Список предупреждений (пустой если всё OK).
    """
    if config is None:
        from . import get_current_config

        config = get_current_config()

    warnings: list[str] = []

    if config.log_file:
        log_path = Path(config.log_file)

        if not log_path.parent.exists():
            warnings.append(f"Log directory does not exist: {log_path.parent}")
        elif log_path.exists() and not os.access(log_path, os.W_OK):
            warnings.append(f"Log file is not writable: {log_path}")
        elif not log_path.exists() and not os.access(log_path.parent, os.W_OK):
            warnings.append(
                f"Cannot create log file, directory not writable: {log_path.parent}"
            )

    if get_sqlite_info()["fts5"] != "available":
        warnings.append("SQLite FTS5 is not available, the sqlite backend will not work")

    return warnings
