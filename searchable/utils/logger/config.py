"""Конфигурация системы логирования.

Классы:
    LoggingConfig
        Pydantic-модель для настройки логирования с поддержкой env variables.

Environment Variables:
    SEARCHABLE_LOG_LEVEL: Уровень логирования (DEBUG/INFO/WARNING/ERROR).
    SEARCHABLE_LOG_FILE: Путь к файлу логов.
    SEARCHABLE_LOG_JSON: Включить JSON-формат (true/false).
    SEARCHABLE_LOG_REDACT: Маскировать пароли и токены (true/false).
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseSettings):
    """Конфигурация системы логирования.

    Приоритет настроек (от высшего к низшему):
        1. Явный параметр в коде
        2. Environment variable с префиксом SEARCHABLE_LOG_
        3. Default value

    Attributes:
        level: Минимальный уровень для консольного вывода.
        file_level: Минимальный уровень для файлового вывода.
        log_file: Путь к файлу логов (None = только консоль).
        json_format: Писать контекст в файл как JSON.
        show_path: Показывать путь к модулю в выводе.
        redact_secrets: Маскировать пароли, токены и ключи в логах.

    Example:
        >>> config = LoggingConfig(level="DEBUG", log_file="/tmp/searchable.log")
    """

    level: LogLevel = Field(
        default="INFO",
        description="Минимальный уровень для консольного вывода",
    )

    file_level: LogLevel = Field(
        default="DEBUG",
        description="Минимальный уровень для файлового вывода",
    )

    log_file: Path | None = Field(
        default=None,
        alias="file",
        description="Путь к файлу логов (None = только консоль)",
    )

    json_format: bool = Field(
        default=False,
        alias="json",
        description="Использовать JSON для контекста в файле",
    )

    show_path: bool = Field(
        default=False,
        description="Показывать путь к модулю в выводе",
    )

    redact_secrets: bool = Field(
        default=True,
        alias="redact",
        description="Маскировать секреты в логах",
    )

    model_config = SettingsConfigDict(
        env_prefix="SEARCHABLE_LOG_",
        env_file=None,
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )
