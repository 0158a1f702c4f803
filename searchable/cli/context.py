"""CLI Context — контейнер зависимостей для команд.

Компоненты создаются лениво, чтобы --help работал мгновенно.

Classes:
    CLIContext: Контейнер с ленивой загрузкой конфигурации и backend'а.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rich.console import Console

from searchable.cli.console import console as default_console
from searchable.config import SearchableConfig, get_config
from searchable.exceptions import ConfigurationError
from searchable.interfaces import BaseSearchBackend


@dataclass
class CLIContext:
    """Контейнер зависимостей для CLI команд.

    Attributes:
        index_path: Override пути к файлу индекса.
        backend: Override типа backend'а.
        log_level: Override уровня логирования.
        json_output: Режим JSON вывода (для скриптов).
        console: Rich Console для вывода.
    """

    index_path: Optional[Path] = None
    backend: Optional[str] = None
    log_level: Optional[str] = None
    json_output: bool = False
    console: Console = field(default_factory=lambda: default_console)

    _config: Optional[SearchableConfig] = field(default=None, init=False, repr=False)
    _backend: Optional[BaseSearchBackend] = field(default=None, init=False, repr=False)
    _logging_configured: bool = field(default=False, init=False, repr=False)

    def get_config(self) -> SearchableConfig:
        """Конфигурация с применёнными CLI override'ами."""
        if self._config is None:
            overrides: dict = {}
            if self.index_path:
                overrides["index_path"] = self.index_path
            if self.backend:
                overrides["backend"] = self.backend
            if self.log_level:
                overrides["log_level"] = self.log_level

            self._config = get_config(**overrides)
            self._ensure_logging(self._config)
        return self._config

    def get_backend(self) -> BaseSearchBackend:
        """Получить или создать поисковый backend.

        Raises:
            ConfigurationError: Если backend неизвестен.
            SearchBackendError: Если backend не может быть инициализирован.
        """
        if self._backend is None:
            from searchable.infrastructure.index import create_backend

            self._backend = create_backend(self.get_config())
        return self._backend

    def get_index_backend(self) -> BaseSearchBackend:
        """Backend для команд, читающих уже заполненный индекс.

        memory живёт только внутри процесса: в новом запуске CLI он всегда
        пуст, поэтому search/stats/flush требуют постоянного backend'а.

        Raises:
            ConfigurationError: Если выбран backend memory.
        """
        config = self.get_config()
        if config.backend == "memory":
            raise ConfigurationError(
                "Backend 'memory' is empty in a new CLI process; "
                "use --backend sqlite with --index-path"
            )
        return self.get_backend()

    def _ensure_logging(self, config: SearchableConfig) -> None:
        """Настройка логирования из конфига (один раз)."""
        if self._logging_configured:
            return

        from searchable.utils.logger import LoggingConfig, setup_logging

        setup_logging(LoggingConfig(level=config.log_level, log_file=config.log_file))
        self._logging_configured = True
