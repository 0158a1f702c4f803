"""Единая конфигурация searchable.

Загружает настройки из (в порядке приоритета):
1. Аргументы (CLI или код), переданные как kwargs
2. Environment variables (SEARCHABLE_*)
3. searchable.toml в текущей или родительских директориях
4. Default values

Классы:
    SearchableConfig
        Pydantic Settings с поддержкой TOML и env variables.

Функции:
    get_config
        Получить конфигурацию с возможными override'ами.
    find_config_file
        Найти searchable.toml в текущей или родительских директориях.

Example:
    >>> from searchable.config import get_config
    >>>
    >>> config = get_config(backend="sqlite", index_path="search.db")
    >>> config.search_limit
    100
"""

import tomllib
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from searchable.utils.logger import get_logger

logger = get_logger(__name__)


LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
BackendType = Literal["memory", "sqlite"]

CONFIG_FILE_NAME = "searchable.toml"

# Секции TOML -> поля конфига
_TOML_MAPPING: dict[tuple[str, str], str] = {
    ("index", "backend"): "backend",
    ("index", "path"): "index_path",
    ("search", "limit"): "search_limit",
    ("search", "sort_by_relevance"): "sort_by_relevance",
    ("logging", "level"): "log_level",
    ("logging", "file"): "log_file",
}


def find_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Найти searchable.toml в текущей или родительских директориях.

    Args:
        start_dir: Начальная директория поиска (по умолчанию cwd).

    Returns:
        Path к searchable.toml или None если не найден.
    """
    current = start_dir or Path.cwd()

    # Не больше 10 уровней вверх
    for _ in range(10):
        config_path = current / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_toml(path: Path) -> dict[str, Any]:
    """Загружает TOML и выравнивает секции в плоские поля.

    [index]
    backend = "sqlite"

    превращается в backend = "sqlite". Плоские ключи тоже поддерживаются.
    Нечитаемый файл даёт пустой словарь с предупреждением в логе.
    """
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load TOML", path=str(path), error=str(e))
        return {}

    flat: dict[str, Any] = {}

    for (section, key), field_name in _TOML_MAPPING.items():
        if isinstance(raw.get(section), dict) and key in raw[section]:
            flat[field_name] = raw[section][key]

    for field_name in _TOML_MAPPING.values():
        if field_name in raw:
            flat[field_name] = raw[field_name]

    return flat


class TomlConfigSource(PydanticBaseSettingsSource):
    """Источник настроек из searchable.toml (низший приоритет)."""

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        # Значения отдаются целиком через __call__
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        toml_path = find_config_file()
        if toml_path is None:
            return {}

        logger.debug("Loaded config from TOML", path=str(toml_path))
        return load_toml(toml_path)


class SearchableConfig(BaseSettings):
    """Единая конфигурация searchable.

    Attributes:
        backend: Поисковый backend (memory/sqlite).
        index_path: Файл SQLite индекса для backend=sqlite.
        search_limit: Лимит совпадений поискового запроса по умолчанию.
        sort_by_relevance: Сортировать ли переписанный запрос по релевантности.
        log_level: Уровень логирования.
        log_file: Путь к файлу логов.

    Environment Variables:
        SEARCHABLE_BACKEND, SEARCHABLE_INDEX_PATH, SEARCHABLE_SEARCH_LIMIT,
        SEARCHABLE_SORT_BY_RELEVANCE, SEARCHABLE_LOG_LEVEL, SEARCHABLE_LOG_FILE.
    """

    # === Index ===
    backend: BackendType = Field(
        default="memory",
        description="Поисковый backend",
    )

    index_path: Path = Field(
        default=Path(":memory:"),
        description="Файл SQLite индекса (для backend=sqlite)",
    )

    # === Search ===
    search_limit: int = Field(
        default=100,
        ge=1,
        le=10_000,
        description="Лимит совпадений поискового запроса по умолчанию",
    )

    sort_by_relevance: bool = Field(
        default=True,
        description="Сортировать результаты запроса в порядке релевантности",
    )

    # === Logging ===
    log_level: LogLevel = Field(
        default="INFO",
        description="Уровень логирования",
    )

    log_file: Optional[Path] = Field(
        default=None,
        description="Путь к файлу логов (None = только консоль)",
    )

    # === Validators ===
    @field_validator("index_path", mode="before")
    @classmethod
    def validate_index_path(cls, v: Any) -> Path:
        """Преобразует строку в Path, ":memory:" оставляет как есть."""
        if v is None or v == "":
            return Path(":memory:")
        if str(v) == ":memory:":
            return Path(":memory:")
        return Path(v).expanduser()

    @field_validator("log_file", mode="before")
    @classmethod
    def validate_log_file(cls, v: Any) -> Optional[Path]:
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def log_config_source(self) -> "SearchableConfig":
        logger.debug(
            "Config loaded",
            backend=self.backend,
            index_path=str(self.index_path),
            log_level=self.log_level,
        )
        return self

    model_config = SettingsConfigDict(
        env_prefix="SEARCHABLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Порядок источников: аргументы, env, .env, secrets, searchable.toml."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
            TomlConfigSource(settings_cls),
        )

    def to_toml_dict(self) -> dict:
        """Вложенный словарь для записи в searchable.toml."""
        return {
            "index": {
                "backend": self.backend,
                "path": str(self.index_path),
            },
            "search": {
                "limit": self.search_limit,
                "sort_by_relevance": self.sort_by_relevance,
            },
            "logging": {
                "level": self.log_level,
                **({"file": str(self.log_file)} if self.log_file else {}),
            },
        }


# === Global Config Accessor ===

_config: Optional[SearchableConfig] = None


def get_config(**overrides: Any) -> SearchableConfig:
    """Получить конфигурацию с возможными override'ами.

    При первом вызове создаёт конфигурацию. Если переданы overrides,
    всегда создаёт новый экземпляр.

    Args:
        **overrides: Значения с наивысшим приоритетом.

    Returns:
        SearchableConfig с учётом всех источников.
    """
    global _config

    if overrides or _config is None:
        _config = SearchableConfig(**overrides)

    return _config


def reset_config() -> None:
    """Сбросить глобальный конфиг (для тестов)."""
    global _config
    _config = None


__all__ = [
    "SearchableConfig",
    "get_config",
    "reset_config",
    "find_config_file",
    "load_toml",
    "TomlConfigSource",
    "LogLevel",
    "BackendType",
]
