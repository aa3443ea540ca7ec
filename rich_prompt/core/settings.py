"""
core/settings.py
Настройки Rich Prompt шлюза.
Читает TOML-файл конфигурации (путь приходит из CLI), любые поля можно
перекрыть переменными окружения RICH_PROMPT_* или .env.
"""
from __future__ import annotations

import tomllib
from pathlib import Path
from typing import List, Optional, Tuple, Type

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
    TomlConfigSettingsSource,
)


class ConfigError(RuntimeError):
    """Конфигурация не читается или невалидна — сервис не стартует."""


def split_bind_addr(value: str) -> Tuple[str, int]:
    """'127.0.0.1:8080' / '[::1]:8080' -> (host, port)"""
    host, sep, port = value.strip().rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"bind_addr must look like host:port, got {value!r}")
    port_num = int(port)
    if port_num > 65535:
        raise ValueError(f"bind_addr port out of range: {port_num}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host, port_num


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RICH_PROMPT_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    bind_addr: str = Field(..., description="Адрес прослушивания, host:port")
    system_template: str = Field(..., description="System-промпт без стиля (как есть)")
    system_with_style_template: str = Field(..., description="System-промпт с плейсхолдером {style}")
    api_keys: List[str] = Field(..., min_length=1, description="Ключи апстрима; клиент на каждый")
    base_url: Optional[str] = Field(None, description="OpenAI-совместимый base URL (по умолчанию — из openai)")

    @field_validator("bind_addr")
    @classmethod
    def _check_bind_addr(cls, v: str) -> str:
        split_bind_addr(v)
        return v.strip()

    @property
    def host(self) -> str:
        return split_bind_addr(self.bind_addr)[0]

    @property
    def port(self) -> int:
        return split_bind_addr(self.bind_addr)[1]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # init > env > .env > TOML
        return (init_settings, env_settings, dotenv_settings, TomlConfigSettingsSource(settings_cls))


def load_settings(path: Path | str) -> Settings:
    """Читает конфиг один раз на старте. Любая проблема -> ConfigError."""
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"config file not found: {path}")

    class FileSettings(Settings):
        model_config = SettingsConfigDict(toml_file=path)

    try:
        return FileSettings()
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: invalid TOML: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"{path}: invalid config: {e}") from e
    except (SettingsError, OSError) as e:
        raise ConfigError(f"{path}: {e}") from e
