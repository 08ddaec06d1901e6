"""Настройки логирования (env prefix BLOG_LOG_)."""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseSettings):
    """Куда и насколько подробно писать логи.

    Консоль по умолчанию показывает INFO: шаги деплоя и итог. Файл
    получает всё, включая TRACE с полными командами hugo и rsync.

    Attributes:
        level: Уровень консоли (BLOG_LOG_LEVEL).
        file_level: Уровень файла (BLOG_LOG_FILE_LEVEL).
        log_file: Файл логов, `file=` или BLOG_LOG_FILE.
        json_format: Контекст в файле как JSON, `json=` или BLOG_LOG_JSON.
        show_path: Показывать модуль и строку в консоли.
        redact_secrets: Маскировать ключи и токены, `redact=` или BLOG_LOG_REDACT.
    """

    level: LogLevel = "INFO"
    file_level: LogLevel = "TRACE"
    log_file: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("file", "BLOG_LOG_FILE"),
    )
    json_format: bool = Field(
        default=False,
        validation_alias=AliasChoices("json", "BLOG_LOG_JSON"),
    )
    show_path: bool = False
    redact_secrets: bool = Field(
        default=True,
        validation_alias=AliasChoices("redact", "BLOG_LOG_REDACT"),
    )

    model_config = SettingsConfigDict(
        env_prefix="BLOG_LOG_",
        env_file=None,
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )
