"""Настройки сайта, сборки и деплоя.

Источники, от сильного к слабому: опции CLI (kwargs), переменные BLOG_*
и .env, blog.toml (ищется от --site-dir или cwd вверх), значения по
умолчанию. Умолчания повторяют ручной деплой: hugo в окружении
production, rsync -avz --delete public/ на user@host:~/dir.

Example:
    >>> from blog_core.config import get_config
    >>>
    >>> config = get_config()
    >>> target = config.require_remote()
    >>> print(target.destination)
    admin@example.com:~/apps/site/public/
"""

import os
import tomllib
from pathlib import Path
from typing import Annotated, Any, Optional

from dotenv import dotenv_values
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from blog_core.domain import DeployTarget
from blog_core.utils.logger import get_logger
from blog_core.utils.logger.config import LogLevel

logger = get_logger(__name__)

CONFIG_FILE_NAME = "blog.toml"
ENV_PREFIX = "BLOG_"

# Маппинг секций TOML -> полей конфига
TOML_MAPPING: dict[tuple[str, str], str] = {
    ("site", "root"): "site_dir",
    ("site", "content_dir"): "content_dir",
    ("site", "public_dir"): "public_dir",
    ("build", "environment"): "environment",
    ("build", "hugo"): "hugo_bin",
    ("build", "args"): "build_args",
    ("remote", "user"): "remote_user",
    ("remote", "host"): "remote_host",
    ("remote", "dir"): "remote_dir",
    ("remote", "key"): "ssh_key",
    ("sync", "rsync"): "rsync_bin",
    ("sync", "ssh"): "ssh_bin",
    ("sync", "delete"): "delete",
    ("logging", "level"): "log_level",
    ("logging", "file"): "log_file",
}


def find_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Найти blog.toml в текущей или родительских директориях.

    Args:
        start_dir: Начальная директория поиска (по умолчанию cwd).

    Returns:
        Path к blog.toml или None если не найден.
    """
    current = start_dir or Path.cwd()

    # Ищем вверх по дереву директорий (максимум 10 уровней)
    for _ in range(10):
        config_path = current / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


class BlogConfig(BaseSettings):
    """Единая конфигурация сборки и деплоя блога.

    Attributes:
        site_dir: Корень Hugo-проекта (здесь запускается сборка).
        content_dir: Директория со статьями (относительно site_dir).
        public_dir: Директория результата сборки (относительно site_dir).
        environment: Окружение Hugo (--environment).
        hugo_bin: Исполняемый файл генератора.
        build_args: Дополнительные аргументы сборки.
        remote_user: Пользователь SSH.
        remote_host: Хост для заливки.
        remote_dir: Директория на хосте относительно домашней.
        ssh_key: Путь к приватному ключу (не проверяется при деплое).
        rsync_bin: Исполняемый файл rsync.
        ssh_bin: Исполняемый файл ssh (транспорт rsync).
        delete: Удалять на хосте файлы, которых нет локально.
        log_level: Уровень логирования.
        log_file: Путь к файлу логов.

    Environment Variables:
        BLOG_REMOTE_HOST, BLOG_REMOTE_USER, BLOG_SSH_KEY, BLOG_ENVIRONMENT,
        ... и другие с префиксом BLOG_.
    """

    # === Site ===
    site_dir: Path = Field(
        default=Path("."),
        description="Корень Hugo-проекта",
    )

    content_dir: Path = Field(
        default=Path("content"),
        description="Директория со статьями",
    )

    public_dir: Path = Field(
        default=Path("public"),
        description="Директория результата сборки",
    )

    # === Build ===
    environment: str = Field(
        default="production",
        min_length=1,
        description="Окружение Hugo (--environment)",
    )

    hugo_bin: str = Field(
        default="hugo",
        description="Исполняемый файл генератора",
    )

    build_args: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Дополнительные аргументы сборки",
    )

    # === Remote ===
    remote_user: Optional[str] = Field(
        default=None,
        description="Пользователь SSH",
    )

    remote_host: Optional[str] = Field(
        default=None,
        description="Хост для заливки",
    )

    remote_dir: str = Field(
        default="",
        description="Директория на хосте относительно домашней",
    )

    ssh_key: Optional[Path] = Field(
        default=None,
        description="Путь к приватному ключу SSH",
    )

    # === Sync ===
    rsync_bin: str = Field(
        default="rsync",
        description="Исполняемый файл rsync",
    )

    ssh_bin: str = Field(
        default="ssh",
        description="Исполняемый файл ssh",
    )

    delete: bool = Field(
        default=True,
        description="Удалять на хосте файлы, отсутствующие локально",
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
    @field_validator("site_dir", "content_dir", "public_dir", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Any:
        """Раскрывает ~ в путях."""
        if isinstance(v, (str, Path)):
            return Path(v).expanduser()
        return v

    @field_validator("ssh_key", "log_file", mode="before")
    @classmethod
    def optional_path(cls, v: Any) -> Optional[Path]:
        """Пустая строка = не задано."""
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @field_validator("remote_user", "remote_host", mode="before")
    @classmethod
    def strip_whitespace(cls, v: Any) -> Optional[str]:
        if v is None or str(v).strip() == "":
            return None
        return str(v).strip()

    @field_validator("build_args", mode="before")
    @classmethod
    def split_build_args(cls, v: Any) -> Any:
        """Строка аргументов из env превращается в список."""
        if isinstance(v, str):
            return v.split()
        return v

    @model_validator(mode="after")
    def log_config_source(self) -> "BlogConfig":
        logger.debug(
            "Config loaded",
            site_dir=str(self.site_dir),
            environment=self.environment,
            remote_host=self.remote_host,
            has_key=self.ssh_key is not None,
        )
        return self

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **data: Any):
        """Инициализация с поддержкой TOML файла.

        Значения из blog.toml имеют низший приоритет: env variables
        и переданные аргументы переопределяют их.
        """
        # --site-dir из CLI задаёт и место поиска blog.toml
        start_dir = Path(data["site_dir"]).expanduser() if data.get("site_dir") else None
        toml_path = find_config_file(start_dir)
        toml_data: dict = {}

        if toml_path:
            toml_data = self._load_toml(toml_path)
            logger.debug("Loaded config from TOML", path=str(toml_path))

        # Env должен перебивать TOML, поэтому TOML-значения, заданные в env,
        # не передаём как init-аргументы (у них высший приоритет в pydantic-settings)
        env_names = _env_names()
        toml_data = {
            key: value
            for key, value in toml_data.items()
            if f"{ENV_PREFIX}{key}".upper() not in env_names
        }

        merged = {**toml_data, **data}
        super().__init__(**merged)

    @staticmethod
    def _load_toml(path: Path) -> dict:
        """Загружает и выравнивает TOML файл.

        [remote]
        host = "example.com"

        превращается в плоское remote_host = "example.com".

        Raises:
            ValueError: Если файл не является валидным TOML.
        """
        try:
            with open(path, "rb") as f:
                raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid {path}: {e}") from e

        flat: dict = {}

        for (section, key), field_name in TOML_MAPPING.items():
            if isinstance(raw.get(section), dict) and key in raw[section]:
                flat[field_name] = raw[section][key]

        # Плоские ключи тоже поддерживаем
        for field_name in TOML_MAPPING.values():
            if field_name in raw:
                flat[field_name] = raw[field_name]

        # Относительный site.root считается от расположения blog.toml
        site_dir = flat.get("site_dir")
        if site_dir is not None:
            site_path = Path(site_dir).expanduser()
            if not site_path.is_absolute():
                flat["site_dir"] = path.parent / site_path
        else:
            flat["site_dir"] = path.parent

        return flat

    # === Derived paths ===

    @property
    def content_path(self) -> Path:
        """content_dir, разрешённый относительно site_dir."""
        return self._resolve(self.content_dir)

    @property
    def public_path(self) -> Path:
        """public_dir, разрешённый относительно site_dir."""
        return self._resolve(self.public_dir)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_dir / path

    # === Utility Methods ===

    def require_remote(self) -> DeployTarget:
        """Собрать DeployTarget или выбросить исключение.

        Путь к ключу передаётся как есть, без проверки существования.

        Raises:
            ValueError: Если не заданы пользователь или хост.
        """
        missing = []
        if not self.remote_user:
            missing.append("remote_user (BLOG_REMOTE_USER)")
        if not self.remote_host:
            missing.append("remote_host (BLOG_REMOTE_HOST)")

        if missing:
            raise ValueError(
                f"Remote not configured: {', '.join(missing)}. "
                f"Set it via environment variable or [remote] in {CONFIG_FILE_NAME}"
            )

        return DeployTarget(
            user=self.remote_user,
            host=self.remote_host,
            directory=self.remote_dir,
            key_path=self.ssh_key,
        )

    def to_toml_dict(self) -> dict:
        """Преобразует конфигурацию в структуру для TOML.

        Note:
            Содержимое ключа никогда не читается; в TOML попадает только путь.
        """
        remote: dict[str, Any] = {"dir": self.remote_dir}
        if self.remote_user:
            remote["user"] = self.remote_user
        if self.remote_host:
            remote["host"] = self.remote_host
        if self.ssh_key:
            remote["key"] = str(self.ssh_key)

        return {
            "site": {
                "root": str(self.site_dir),
                "content_dir": str(self.content_dir),
                "public_dir": str(self.public_dir),
            },
            "build": {
                "environment": self.environment,
                "hugo": self.hugo_bin,
                "args": list(self.build_args),
            },
            "remote": remote,
            "sync": {
                "rsync": self.rsync_bin,
                "ssh": self.ssh_bin,
                "delete": self.delete,
            },
            "logging": {
                "level": self.log_level,
                **({"file": str(self.log_file)} if self.log_file else {}),
            },
        }


def _env_names() -> set[str]:
    """Имена переменных (в верхнем регистре) из окружения и .env в cwd."""
    names = {key.upper() for key in os.environ}
    names.update(key.upper() for key in dotenv_values(".env"))
    return names


# === Global Config Accessor ===

_config: Optional[BlogConfig] = None


def get_config(**overrides: Any) -> BlogConfig:
    """Общий BlogConfig процесса.

    Без аргументов возвращает закэшированный экземпляр. С override'ами
    (опции CLI) пересобирает его и кэширует новый.
    """
    global _config

    if overrides or _config is None:
        _config = BlogConfig(**overrides)

    return _config


def reset_config() -> None:
    """Сбросить глобальный конфиг (для тестов)."""
    global _config
    _config = None


__all__ = [
    "BlogConfig",
    "get_config",
    "reset_config",
    "find_config_file",
    "CONFIG_FILE_NAME",
    "LogLevel",
]
