"""Логирование blog_core.

Все логгеры пакета живут под корнем `blog_core`. setup_logging() вешает
на корень консольный RichHandler (stderr) и, если задан файл, FileHandler.
Оба хендлера проходят через SensitiveDataFilter.

Example:
    >>> from blog_core.utils.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.bind(step="build").info("Building site")  # 🏗️ [build] Building site
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import LoggingConfig
from .filters import SensitiveDataFilter
from .formatters import FileFormatter
from .levels import TRACE, install_trace_level
from .logger import BlogLogger

install_trace_level()

ROOT_LOGGER_NAME: str = "blog_core"

_current_config: LoggingConfig | None = None


def _console_handler(config: LoggingConfig) -> logging.Handler:
    # stdout занят таблицами и --json; markup=False, иначе [sync/host] станет стилем rich
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_level=False,
        show_path=config.show_path,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(logging.getLevelName(config.level))
    return handler


def _file_handler(config: LoggingConfig) -> logging.Handler:
    handler = logging.FileHandler(config.log_file, encoding="utf-8")
    handler.setLevel(logging.getLevelName(config.file_level))
    handler.setFormatter(FileFormatter(json_context=config.json_format))
    return handler


def setup_logging(config: LoggingConfig | None = None) -> None:
    """(Пере)настраивает хендлеры корневого логгера blog_core.

    Повторный вызов закрывает прежние хендлеры, поэтому CLI может
    перенастроить уровень после загрузки blog.toml.
    """
    global _current_config

    config = config or LoggingConfig()
    root = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    handlers = [_console_handler(config)]
    if config.log_file:
        handlers.append(_file_handler(config))

    for handler in handlers:
        if config.redact_secrets:
            handler.addFilter(SensitiveDataFilter())
        root.addHandler(handler)

    # Уровни режут хендлеры, корень пропускает всё
    root.setLevel(TRACE)
    root.propagate = False

    _current_config = config


def get_logger(name: str) -> BlogLogger:
    """Логгер модуля; при первом вызове включает логирование по умолчанию."""
    if _current_config is None:
        setup_logging()
    return BlogLogger(name)


__all__ = [
    "TRACE",
    "BlogLogger",
    "FileFormatter",
    "LoggingConfig",
    "SensitiveDataFilter",
    "get_logger",
    "setup_logging",
]
