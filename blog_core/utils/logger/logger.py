"""BlogLogger: logging.Logger с привязанным контекстом шага деплоя."""

from __future__ import annotations

import logging
import shlex
import traceback
from typing import Any, Sequence

from .formatters import LEVEL_EMOJI, format_context_prefix, get_module_emoji
from .levels import TRACE


class BlogLogger:
    """Обёртка над logging.Logger.

    Контекст (step, host, slug, ...) уходит в extra записи, а
    идентификаторы ещё и в начало сообщения, потому что RichHandler
    форматтер не использует.

    Example:
        >>> log = get_logger("blog_core.deploy.sync").bind(step="sync", host="h")
        >>> log.info("Upload started")  # 📤 [sync/h] Upload started
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None) -> None:
        self.name = name
        self._logger = logging.getLogger(name)
        self._context: dict[str, Any] = dict(context or {})

    def bind(self, **context: Any) -> BlogLogger:
        """Новый логгер с тем же именем и дополненным контекстом."""
        return BlogLogger(self.name, {**self._context, **context})

    def log(self, level: int, msg: str, **context: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return

        extra = {**self._context, **context}
        emoji = LEVEL_EMOJI.get(level) or get_module_emoji(self.name)
        self._logger.log(level, f"{emoji} {format_context_prefix(extra)}{msg}", extra=extra)

    def trace(self, msg: str, **context: Any) -> None:
        self.log(TRACE, msg, **context)

    def debug(self, msg: str, **context: Any) -> None:
        self.log(logging.DEBUG, msg, **context)

    def info(self, msg: str, **context: Any) -> None:
        self.log(logging.INFO, msg, **context)

    def warning(self, msg: str, **context: Any) -> None:
        self.log(logging.WARNING, msg, **context)

    def error(self, msg: str, **context: Any) -> None:
        self.log(logging.ERROR, msg, **context)

    def trace_command(
        self,
        command: Sequence[str],
        *,
        cwd: str | None = None,
        returncode: int | None = None,
        duration_ms: float | None = None,
    ) -> None:
        """Командная строка внешней программы в shell-виде.

        Пример сообщения: `$ hugo --environment production exit=0 time=812ms`.
        """
        command_line = shlex.join(command)
        summary = [f"$ {command_line}"]
        context: dict[str, Any] = {"command": command_line}

        if cwd:
            context["cwd"] = cwd
        if returncode is not None:
            context["returncode"] = returncode
            summary.append(f"exit={returncode}")
        if duration_ms is not None:
            context["duration_ms"] = round(duration_ms, 2)
            summary.append(f"time={duration_ms:.0f}ms")

        self.trace(" ".join(summary), **context)

    def error_with_context(
        self,
        exc: Exception,
        msg: str | None = None,
        *,
        include_traceback: bool = True,
        **context: Any,
    ) -> None:
        """ERROR с типом исключения и (по умолчанию) traceback в extra."""
        context.update(exception_type=type(exc).__name__, exception_msg=str(exc))
        if include_traceback:
            context["traceback"] = traceback.format_exc()

        self.error(msg or str(exc), **context)
