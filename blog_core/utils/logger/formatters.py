"""Эмодзи модулей, префикс контекста и форматтер файла логов.

Консоль (RichHandler) показывает готовое сообщение из BlogLogger:

    📤 [sync/blog.example.com] Uploading public/ -> admin@blog.example.com:~/

Файл дополнительно получает время, модуль, уровень и остальной контекст.
"""

import json
import logging
from datetime import datetime
from typing import Any

from .levels import TRACE

# Ищется по частям имени логгера, с конца
EMOJI_MAP: dict[str, str] = {
    "pipeline": "🚀",
    "deploy": "🚀",
    "builder": "🏗️",
    "sync": "📤",
    "runner": "⚙️",
    "repository": "📚",
    "front_matter": "🧾",
    "markdown_parser": "🧶",
    "content": "📝",
    "config": "⚙️",
    "doctor_cmd": "🩺",
    "cli": "🖥️",
}

# INFO без эмодзи уровня: используется эмодзи модуля
LEVEL_EMOJI: dict[int, str] = {
    TRACE: "🔬",
    logging.DEBUG: "🔧",
    logging.WARNING: "⚠️",
    logging.ERROR: "❌",
    logging.CRITICAL: "💀",
}

FALLBACK_EMOJI: str = "📌"

CONTEXT_ID_KEYS: tuple[str, ...] = ("step", "host", "slug")

_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def get_module_emoji(logger_name: str) -> str:
    for part in reversed(logger_name.lower().split(".")):
        if part in EMOJI_MAP:
            return EMOJI_MAP[part]
    return FALLBACK_EMOJI


def format_context_prefix(context: dict[str, Any]) -> str:
    """{"step": "sync", "host": "h"} -> "[sync/h] ", без идентификаторов -> ""."""
    ids = [str(context[key]) for key in CONTEXT_ID_KEYS if context.get(key)]
    return f"[{'/'.join(ids)}] " if ids else ""


def format_extra_context(record: logging.LogRecord) -> dict[str, Any]:
    """Поля из extra, кроме step/host/slug (они уже в префиксе сообщения)."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS
        and key not in CONTEXT_ID_KEYS
        and not key.startswith("_")
    }


class FileFormatter(logging.Formatter):
    """Строка файла логов.

    2026-01-03 14:20:02 | RUNNER | TRACE | 🔬 [sync] $ rsync -avz ... | returncode=0

    Args:
        json_context: Контекст в конце строки как JSON, а не key=value.
    """

    def __init__(self, json_context: bool = False) -> None:
        super().__init__()
        self.json_context = json_context

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        fields = [
            timestamp,
            record.name.rsplit(".", 1)[-1].upper(),
            record.levelname,
            record.getMessage(),
        ]

        extra = format_extra_context(record)
        if extra and self.json_context:
            fields.append(json.dumps(extra, ensure_ascii=False, default=str))
        elif extra:
            fields.append(" ".join(f"{key}={value}" for key, value in extra.items()))

        line = " | ".join(fields)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line
