"""Разбор front matter статей.

Поддерживаются два формата Hugo:
    ---          YAML (PyYAML safe_load)
    +++          TOML (tomllib)

Функции:
    split_front_matter
        Отделяет блок метаданных от тела статьи.
    parse_front_matter
        Разбирает метаданные в FrontMatter.

Классы:
    FrontMatterError
        Некорректный блок метаданных.
    FrontMatterBlock
        Сырой блок метаданных и тело статьи.
"""

import tomllib
from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Optional

import yaml

from blog_core.domain import FrontMatter, FrontMatterFormat

# Строки-ограничители для каждого формата
FENCES: dict[str, FrontMatterFormat] = {
    "---": FrontMatterFormat.YAML,
    "+++": FrontMatterFormat.TOML,
}

KNOWN_KEYS = frozenset({"title", "date", "draft", "tags", "description", "image"})


class FrontMatterError(ValueError):
    """Некорректный front matter.

    Attributes:
        path: Файл, в котором найдена ошибка (если известен).
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


@dataclass(frozen=True)
class FrontMatterBlock:
    """Результат split_front_matter().

    Attributes:
        format: Формат блока.
        raw: Текст метаданных без ограничителей.
        body: Тело статьи.
        body_line: Номер строки файла, с которой начинается тело (1-based).
    """

    format: FrontMatterFormat
    raw: str
    body: str
    body_line: int = 1


def split_front_matter(text: str, path: Optional[Path] = None) -> FrontMatterBlock:
    """Отделяет front matter от тела статьи.

    Args:
        text: Полный текст Markdown-файла.
        path: Путь к файлу (для сообщений об ошибках).

    Returns:
        FrontMatterBlock. Если файл не начинается с `---` или `+++`,
        format == NONE, а всё содержимое считается телом.

    Raises:
        FrontMatterError: Если закрывающий ограничитель не найден.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)

    if not lines:
        return FrontMatterBlock(FrontMatterFormat.NONE, "", "")

    fence = lines[0].rstrip()
    fmt = FENCES.get(fence)
    if fmt is None:
        return FrontMatterBlock(FrontMatterFormat.NONE, "", text)

    for index in range(1, len(lines)):
        if lines[index].rstrip() == fence:
            raw = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            return FrontMatterBlock(fmt, raw, body, body_line=index + 2)

    raise FrontMatterError(f"Unterminated front matter (missing closing '{fence}')", path)


def parse_front_matter(
    text: str, path: Optional[Path] = None
) -> tuple[FrontMatter, FrontMatterBlock]:
    """Разбирает метаданные статьи.

    Args:
        text: Полный текст Markdown-файла.
        path: Путь к файлу (для сообщений об ошибках).

    Returns:
        Кортеж (FrontMatter, FrontMatterBlock).

    Raises:
        FrontMatterError: Если блок не парсится или поля имеют неверный тип.
    """
    block = split_front_matter(text, path)

    if block.format == FrontMatterFormat.NONE:
        return FrontMatter(), block

    data = _load_raw(block, path)
    return _to_front_matter(data, path), block


def _load_raw(block: FrontMatterBlock, path: Optional[Path]) -> dict[str, Any]:
    if block.format == FrontMatterFormat.TOML:
        try:
            return tomllib.loads(block.raw)
        except tomllib.TOMLDecodeError as e:
            raise FrontMatterError(f"Invalid TOML front matter: {e}", path) from e

    try:
        data = yaml.safe_load(block.raw)
    except (yaml.YAMLError, ValueError) as e:
        # ValueError: невозможная дата вроде 2023-02-30 из timestamp-конструктора PyYAML
        raise FrontMatterError(f"Invalid YAML front matter: {e}", path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping, got {type(data).__name__}", path
        )
    return data


def _to_front_matter(data: dict[str, Any], path: Optional[Path]) -> FrontMatter:
    title = data.get("title")
    description = data.get("description")
    image = data.get("image")

    return FrontMatter(
        title="" if title is None else str(title),
        date=_parse_date(data.get("date"), path),
        draft=_parse_bool(data.get("draft", False), "draft", path),
        tags=_parse_tags(data.get("tags"), path),
        description="" if description is None else str(description),
        image=None if image in (None, "") else str(image),
        extra={k: v for k, v in data.items() if k not in KNOWN_KEYS},
    )


def _parse_date(value: Any, path: Optional[Path]) -> Optional[datetime]:
    """YAML отдаёт datetime/date, TOML — datetime/date, строки — ISO 8601."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise FrontMatterError(f"Invalid date {value!r}", path) from e
    raise FrontMatterError(f"Invalid date {value!r}", path)


def _parse_bool(value: Any, key: str, path: Optional[Path]) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise FrontMatterError(f"'{key}' must be true or false, got {value!r}", path)


def _parse_tags(value: Any, path: Optional[Path]) -> list[str]:
    """Теги: список или строка через запятую."""
    if value is None:
        return []
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    if isinstance(value, (list, tuple)):
        return [str(tag).strip() for tag in value if str(tag).strip()]
    raise FrontMatterError(f"'tags' must be a list or string, got {value!r}", path)


__all__ = [
    "FrontMatterError",
    "FrontMatterBlock",
    "split_front_matter",
    "parse_front_matter",
]
