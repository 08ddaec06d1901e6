"""Модель статьи блога.

Классы:
    FrontMatterFormat
        Формат блока метаданных в начале файла.
    FrontMatter
        Метаданные статьи (title, date, draft, tags, ...).
    CodeBlock
        Fenced-блок кода внутри статьи.
    Post
        Статья: путь, метаданные, тело и блоки кода.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class FrontMatterFormat(str, Enum):
    """Формат front matter.

    Attributes:
        YAML: Между строками `---`.
        TOML: Между строками `+++`.
        NONE: Блока метаданных нет.
    """

    YAML = "yaml"
    TOML = "toml"
    NONE = "none"


@dataclass
class FrontMatter:
    """Метаданные статьи.

    Attributes:
        title: Заголовок.
        date: Дата публикации (None если не указана).
        draft: Черновик (не публикуется генератором).
        tags: Список тегов.
        description: Краткое описание для превью.
        image: Ссылка на обложку.
        extra: Прочие ключи, не известные модели.
    """

    title: str = ""
    date: Optional[datetime] = None
    draft: bool = False
    tags: list[str] = field(default_factory=list)
    description: str = ""
    image: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CodeBlock:
    """Блок кода в теле статьи.

    Attributes:
        language: Язык из info-строки fence (пустая строка если не указан).
        code: Содержимое блока.
        line: Номер строки открывающего fence в файле статьи (1-based).
    """

    language: str
    code: str
    line: int


@dataclass
class Post:
    """Статья блога.

    Attributes:
        path: Путь к Markdown-файлу.
        slug: Идентификатор статьи (имя файла или директории page bundle).
        front_matter: Разобранные метаданные.
        body: Текст статьи без front matter.
        code_blocks: Блоки кода в порядке появления.
        format: Формат front matter.
    """

    path: Path
    slug: str
    front_matter: FrontMatter
    body: str = ""
    code_blocks: list[CodeBlock] = field(default_factory=list)
    format: FrontMatterFormat = FrontMatterFormat.YAML

    @property
    def title(self) -> str:
        return self.front_matter.title or self.slug

    @property
    def is_draft(self) -> bool:
        return self.front_matter.draft

    @property
    def languages(self) -> list[str]:
        """Уникальные языки блоков кода в порядке появления."""
        seen: list[str] = []
        for block in self.code_blocks:
            if block.language and block.language not in seen:
                seen.append(block.language)
        return seen

    def __repr__(self) -> str:
        draft = ", draft" if self.is_draft else ""
        return f"Post(slug='{self.slug}', title='{self.title}'{draft})"
