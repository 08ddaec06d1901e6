"""Работа со статьями блога.

Модули:
    front_matter: Разбор YAML/TOML метаданных.
    markdown_parser: Извлечение блоков кода и заголовков.
    repository: Загрузка, фильтрация и проверка статей.
"""

from blog_core.content.front_matter import (
    FrontMatterBlock,
    FrontMatterError,
    parse_front_matter,
    split_front_matter,
)
from blog_core.content.markdown_parser import MarkdownContentParser
from blog_core.content.repository import ContentIssue, ContentRepository

__all__ = [
    "FrontMatterBlock",
    "FrontMatterError",
    "parse_front_matter",
    "split_front_matter",
    "MarkdownContentParser",
    "ContentIssue",
    "ContentRepository",
]
