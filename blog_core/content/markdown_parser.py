"""Парсер тела статьи на основе AST (markdown-it-py).

Классы:
    MarkdownContentParser
        Извлекает блоки кода и заголовки из Markdown.
"""

from markdown_it import MarkdownIt

from blog_core.domain import CodeBlock
from blog_core.utils.logger import get_logger

logger = get_logger(__name__)


class MarkdownContentParser:
    """AST-парсер тела статьи.

    Код в статьях иллюстративный: он только извлекается для подсчёта
    и проверки разметки, но никогда не исполняется.

    Attributes:
        md: Экземпляр MarkdownIt парсера (CommonMark).
    """

    def __init__(self):
        self.md = MarkdownIt("commonmark")

    def extract_code_blocks(self, body: str, line_offset: int = 1) -> list[CodeBlock]:
        """Извлекает fenced-блоки кода.

        Args:
            body: Тело статьи (без front matter).
            line_offset: Номер строки файла, с которой начинается body.

        Returns:
            Список CodeBlock в порядке появления. Indented code blocks
            не включаются.
        """
        blocks: list[CodeBlock] = []

        for token in self.md.parse(body):
            if token.type != "fence":
                continue

            info = token.info.strip()
            language = info.split()[0] if info else ""
            start = token.map[0] if token.map else 0

            blocks.append(
                CodeBlock(
                    language=language,
                    code=token.content,
                    line=start + line_offset,
                )
            )

        logger.trace("Code blocks extracted", count=len(blocks))
        return blocks

    def extract_headings(self, body: str) -> list[tuple[int, str]]:
        """Извлекает заголовки статьи.

        Returns:
            Список (уровень, текст), например [(2, "Data layer")].
        """
        tokens = self.md.parse(body)
        headings: list[tuple[int, str]] = []

        for index, token in enumerate(tokens):
            if token.type != "heading_open":
                continue
            level = int(token.tag[1:])
            inline = tokens[index + 1] if index + 1 < len(tokens) else None
            text = inline.content.strip() if inline is not None else ""
            headings.append((level, text))

        return headings


__all__ = ["MarkdownContentParser"]
