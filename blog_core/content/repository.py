"""Репозиторий статей в директории content/.

Классы:
    ContentIssue
        Проблема, найденная при проверке статьи.
    ContentRepository
        Загрузка, фильтрация и проверка статей.
"""

from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Literal, Optional

from blog_core.content.front_matter import FrontMatterError, parse_front_matter
from blog_core.content.markdown_parser import MarkdownContentParser
from blog_core.domain import Post
from blog_core.utils.logger import get_logger

logger = get_logger(__name__)

Severity = Literal["error", "warning"]

MARKDOWN_SUFFIXES = (".md", ".markdown")


@dataclass(frozen=True)
class ContentIssue:
    """Проблема в статье.

    Attributes:
        path: Файл статьи.
        severity: error — статья некорректна, warning — стоит поправить.
        message: Описание.
    """

    path: Path
    severity: Severity
    message: str


class ContentRepository:
    """Статьи блога в директории контента.

    Section-страницы Hugo (`_index.md`) статьями не считаются.
    Для page bundle (`posts/my-post/index.md`) slug — имя директории.

    Attributes:
        content_dir: Корень контента.
        parser: Парсер тела статьи.

    Example:
        >>> repo = ContentRepository(Path("content"))
        >>> for post in repo.list_posts(tag="flutter"):
        ...     print(post.slug, post.front_matter.date)
    """

    def __init__(
        self,
        content_dir: Path,
        parser: Optional[MarkdownContentParser] = None,
    ):
        self.content_dir = Path(content_dir)
        self.parser = parser or MarkdownContentParser()

    def iter_paths(self) -> Iterator[Path]:
        """Все Markdown-файлы статей в отсортированном порядке."""
        if not self.content_dir.is_dir():
            logger.warning("Content directory not found", path=str(self.content_dir))
            return

        paths = (
            path
            for path in self.content_dir.rglob("*")
            if path.is_file()
            and path.suffix.lower() in MARKDOWN_SUFFIXES
            and not path.name.startswith("_")
        )
        yield from sorted(paths)

    def load(self, path: Path) -> Post:
        """Загрузить статью.

        Raises:
            FrontMatterError: Если метаданные некорректны или файл не в UTF-8.
            OSError: Если файл не читается.
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise FrontMatterError(f"not valid UTF-8: {e}", path) from e
        front_matter, block = parse_front_matter(text, path)

        post = Post(
            path=Path(path),
            slug=self._slug_for(Path(path), front_matter.extra.get("slug")),
            front_matter=front_matter,
            body=block.body,
            code_blocks=self.parser.extract_code_blocks(block.body, block.body_line),
            format=block.format,
        )
        logger.trace("Post loaded", slug=post.slug, code_blocks=len(post.code_blocks))
        return post

    def iter_posts(self) -> Iterator[Post]:
        """Все статьи, включая черновики. Битые файлы пропускаются с warning."""
        for path in self.iter_paths():
            try:
                yield self.load(path)
            except FrontMatterError as e:
                logger.warning(f"Skipping post: {e}", path=str(path))

    def list_posts(
        self,
        include_drafts: bool = False,
        tag: Optional[str] = None,
    ) -> list[Post]:
        """Статьи от новых к старым, статьи без даты — в конце.

        Args:
            include_drafts: Включать черновики.
            tag: Только статьи с этим тегом (без учёта регистра).
        """
        posts = [
            post
            for post in self.iter_posts()
            if (include_drafts or not post.is_draft)
            and (tag is None or tag.lower() in (t.lower() for t in post.front_matter.tags))
        ]
        return sorted(posts, key=_newest_first)

    def get(self, slug: str) -> Post:
        """Найти статью по slug (черновики тоже).

        Raises:
            KeyError: Если статьи нет.
        """
        for post in self.iter_posts():
            if post.slug == slug:
                return post
        raise KeyError(slug)

    def tags(self) -> dict[str, int]:
        """Количество опубликованных статей по тегам, самые частые первыми."""
        counter: Counter[str] = Counter()
        for post in self.list_posts():
            counter.update(post.front_matter.tags)
        return dict(sorted(counter.items(), key=lambda item: (-item[1], item[0])))

    def validate(self) -> list[ContentIssue]:
        """Проверить все статьи.

        Ошибки: битый front matter, нет заголовка, повторяющийся slug.
        Предупреждения: нет даты, блок кода без языка.
        """
        issues: list[ContentIssue] = []
        seen_slugs: dict[str, Path] = {}

        for path in self.iter_paths():
            try:
                post = self.load(path)
            except FrontMatterError as e:
                issues.append(ContentIssue(path, "error", str(e)))
                continue

            meta = post.front_matter
            if not meta.title:
                issues.append(ContentIssue(path, "error", "missing title"))
            if meta.date is None:
                issues.append(ContentIssue(path, "warning", "missing date"))

            for block in post.code_blocks:
                if not block.language:
                    issues.append(
                        ContentIssue(
                            path,
                            "warning",
                            f"code block without language at line {block.line}",
                        )
                    )

            if post.slug in seen_slugs:
                issues.append(
                    ContentIssue(
                        path,
                        "error",
                        f"duplicate slug '{post.slug}' (also {seen_slugs[post.slug]})",
                    )
                )
            else:
                seen_slugs[post.slug] = path

        logger.debug(
            "Content validated",
            files=len(seen_slugs),
            issues=len(issues),
        )
        return issues

    @staticmethod
    def _slug_for(path: Path, explicit: Optional[object]) -> str:
        if explicit:
            return str(explicit)
        if path.stem == "index":
            return path.parent.name
        return path.stem


def _newest_first(post: Post) -> tuple:
    published = post.front_matter.date
    if published is None:
        return (1, 0.0, post.slug)
    return (0, -published.timestamp(), post.slug)


__all__ = ["ContentRepository", "ContentIssue"]
