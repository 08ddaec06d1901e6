"""Blog Core — инструменты для статей и деплоя Hugo-блога.

Архитектура:
    Domain: Чистые DTO (Post, FrontMatter, DeployTarget, DeployReport).
    Content: Разбор статей (front matter, блоки кода) и их проверка.
    Deploy: Сборка генератором и заливка через rsync/ssh.
    CLI: Typer-приложение `blog`.

Пример:
    >>> from blog_core import get_config, build_pipeline, ContentRepository
    >>>
    >>> config = get_config()
    >>> repo = ContentRepository(config.content_path)
    >>> print(len(repo.list_posts()))
    >>>
    >>> report = build_pipeline(config).run()
    >>> print(report.confirmation)
"""

__version__ = "0.3.0"

from blog_core.config import BlogConfig, get_config, reset_config
from blog_core.content import ContentIssue, ContentRepository, FrontMatterError
from blog_core.deploy import DeployError, DeployPipeline, build_pipeline
from blog_core.domain import (
    CodeBlock,
    DeployReport,
    DeployTarget,
    FrontMatter,
    Post,
    StepResult,
    StepStatus,
)

__all__ = [
    "__version__",
    "BlogConfig",
    "get_config",
    "reset_config",
    "ContentRepository",
    "ContentIssue",
    "FrontMatterError",
    "DeployPipeline",
    "DeployError",
    "build_pipeline",
    "Post",
    "FrontMatter",
    "CodeBlock",
    "DeployTarget",
    "DeployReport",
    "StepResult",
    "StepStatus",
]
