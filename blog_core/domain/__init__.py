"""Доменный слой с чистыми объектами данных (DTO).

Классы:
    Post
        Статья блога.
    FrontMatter
        Метаданные статьи.
    FrontMatterFormat
        Формат блока метаданных (yaml/toml/none).
    CodeBlock
        Блок кода внутри статьи.
    DeployTarget
        Удалённый хост для заливки сайта.
    StepStatus
        Статус шага деплоя.
    StepResult
        Результат шага деплоя.
    DeployReport
        Итог деплоя.
"""

from blog_core.domain.post import CodeBlock, FrontMatter, FrontMatterFormat, Post
from blog_core.domain.deploy import (
    DeployReport,
    DeployTarget,
    StepResult,
    StepStatus,
    exit_status,
)

__all__ = [
    "Post",
    "FrontMatter",
    "FrontMatterFormat",
    "CodeBlock",
    "DeployTarget",
    "StepStatus",
    "StepResult",
    "DeployReport",
    "exit_status",
]
