"""Сборка и заливка сайта.

Модули:
    runner: Запуск внешних программ.
    builder: Шаг build (hugo).
    sync: Шаг sync (rsync поверх ssh).
    pipeline: Последовательный деплой.
    errors: DeployError.

Functions:
    build_pipeline: Собрать DeployPipeline из конфига.
"""

from blog_core.config import BlogConfig
from blog_core.deploy.builder import SiteBuilder
from blog_core.deploy.errors import DeployError
from blog_core.deploy.pipeline import DeployPipeline
from blog_core.deploy.runner import CommandRunner
from blog_core.deploy.sync import RemoteSync


def build_pipeline(config: BlogConfig, dry_run: bool = False) -> DeployPipeline:
    """Собрать pipeline из конфига.

    Raises:
        ValueError: Если удалённый хост не настроен.
    """
    runner = CommandRunner(dry_run=dry_run)
    return DeployPipeline(
        builder=SiteBuilder(config, runner),
        sync=RemoteSync(config, config.require_remote(), runner),
    )


__all__ = [
    "CommandRunner",
    "SiteBuilder",
    "RemoteSync",
    "DeployPipeline",
    "DeployError",
    "build_pipeline",
]
