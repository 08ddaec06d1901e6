"""Сборка сайта генератором Hugo.

Классы:
    SiteBuilder
        Шаг build: `hugo --environment <env>` в корне сайта.
"""

from blog_core.config import BlogConfig
from blog_core.deploy.runner import CommandRunner
from blog_core.domain import StepResult
from blog_core.utils.logger import get_logger

logger = get_logger(__name__)


class SiteBuilder:
    """Шаг сборки.

    Attributes:
        config: Конфигурация (hugo_bin, environment, build_args, site_dir).
        runner: Запускатель команд.
    """

    step_name = "build"

    def __init__(self, config: BlogConfig, runner: CommandRunner):
        self.config = config
        self.runner = runner

    def command(self) -> list[str]:
        return [
            self.config.hugo_bin,
            "--environment",
            self.config.environment,
            *self.config.build_args,
        ]

    def run(self) -> StepResult:
        logger.info(
            f"Building site ({self.config.environment})",
            step=self.step_name,
        )
        return self.runner.run(self.step_name, self.command(), cwd=self.config.site_dir)


__all__ = ["SiteBuilder"]
