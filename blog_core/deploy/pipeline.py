"""Оркестратор деплоя: build, затем sync.

Классы:
    DeployPipeline
        Последовательный запуск сборки и заливки.
"""

from typing import Protocol

from blog_core.deploy.builder import SiteBuilder
from blog_core.deploy.errors import DeployError
from blog_core.deploy.sync import RemoteSync
from blog_core.domain import DeployReport, StepResult
from blog_core.utils.logger import get_logger

logger = get_logger(__name__)


class DeployStep(Protocol):
    step_name: str

    def command(self) -> list[str]: ...

    def run(self) -> StepResult: ...


class DeployPipeline:
    """Деплой в два шага.

    Шаги идут строго по очереди, каждый ждёт завершения предыдущего
    процесса. Ошибка шага не меняет порядок: заливка запускается и после
    упавшей сборки. Повторов нет.

    Attributes:
        builder: Шаг сборки.
        sync: Шаг заливки.

    Example:
        >>> runner = CommandRunner()
        >>> pipeline = DeployPipeline(
        ...     SiteBuilder(config, runner),
        ...     RemoteSync(config, config.require_remote(), runner),
        ... )
        >>> report = pipeline.run()
        >>> print(report.confirmation)
        Deployed to example.com!
    """

    def __init__(self, builder: SiteBuilder, sync: RemoteSync):
        self.builder = builder
        self.sync = sync

    @property
    def steps(self) -> list[DeployStep]:
        return [self.builder, self.sync]

    def run(self, skip_build: bool = False) -> DeployReport:
        """Выполнить деплой.

        Оба шага запускаются всегда, как две строки shell-скрипта без
        `set -e`: упавшая сборка не отменяет заливку. Код выхода деплоя
        равен коду первого упавшего шага.

        Args:
            skip_build: Не запускать сборку, залить текущий public/.

        Returns:
            DeployReport с результатами шагов.

        Raises:
            DeployError: Если хотя бы один шаг завершился с ненулевым кодом.
                В report есть результаты обоих шагов.
        """
        target = self.sync.target
        report = DeployReport(target=target, dry_run=self.sync.runner.dry_run)
        log = logger.bind(host=target.host)

        for step in self.steps:
            if skip_build and step is self.builder:
                report.steps.append(StepResult.skipped(step.step_name, step.command()))
                log.debug(f"Step skipped: {step.step_name}")
                continue

            report.steps.append(step.run())

        failed = report.first_failure
        if failed is not None:
            log.error(
                f"Deploy finished with errors: {failed.name} failed",
                returncode=report.exit_code,
            )
            raise DeployError(
                failed.name,
                report.exit_code,
                failed.command,
                report=report,
            )

        log.info(report.confirmation)
        return report


__all__ = ["DeployPipeline", "DeployStep"]
