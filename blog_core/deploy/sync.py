"""Заливка собранного сайта на сервер через rsync поверх SSH.

Классы:
    RemoteSync
        Шаг sync: зеркалирование public/ в директорию на хосте.
"""

import shlex

from blog_core.config import BlogConfig
from blog_core.deploy.runner import CommandRunner
from blog_core.domain import DeployTarget, StepResult
from blog_core.utils.logger import get_logger

logger = get_logger(__name__)

# archive, verbose, compress
RSYNC_FLAGS = "-avz"


class RemoteSync:
    """Шаг синхронизации.

    Итоговая команда:

        rsync -avz -e "ssh -i KEY" --delete public/ USER@HOST:~/DIR

    Источник всегда заканчивается на `/`: копируется содержимое
    директории, а не она сама. Файл ключа не проверяется, ошибку
    доступа сообщит ssh.

    Attributes:
        config: Конфигурация (public_dir, rsync_bin, ssh_bin, delete).
        target: Удалённый хост.
        runner: Запускатель команд.
    """

    step_name = "sync"

    def __init__(self, config: BlogConfig, target: DeployTarget, runner: CommandRunner):
        self.config = config
        self.target = target
        self.runner = runner

    @property
    def source(self) -> str:
        return str(self.config.public_path).rstrip("/\\") + "/"

    def ssh_command(self) -> str | None:
        """Значение для `rsync -e` или None, если подходит ssh по умолчанию."""
        if self.target.key_path is not None:
            return f"{self.config.ssh_bin} -i {shlex.quote(str(self.target.key_path))}"
        if self.config.ssh_bin != "ssh":
            return self.config.ssh_bin
        return None

    def command(self) -> list[str]:
        command = [self.config.rsync_bin, RSYNC_FLAGS]

        ssh = self.ssh_command()
        if ssh:
            command += ["-e", ssh]

        if self.config.delete:
            command.append("--delete")

        command += [self.source, self.target.destination]
        return command

    def run(self) -> StepResult:
        logger.info(
            f"Uploading {self.source} -> {self.target.destination}",
            step=self.step_name,
            host=self.target.host,
        )
        return self.runner.run(self.step_name, self.command())


__all__ = ["RemoteSync", "RSYNC_FLAGS"]
