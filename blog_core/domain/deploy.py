"""Модели деплоя.

Классы:
    DeployTarget
        Удалённый хост, пользователь, директория и ключ.
    StepStatus
        Статус шага деплоя.
    StepResult
        Результат запуска внешней программы.
    DeployReport
        Итог всего деплоя.

Функции:
    exit_status
        Код возврата процесса в терминах shell.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional


def exit_status(returncode: Optional[int]) -> int:
    """Код возврата subprocess как код выхода shell.

    Процесс, убитый сигналом N, subprocess возвращает как -N; shell
    сообщает 128+N (SIGTERM: 143).
    """
    if returncode is None:
        return 0
    if returncode < 0:
        return 128 - returncode
    return returncode


@dataclass(frozen=True)
class DeployTarget:
    """Куда заливается собранный сайт.

    Attributes:
        user: Пользователь SSH.
        host: Имя хоста.
        directory: Директория относительно домашней на удалённом хосте.
        key_path: Приватный ключ SSH (None = ключ по умолчанию у ssh).
    """

    user: str
    host: str
    directory: str = ""
    key_path: Optional[Path] = None

    @property
    def destination(self) -> str:
        """Адрес для rsync: user@host:~/directory/.

        Тильда раскрывается на удалённой стороне.
        """
        directory = self.directory.lstrip("/")
        if directory and not directory.endswith("/"):
            directory += "/"
        return f"{self.user}@{self.host}:~/{directory}"


class StepStatus(str, Enum):
    """Статус шага.

    Attributes:
        OK: Программа завершилась с кодом 0.
        FAILED: Ненулевой код возврата.
        SKIPPED: Шаг не запускался (--skip-build).
    """

    OK = "ok"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class StepResult:
    """Результат одного шага.

    Attributes:
        name: Имя шага (build, sync).
        command: Аргументы запущенной команды.
        returncode: Код возврата (None для пропущенного шага).
        duration_s: Длительность в секундах.
        status: Итоговый статус.
        dry_run: Команда не выполнялась, только логировалась.
    """

    name: str
    command: list[str]
    returncode: Optional[int] = None
    duration_s: float = 0.0
    status: StepStatus = StepStatus.OK
    dry_run: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status == StepStatus.OK

    @classmethod
    def skipped(cls, name: str, command: list[str]) -> "StepResult":
        return cls(name=name, command=command, status=StepStatus.SKIPPED)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "command": self.command,
            "returncode": self.returncode,
            "duration_s": round(self.duration_s, 3),
            "status": self.status.value,
            "dry_run": self.dry_run,
        }


@dataclass
class DeployReport:
    """Итог деплоя.

    Attributes:
        target: Куда заливали.
        steps: Результаты шагов в порядке запуска.
        dry_run: Режим без выполнения команд.
    """

    target: DeployTarget
    steps: list[StepResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def succeeded(self) -> bool:
        return all(step.status != StepStatus.FAILED for step in self.steps)

    @property
    def first_failure(self) -> Optional[StepResult]:
        return next((step for step in self.steps if step.status == StepStatus.FAILED), None)

    @property
    def exit_code(self) -> int:
        """Код выхода первого упавшего шага (см. exit_status) или 0."""
        failed = self.first_failure
        if failed is None:
            return 0
        return exit_status(failed.returncode) or 1

    @property
    def confirmation(self) -> str:
        return f"Deployed to {self.target.host}!"

    def to_dict(self) -> dict[str, Any]:
        return {
            "host": self.target.host,
            "destination": self.target.destination,
            "succeeded": self.succeeded,
            "exit_code": self.exit_code,
            "dry_run": self.dry_run,
            "steps": [step.to_dict() for step in self.steps],
        }
