"""Исключения деплоя."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from blog_core.domain import DeployReport


class DeployError(Exception):
    """Внешняя программа шага завершилась с ненулевым кодом.

    Attributes:
        step: Имя упавшего шага (build, sync).
        returncode: Код возврата программы.
        command: Аргументы запущенной команды.
        report: Отчёт деплоя на момент ошибки (если шаг запускался из pipeline).

    Example:
        >>> try:
        ...     pipeline.run()
        ... except DeployError as e:
        ...     raise SystemExit(e.returncode)
    """

    def __init__(
        self,
        step: str,
        returncode: int,
        command: list[str],
        report: Optional["DeployReport"] = None,
    ):
        self.step = step
        self.returncode = returncode
        self.command = command
        self.report = report
        super().__init__(f"{step} failed with exit code {returncode}")


__all__ = ["DeployError"]
