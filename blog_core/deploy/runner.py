"""Запуск внешних программ.

Классы:
    CommandRunner
        Блокирующий запуск команды с наследованием stdout/stderr.

Константы:
    EXIT_NOT_FOUND: Код возврата, если программа не найдена (как в shell).
    EXIT_NOT_EXECUTABLE: Код возврата, если программу нельзя запустить.
"""

import shlex
import subprocess
import time
from pathlib import Path
from typing import Optional, Sequence

from blog_core.domain import StepResult, StepStatus
from blog_core.utils.logger import get_logger

logger = get_logger(__name__)

EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126


class CommandRunner:
    """Запускает внешние программы по одной, дожидаясь завершения.

    Вывод программы не перехватывается: пользователь видит прогресс
    hugo и rsync как при запуске из shell. Повторов и таймаутов нет.

    Attributes:
        dry_run: Только логировать команды, не запуская их.
    """

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def run(
        self,
        name: str,
        command: Sequence[str],
        cwd: Optional[Path] = None,
    ) -> StepResult:
        """Запустить команду.

        Args:
            name: Имя шага (для логов и отчёта).
            command: Аргументы команды.
            cwd: Рабочая директория.

        Returns:
            StepResult с кодом возврата и длительностью.
        """
        command = [str(arg) for arg in command]
        log = logger.bind(step=name)

        if self.dry_run:
            log.info(f"Dry run: {shlex.join(command)}")
            return StepResult(
                name=name,
                command=command,
                returncode=0,
                status=StepStatus.OK,
                dry_run=True,
            )

        log.debug(f"Running {command[0]}", cwd=str(cwd) if cwd else None)
        started = time.perf_counter()

        try:
            process = subprocess.run(command, cwd=cwd, check=False)
            returncode = process.returncode
        except FileNotFoundError:
            log.error(
                f"Executable not found: {command[0]}",
                cwd=str(cwd) if cwd else None,
            )
            returncode = EXIT_NOT_FOUND
        except PermissionError:
            log.error(f"Permission denied: {command[0]}")
            returncode = EXIT_NOT_EXECUTABLE

        duration = time.perf_counter() - started
        log.trace_command(
            command,
            cwd=str(cwd) if cwd else None,
            returncode=returncode,
            duration_ms=duration * 1000,
        )

        status = StepStatus.OK if returncode == 0 else StepStatus.FAILED
        if status == StepStatus.FAILED:
            log.error(f"{command[0]} exited with code {returncode}")

        return StepResult(
            name=name,
            command=command,
            returncode=returncode,
            duration_s=duration,
            status=status,
        )


__all__ = ["CommandRunner", "EXIT_NOT_FOUND", "EXIT_NOT_EXECUTABLE"]
