"""Общий Console для вывода команд в stdout (логи идут в stderr)."""

from rich.console import Console

console = Console()

__all__ = ["console"]
