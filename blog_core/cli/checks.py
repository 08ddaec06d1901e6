"""Результаты проверок для `blog config check` и `blog doctor`."""

import json
from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from rich.markup import escape

from blog_core.cli.console import console

Status = Literal["ok", "info", "warning", "error"]

STATUS_ICONS: dict[str, str] = {
    "ok": "[green]✅[/green]",
    "info": "[blue]ℹ️[/blue]",
    "warning": "[yellow]⚠️[/yellow]",
    "error": "[red]❌[/red]",
}


@dataclass(frozen=True)
class Check:
    """Одна строка отчёта: `✅ Remote: admin@host:~/dir/`."""

    name: str
    status: Status
    detail: str


Section = tuple[Optional[str], list[Check]]


def has_errors(checks: Iterable[Check]) -> bool:
    return any(check.status == "error" for check in checks)


def _counts(checks: list[Check]) -> tuple[int, int, int]:
    passed = sum(1 for c in checks if c.status in ("ok", "info"))
    warnings = sum(1 for c in checks if c.status == "warning")
    errors = sum(1 for c in checks if c.status == "error")
    return passed, warnings, errors


def print_checks_json(checks: list[Check]) -> None:
    passed, warnings, errors = _counts(checks)
    console.print_json(
        json.dumps(
            {
                "status": "unhealthy" if errors else "healthy",
                "passed": passed,
                "warnings": warnings,
                "errors": errors,
                "checks": {
                    c.name: {"status": c.status, "detail": c.detail} for c in checks
                },
            }
        )
    )


def print_checks(sections: list[Section], title: str) -> None:
    """Секции с иконками и итоговая строка `<title>: Healthy (1 warning)`."""
    all_checks: list[Check] = []

    for section, checks in sections:
        indent = ""
        if section:
            console.print(f"[bold]{section}:[/bold]")
            indent = "  "
        for check in checks:
            console.print(
                f"{indent}{STATUS_ICONS[check.status]} {check.name}: {escape(check.detail)}"
            )
        console.print()
        all_checks.extend(checks)

    passed, warnings, errors = _counts(all_checks)
    verdict = "[red]Unhealthy[/red]" if errors else "[green]Healthy[/green]"
    if warnings:
        verdict += f" ({warnings} warning{'s' if warnings > 1 else ''})"

    console.print(f"🩺 {title}: {verdict}")
    console.print(f"   {passed} passed, {warnings} warnings, {errors} errors")


__all__ = ["Check", "Section", "has_errors", "print_checks", "print_checks_json"]
