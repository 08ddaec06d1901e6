"""Команды deploy, build, sync — сборка и заливка сайта.

Usage:
    blog deploy [--dry-run] [--skip-build] [--environment ENV]
    blog build [--dry-run] [--environment ENV]
    blog sync [--dry-run]

Код выхода равен коду первой упавшей программы (hugo/rsync), для
процесса, убитого сигналом N, это 128+N.
"""

import json
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from blog_core.cli.console import console
from blog_core.cli.app import get_cli_context
from blog_core.deploy import CommandRunner, DeployError, RemoteSync, SiteBuilder
from blog_core.domain import DeployReport, StepResult, StepStatus, exit_status
from blog_core.utils.logger import get_logger

logger = get_logger(__name__)

_STATUS_ICONS = {
    StepStatus.OK: "[green]✅ ok[/green]",
    StepStatus.FAILED: "[red]❌ failed[/red]",
    StepStatus.SKIPPED: "[dim]⏭️ skipped[/dim]",
}


def deploy(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Показать команды, не запуская их.",
    ),
    skip_build: bool = typer.Option(
        False,
        "--skip-build",
        help="Не собирать сайт, залить текущий public/.",
    ),
    environment: Optional[str] = typer.Option(
        None,
        "--environment",
        "-e",
        help="Окружение Hugo (по умолчанию из конфига: production).",
    ),
) -> None:
    """🚀 Собрать сайт и залить его на сервер."""
    cli_ctx = get_cli_context()

    try:
        pipeline = cli_ctx.get_pipeline(dry_run=dry_run, environment=environment)
    except ValueError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1)

    try:
        report = pipeline.run(skip_build=skip_build)
    except DeployError as e:
        logger.error_with_context(
            e,
            "Deploy failed",
            include_traceback=False,
            step=e.step,
            returncode=e.returncode,
        )
        if e.report is not None:
            _print_report(e.report, cli_ctx.json_output)
        if not cli_ctx.json_output:
            console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(e.returncode)

    _print_report(report, cli_ctx.json_output)
    if not cli_ctx.json_output:
        suffix = " [dim](dry run)[/dim]" if report.dry_run else ""
        console.print(f"[bold green]{escape(report.confirmation)}[/bold green]{suffix}")


def build(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Показать команду, не запуская её.",
    ),
    environment: Optional[str] = typer.Option(
        None,
        "--environment",
        "-e",
        help="Окружение Hugo (по умолчанию из конфига: production).",
    ),
) -> None:
    """🏗️ Только собрать сайт."""
    cli_ctx = get_cli_context()

    try:
        config = cli_ctx.get_config(environment=environment)
    except ValueError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1)

    result = SiteBuilder(config, CommandRunner(dry_run=dry_run)).run()
    _finish_step(result, cli_ctx.json_output)


def sync(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Показать команду, не запуская её.",
    ),
) -> None:
    """📤 Только залить текущий public/ на сервер."""
    cli_ctx = get_cli_context()

    try:
        config = cli_ctx.get_config()
        target = config.require_remote()
    except ValueError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1)

    result = RemoteSync(config, target, CommandRunner(dry_run=dry_run)).run()
    _finish_step(result, cli_ctx.json_output)


def _finish_step(result: StepResult, json_output: bool) -> None:
    """Вывести результат одиночного шага и выйти с его кодом."""
    if json_output:
        console.print_json(json.dumps(result.to_dict()))
    else:
        console.print(_steps_table([result]))

    if result.status == StepStatus.FAILED:
        raise typer.Exit(exit_status(result.returncode) or 1)


def _print_report(report: DeployReport, json_output: bool) -> None:
    if json_output:
        console.print_json(json.dumps(report.to_dict()))
        return

    console.print(f"\n[bold]🚀 Deploy → {escape(report.target.destination)}[/bold]")
    console.print(_steps_table(report.steps))


def _steps_table(steps: list[StepResult]) -> Table:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Step", style="cyan")
    table.add_column("Status")
    table.add_column("Exit", justify="right")
    table.add_column("Time", justify="right")

    for step in steps:
        exit_code = "-" if step.returncode is None else str(step.returncode)
        duration = "-" if step.status == StepStatus.SKIPPED else f"{step.duration_s:.1f}s"
        table.add_row(step.name, _STATUS_ICONS[step.status], exit_code, duration)

    return table


__all__ = ["deploy", "build", "sync"]
