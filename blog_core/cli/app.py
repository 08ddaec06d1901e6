"""Приложение `blog`: глобальные опции и регистрация команд."""

from pathlib import Path
from typing import Optional

import typer

from blog_core.cli.context import CLIContext

app = typer.Typer(
    name="blog",
    help="📝 Статьи и деплой Hugo-блога.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

_cli_context: Optional[CLIContext] = None


def get_cli_context() -> CLIContext:
    """Контекст, созданный глобальным callback (или пустой при прямом вызове команды)."""
    return _cli_context if _cli_context is not None else CLIContext()


def _print_version(value: bool) -> None:
    if not value:
        return

    from blog_core import __version__

    typer.echo(f"Blog Core CLI v{__version__}")
    raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    site_dir: Optional[Path] = typer.Option(
        None,
        "--site-dir",
        "-s",
        envvar="BLOG_SITE_DIR",
        help="Корень Hugo-проекта (там же ищется blog.toml).",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="TRACE, DEBUG, INFO, WARNING, ERROR или CRITICAL.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Машиночитаемый вывод.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="То же, что --log-level DEBUG.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_print_version,
        is_eager=True,
        help="Версия и выход.",
    ),
) -> None:
    """📝 Статьи и деплой Hugo-блога."""
    global _cli_context

    _cli_context = CLIContext(
        site_dir=site_dir,
        log_level=log_level,
        json_output=json_output,
        verbose=verbose,
    )
    ctx.obj = _cli_context


# Команды импортируют get_cli_context, поэтому регистрируются после него
from blog_core.cli.commands import (  # noqa: E402
    config_cmd,
    deploy_cmd,
    doctor_cmd,
    init_cmd,
    posts_cmd,
)

app.command("deploy")(deploy_cmd.deploy)
app.command("build")(deploy_cmd.build)
app.command("sync")(deploy_cmd.sync)
app.add_typer(posts_cmd.app, name="posts")
app.add_typer(init_cmd.app, name="init")
app.add_typer(config_cmd.app, name="config")
app.add_typer(doctor_cmd.app, name="doctor")


__all__ = ["app", "get_cli_context"]
