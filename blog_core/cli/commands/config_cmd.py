"""Команда config: итоговые настройки и их проверка.

Usage:
    blog config show
    blog config check
"""

import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.markup import escape
from rich.table import Table

from blog_core.cli.app import get_cli_context
from blog_core.cli.checks import Check, has_errors, print_checks, print_checks_json
from blog_core.cli.console import console
from blog_core.config import BlogConfig, find_config_file

app = typer.Typer(
    help="🔧 Просмотр и проверка конфигурации.",
    no_args_is_help=True,
)


def _rows(data: dict[str, Any], prefix: str = "") -> list[tuple[str, str]]:
    """Вложенный словарь в строки таблицы: ("remote.host", "example.com")."""
    rows: list[tuple[str, str]] = []
    for key, value in data.items():
        if isinstance(value, dict):
            rows.extend(_rows(value, f"{prefix}{key}."))
        elif isinstance(value, list):
            rows.append((f"{prefix}{key}", escape(" ".join(map(str, value))) or "[dim]-[/dim]"))
        elif value == "":
            rows.append((f"{prefix}{key}", "[dim]not set[/dim]"))
        else:
            rows.append((f"{prefix}{key}", escape(str(value))))
    return rows


def _source(site_dir: Optional[Path]) -> Optional[Path]:
    return find_config_file(site_dir.expanduser() if site_dir else None)


@app.command("show")
def show() -> None:
    """Показать итоговую конфигурацию (blog.toml + env + опции)."""
    cli_ctx = get_cli_context()

    try:
        config = cli_ctx.get_config()
    except ValueError as e:
        console.print(f"[red]❌ Ошибка загрузки конфигурации: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    source = _source(cli_ctx.site_dir)
    data = config.to_toml_dict()

    if cli_ctx.json_output:
        console.print_json(json.dumps({"source": str(source) if source else None, "config": data}))
        return

    console.print("\n[bold]⚙️  Конфигурация[/bold]")
    console.print(f"[dim]Источник: {escape(str(source)) if source else 'defaults + environment'}[/dim]\n")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Ключ", style="cyan")
    table.add_column("Значение")

    rows = _rows(data)
    # to_toml_dict() опускает незаданные user/host, а деплою они нужны
    for key, value in (("remote.user", config.remote_user), ("remote.host", config.remote_host)):
        if value is None:
            rows.append((key, "[dim]not set[/dim]"))

    for key, value in rows:
        table.add_row(key, value)
    console.print(table)


def _path_checks(config: BlogConfig) -> list[Check]:
    checks = []
    for name, path in (("Site dir", config.site_dir), ("Content dir", config.content_path)):
        if path.is_dir():
            checks.append(Check(name, "ok", str(path)))
        else:
            checks.append(Check(name, "error", f"{path} (not found)"))

    if config.public_path.is_dir():
        checks.append(Check("Public dir", "ok", str(config.public_path)))
    else:
        checks.append(Check("Public dir", "info", f"{config.public_path} (created by build)"))
    return checks


def remote_checks(config: BlogConfig) -> list[Check]:
    """Удалённый хост и наличие файла ключа (содержимое не читается)."""
    checks = []
    try:
        checks.append(Check("Remote", "ok", config.require_remote().destination))
    except ValueError as e:
        checks.append(Check("Remote", "error", str(e)))

    key = config.ssh_key
    if key is None:
        checks.append(Check("SSH key", "warning", "not set (ssh default identity)"))
    elif key.is_file():
        checks.append(Check("SSH key", "ok", str(key)))
    else:
        checks.append(Check("SSH key", "error", f"{key} (not found)"))
    return checks


@app.command("check")
def check() -> None:
    """Проверить blog.toml, директории сайта и настройки хоста."""
    cli_ctx = get_cli_context()

    source = _source(cli_ctx.site_dir)
    checks = [
        Check("Config file", "ok", str(source))
        if source
        else Check("Config file", "info", "using defaults + environment")
    ]

    try:
        config = cli_ctx.get_config()
    except ValueError as e:
        checks.append(Check("Config parsing", "error", str(e)))
    else:
        checks.append(Check("Config parsing", "ok", "valid"))
        checks += _path_checks(config)
        checks += remote_checks(config)

    if cli_ctx.json_output:
        print_checks_json(checks)
    else:
        console.print("\n[bold]🔍 Проверка конфигурации...[/bold]\n")
        print_checks([(None, checks)], "Status")

    if has_errors(checks):
        raise typer.Exit(1)


__all__ = ["app", "remote_checks"]
