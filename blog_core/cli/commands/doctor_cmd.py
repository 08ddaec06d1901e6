"""Команда doctor: готово ли окружение к сборке и деплою.

Проверяет Python и зависимости, hugo/rsync/ssh в PATH, директории сайта,
настройки хоста и права на файл ключа.

Usage:
    blog doctor [--verbose]
"""

import importlib.util
import os
import platform
import shutil
import stat
import subprocess
import sys
from typing import Optional

import typer

from blog_core.cli.app import get_cli_context
from blog_core.cli.checks import (
    Check,
    Section,
    has_errors,
    print_checks,
    print_checks_json,
)
from blog_core.cli.commands.config_cmd import remote_checks
from blog_core.cli.console import console
from blog_core.config import BlogConfig
from blog_core.utils.logger import get_logger

logger = get_logger(__name__)

app = typer.Typer(
    help="🩺 Диагностика окружения для сборки и деплоя.",
    invoke_without_command=True,
)

# import-имена зависимостей из pyproject.toml
REQUIRED_MODULES = (
    "typer",
    "rich",
    "pydantic",
    "pydantic_settings",
    "dotenv",
    "yaml",
    "markdown_it",
)

VERSION_ARGS = {"hugo": ["version"], "rsync": ["--version"], "ssh": ["-V"]}

HINTS = {
    "hugo": "Установите Hugo: https://gohugo.io/installation/",
    "rsync": "Установите rsync: apt install rsync / brew install rsync",
    "ssh": "Установите OpenSSH client",
    "Remote": "Задайте \\[remote] host и user в blog.toml или BLOG_REMOTE_HOST/BLOG_REMOTE_USER",
    "SSH key": 'Укажите ключ: \\[remote] key = "~/.ssh/id_ed25519"',
    "SSH key permissions": "Ограничьте права на ключ: chmod 600",
}


@app.callback(invoke_without_command=True)
def doctor(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Показать версии hugo, rsync и ssh.",
    ),
) -> None:
    """Выполнить диагностику окружения."""
    cli_ctx = get_cli_context()
    sections: list[Section] = [("Environment", _environment_checks())]

    try:
        config = cli_ctx.get_config()
    except ValueError as e:
        sections.append(("Config", [Check("Config", "error", str(e))]))
    else:
        sections.append(("Tools", _tool_checks(config, verbose)))
        sections.append(("Site", _site_checks(config)))
        sections.append(("Remote", remote_checks(config) + _key_permissions(config)))

    checks = [check for _, section in sections for check in section]

    if cli_ctx.json_output:
        print_checks_json(checks)
    else:
        console.print("\n[bold]🩺 Диагностика Blog Core...[/bold]\n")
        print_checks(sections, "Diagnosis")
        _print_hints(checks)

    if has_errors(checks):
        raise typer.Exit(1)


def _environment_checks() -> list[Check]:
    from blog_core import __version__

    python = platform.python_version()
    checks = [
        Check("Python", "ok", python)
        if sys.version_info >= (3, 11)
        else Check("Python", "error", f"{python} (requires 3.11+)"),
        Check("blog-core", "ok", __version__),
    ]

    missing = [name for name in REQUIRED_MODULES if importlib.util.find_spec(name) is None]
    if missing:
        checks.append(Check("Dependencies", "error", f"missing: {', '.join(missing)}"))
    else:
        checks.append(Check("Dependencies", "ok", "all installed"))
    return checks


def _tool_checks(config: BlogConfig, verbose: bool) -> list[Check]:
    checks = []
    for name, binary in (
        ("hugo", config.hugo_bin),
        ("rsync", config.rsync_bin),
        ("ssh", config.ssh_bin),
    ):
        path = shutil.which(binary)
        if path is None:
            checks.append(Check(name, "error", f"{binary} not found in PATH"))
            continue

        version = _tool_version(name, path) if verbose else None
        checks.append(Check(name, "ok", f"{path} ({version})" if version else path))
    return checks


def _tool_version(name: str, path: str) -> Optional[str]:
    try:
        process = subprocess.run(
            [path, *VERSION_ARGS[name]],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        logger.debug(f"Version check failed for {name}: {e}")
        return None

    # ssh -V печатает в stderr
    output = (process.stdout or process.stderr or "").strip()
    return output.splitlines()[0] if output else None


def _site_checks(config: BlogConfig) -> list[Check]:
    checks = [
        Check("Site dir", "ok", str(config.site_dir))
        if config.site_dir.is_dir()
        else Check("Site dir", "error", f"{config.site_dir} (not found)")
    ]

    if not config.content_path.is_dir():
        checks.append(Check("Content dir", "error", f"{config.content_path} (not found)"))
        return checks

    posts = get_cli_context().get_repository().list_posts(include_drafts=True)
    drafts = sum(1 for post in posts if post.is_draft)
    checks.append(
        Check("Content dir", "ok", f"{config.content_path} ({len(posts)} posts, {drafts} drafts)")
    )

    if config.public_path.is_dir():
        checks.append(Check("Public dir", "ok", str(config.public_path)))
    else:
        checks.append(Check("Public dir", "info", f"{config.public_path} (created by build)"))
    return checks


def _key_permissions(config: BlogConfig) -> list[Check]:
    """ssh отказывается от ключа, доступного группе или остальным."""
    key = config.ssh_key
    if key is None or not key.is_file() or os.name != "posix":
        return []

    mode = stat.S_IMODE(key.stat().st_mode)
    if mode & 0o077:
        return [Check("SSH key permissions", "warning", f"{oct(mode)} (run: chmod 600 {key})")]
    return [Check("SSH key permissions", "ok", oct(mode))]


def _print_hints(checks: list[Check]) -> None:
    hints = [HINTS[c.name] for c in checks if c.status in ("warning", "error") and c.name in HINTS]
    if not hints:
        return

    console.print("\n[bold]💡 Рекомендации:[/bold]")
    for hint in hints:
        console.print(f"   • {hint}")


__all__ = ["app"]
