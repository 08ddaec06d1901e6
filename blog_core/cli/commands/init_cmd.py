"""Команда init — создание blog.toml.

Usage:
    blog init [OPTIONS]
"""

from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from blog_core.cli.console import console
from blog_core.config import CONFIG_FILE_NAME

app = typer.Typer(
    help="⚙️ Создать blog.toml для проекта.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init(
    ctx: typer.Context,
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Перезаписать существующий конфиг.",
    ),
    non_interactive: bool = typer.Option(
        False,
        "--non-interactive",
        "-y",
        help="Использовать значения по умолчанию без вопросов.",
    ),
    output_path: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Путь для сохранения конфига (по умолчанию: ./blog.toml).",
    ),
) -> None:
    """Создать blog.toml в текущей директории."""
    config_path = output_path or Path.cwd() / CONFIG_FILE_NAME

    if config_path.exists() and not force:
        console.print(f"[yellow]⚠️  Файл {config_path} уже существует.[/yellow]")
        if non_interactive:
            console.print("Используйте --force для перезаписи.")
            raise typer.Exit(1)

        if not Confirm.ask("Перезаписать?", default=False):
            raise typer.Exit(0)

    console.print("\n[bold]⚙️  Инициализация проекта блога...[/bold]\n")

    if non_interactive:
        environment = "production"
        host = ""
        user = ""
        remote_dir = ""
        key = ""
    else:
        environment = Prompt.ask("🏗️  Окружение Hugo", default="production")
        host = Prompt.ask("🌐 Хост для деплоя", default="")
        user = Prompt.ask("👤 Пользователь SSH", default="admin")
        remote_dir = Prompt.ask("📁 Директория на хосте (от ~)", default="")
        key = Prompt.ask("🔑 Путь к приватному ключу", default="")

    content = _generate_toml(
        environment=environment,
        host=host,
        user=user,
        remote_dir=remote_dir,
        key=key,
    )
    config_path.write_text(content, encoding="utf-8")

    console.print(f"\n[green]✅ Создан: {config_path}[/green]\n")

    console.print(
        Panel(
            """[bold]💡 Следующие шаги:[/bold]

   1. Проверьте настройки: blog config show
   2. Диагностика: blog doctor
   3. Пробный деплой: blog deploy --dry-run""",
            title="[bold green]Blog Core[/bold green]",
            border_style="green",
        )
    )


def _toml_str(value: str) -> str:
    """Строка в TOML basic string."""
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _generate_toml(
    environment: str,
    host: str,
    user: str,
    remote_dir: str,
    key: str,
) -> str:
    """Генерирует содержимое blog.toml.

    Пустые host/user/key записываются закомментированными.
    """

    def optional(name: str, value: str, example: str) -> str:
        if value:
            return f"{name} = {_toml_str(value)}"
        return f"# {name} = {_toml_str(example)}"

    return f"""# Blog Core Configuration
# Generated by: blog init

[site]
root = "."
content_dir = "content"
public_dir = "public"

[build]
environment = {_toml_str(environment)}
hugo = "hugo"

[remote]
{optional("host", host, "example.com")}
{optional("user", user, "admin")}
dir = {_toml_str(remote_dir)}
{optional("key", key, "~/.ssh/id_ed25519")}

[sync]
rsync = "rsync"
ssh = "ssh"
delete = true  # Удалять на хосте файлы, которых нет в public/

[logging]
level = "INFO"
# file = "deploy.log"
"""


__all__ = ["app"]
