"""Команда posts — статьи блога.

Подкоманды:
    list: Список статей.
    show: Метаданные, оглавление и блоки кода одной статьи.
    tags: Теги опубликованных статей.
    check: Проверка front matter и разметки.

Usage:
    blog posts list [--drafts] [--tag TAG]
    blog posts show SLUG
    blog posts tags
    blog posts check
"""

import json
from typing import Optional

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from blog_core.cli.console import console
from blog_core.cli.app import get_cli_context
from blog_core.content import ContentRepository
from blog_core.domain import Post

app = typer.Typer(
    help="📝 Статьи блога.",
    no_args_is_help=True,
)


def _post_to_dict(post: Post) -> dict:
    meta = post.front_matter
    return {
        "slug": post.slug,
        "path": str(post.path),
        "title": meta.title,
        "date": meta.date.isoformat() if meta.date else None,
        "draft": meta.draft,
        "tags": meta.tags,
        "description": meta.description,
        "image": meta.image,
        "code_blocks": len(post.code_blocks),
        "languages": post.languages,
    }


def _repository() -> ContentRepository:
    try:
        return get_cli_context().get_repository()
    except ValueError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command("list")
def list_posts(
    drafts: bool = typer.Option(
        False,
        "--drafts",
        "-d",
        help="Включить черновики.",
    ),
    tag: Optional[str] = typer.Option(
        None,
        "--tag",
        "-t",
        help="Только статьи с тегом.",
    ),
) -> None:
    """Показать статьи, новые первыми."""
    cli_ctx = get_cli_context()
    posts = _repository().list_posts(include_drafts=drafts, tag=tag)

    if cli_ctx.json_output:
        console.print_json(json.dumps([_post_to_dict(post) for post in posts]))
        return

    if not posts:
        console.print("[yellow]Статьи не найдены.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Date", style="dim")
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column("Tags")

    for post in posts:
        meta = post.front_matter
        date_str = meta.date.strftime("%Y-%m-%d") if meta.date else "-"
        title = escape(post.title)
        if post.is_draft:
            title += " [yellow](draft)[/yellow]"
        table.add_row(date_str, post.slug, title, escape(", ".join(meta.tags)))

    console.print(table)
    console.print(f"[dim]{len(posts)} post(s)[/dim]")


@app.command("show")
def show(
    slug: str = typer.Argument(..., help="Slug статьи."),
) -> None:
    """Показать метаданные, оглавление и блоки кода статьи."""
    cli_ctx = get_cli_context()
    repo = _repository()

    try:
        post = repo.get(slug)
    except KeyError:
        console.print(f"[red]❌ Post not found: {escape(slug)}[/red]")
        raise typer.Exit(1)

    headings = repo.parser.extract_headings(post.body)

    if cli_ctx.json_output:
        data = _post_to_dict(post)
        data["headings"] = [{"level": level, "text": text} for level, text in headings]
        console.print_json(json.dumps(data))
        return

    meta = post.front_matter
    lines = [
        f"[bold]Date:[/bold] {meta.date.isoformat() if meta.date else '-'}",
        f"[bold]Draft:[/bold] {meta.draft}",
        f"[bold]Tags:[/bold] {escape(', '.join(meta.tags)) or '-'}",
        f"[bold]Description:[/bold] {escape(meta.description) or '-'}",
        f"[bold]Image:[/bold] {escape(meta.image or '-')}",
        f"[bold]File:[/bold] {escape(str(post.path))}",
    ]

    if headings:
        lines.append("")
        lines.append("[bold]Outline:[/bold]")
        for level, text in headings:
            lines.append(f"  {'  ' * (level - 1)}• {escape(text)}")

    if post.code_blocks:
        lines.append("")
        lines.append(f"[bold]Code blocks ({len(post.code_blocks)}):[/bold]")
        for block in post.code_blocks:
            lines.append(f"  • line {block.line}: {block.language or '[dim]plain[/dim]'}")

    console.print(Panel("\n".join(lines), title=f"[bold]{escape(post.title)}[/bold]"))


@app.command("tags")
def tags() -> None:
    """Показать теги опубликованных статей."""
    cli_ctx = get_cli_context()
    counts = _repository().tags()

    if cli_ctx.json_output:
        console.print_json(json.dumps(counts))
        return

    if not counts:
        console.print("[yellow]Теги не найдены.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Tag", style="cyan")
    table.add_column("Posts", justify="right")
    for tag, count in counts.items():
        table.add_row(escape(tag), str(count))
    console.print(table)


@app.command("check")
def check() -> None:
    """Проверить front matter и блоки кода всех статей."""
    cli_ctx = get_cli_context()
    issues = _repository().validate()

    errors = [issue for issue in issues if issue.severity == "error"]
    warnings = [issue for issue in issues if issue.severity == "warning"]

    if cli_ctx.json_output:
        data = {
            "status": "ok" if not errors else "invalid",
            "errors": len(errors),
            "warnings": len(warnings),
            "issues": [
                {
                    "path": str(issue.path),
                    "severity": issue.severity,
                    "message": issue.message,
                }
                for issue in issues
            ],
        }
        console.print_json(json.dumps(data))
    else:
        for issue in issues:
            icon = "[red]❌[/red]" if issue.severity == "error" else "[yellow]⚠️[/yellow]"
            console.print(f"{icon} {escape(str(issue.path))}: {escape(issue.message)}")

        if not issues:
            console.print("[green]✅ All posts are valid[/green]")
        else:
            console.print(f"\nSummary: {len(errors)} errors, {len(warnings)} warnings")

    if errors:
        raise typer.Exit(1)


__all__ = ["app"]
