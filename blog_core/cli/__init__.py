"""Blog Core CLI: командная строка блога.

Entry point для CLI приложения.

Example:
    $ blog --help
    $ blog posts list --tag flutter
    $ blog deploy --dry-run
    $ blog doctor
"""

from blog_core.cli.app import app


def main() -> None:
    """Точка входа для CLI."""
    app()


__all__ = ["main", "app"]
