"""Состояние одного запуска `blog`: глобальные опции и лениво созданные объекты."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from blog_core.config import BlogConfig, get_config

if TYPE_CHECKING:
    from blog_core.content import ContentRepository
    from blog_core.deploy import DeployPipeline


@dataclass
class CLIContext:
    """Глобальные опции CLI и доступ к конфигу, статьям и деплою.

    Конфиг читается при первом обращении, а не в callback: `blog --help`
    и `blog init` работают и рядом с битым blog.toml.

    Attributes:
        site_dir: --site-dir (корень сайта и место поиска blog.toml).
        log_level: --log-level.
        json_output: --json.
        verbose: --verbose, поднимает консольный уровень до DEBUG.
    """

    site_dir: Optional[Path] = None
    log_level: Optional[str] = None
    json_output: bool = False
    verbose: bool = False

    _config: Optional[BlogConfig] = field(default=None, init=False, repr=False)
    _repository: Optional["ContentRepository"] = field(default=None, init=False, repr=False)
    _logging_ready: bool = field(default=False, init=False, repr=False)

    def get_config(self, **command_overrides: Any) -> BlogConfig:
        """BlogConfig с учётом глобальных опций.

        Args:
            **command_overrides: Опции конкретной команды (например,
                environment=...). None означает "не задано". Конфиг с
                такими override'ами не кэшируется.

        Raises:
            ValueError: blog.toml не парсится или значения невалидны.
        """
        command_overrides = {k: v for k, v in command_overrides.items() if v is not None}
        if self._config is not None and not command_overrides:
            return self._config

        overrides: dict[str, Any] = {}
        if self.site_dir:
            overrides["site_dir"] = self.site_dir
        if self.log_level:
            overrides["log_level"] = self.log_level.upper()

        config = get_config(**overrides, **command_overrides)
        self._setup_logging(config)

        if not command_overrides:
            self._config = config
        return config

    def get_repository(self) -> "ContentRepository":
        if self._repository is None:
            from blog_core.content import ContentRepository

            self._repository = ContentRepository(self.get_config().content_path)
        return self._repository

    def get_pipeline(
        self,
        dry_run: bool = False,
        environment: Optional[str] = None,
    ) -> "DeployPipeline":
        """build + sync по текущему конфигу.

        Raises:
            ValueError: Не заданы remote_user/remote_host.
        """
        from blog_core.deploy import build_pipeline

        return build_pipeline(self.get_config(environment=environment), dry_run=dry_run)

    def _setup_logging(self, config: BlogConfig) -> None:
        if self._logging_ready:
            return

        from blog_core.utils.logger import LoggingConfig, setup_logging

        level = config.log_level
        if self.verbose and level in ("INFO", "WARNING", "ERROR", "CRITICAL"):
            level = "DEBUG"

        setup_logging(LoggingConfig(level=level, log_file=config.log_file))
        self._logging_ready = True


__all__ = ["CLIContext"]
