"""CLI команды.

Модули:
    deploy_cmd: blog deploy / build / sync — сборка и заливка сайта.
    posts_cmd: blog posts — статьи блога.
    init_cmd: blog init — создание blog.toml.
    config_cmd: blog config — управление конфигурацией.
    doctor_cmd: blog doctor — диагностика.
"""

from blog_core.cli.commands import config_cmd
from blog_core.cli.commands import deploy_cmd
from blog_core.cli.commands import doctor_cmd
from blog_core.cli.commands import init_cmd
from blog_core.cli.commands import posts_cmd

__all__ = [
    "config_cmd",
    "deploy_cmd",
    "doctor_cmd",
    "init_cmd",
    "posts_cmd",
]
