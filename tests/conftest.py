"""
Конфигурация pytest для blog_core.

Определяет фикстуры для:
- Изоляции от окружения (BLOG_* переменные, blog.toml в cwd)
- Создания тестового Hugo-сайта со статьями
- Сброса глобального конфига между тестами
"""

from pathlib import Path

import pytest

from blog_core.config import reset_config


POST_FLUTTER = """---
title: "Flutter Clean Architecture: Data Layer"
date: 2023-03-12T10:00:00+07:00
draft: false
tags: ["flutter", "clean-architecture"]
description: "Repositories and data sources"
image: "images/data-layer.png"
---

## Data sources

```dart
abstract class WeatherRemoteDataSource {
  Future<WeatherModel> getWeather(String city);
}
```

## Repositories

```dart
class WeatherRepositoryImpl implements WeatherRepository {}
```
"""

POST_INTRO = """---
title: "Flutter Clean Architecture: Introduction"
date: 2023-01-05
tags: flutter
---

The project is split into core, domain, data and presentation.

```
lib/
  core/
  features/
```
"""

POST_DRAFT = """+++
title = "Presentation layer"
date = 2023-05-01T08:00:00Z
draft = true
tags = ["flutter", "bloc"]
+++

Work in progress.
"""

SECTION_INDEX = """---
title: "Posts"
---
"""


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Убирает BLOG_* переменные и переходит в пустую директорию."""
    import os

    for key in list(os.environ):
        if key.upper().startswith("BLOG_"):
            monkeypatch.delenv(key, raising=False)

    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    reset_config()
    yield workdir
    reset_config()


@pytest.fixture
def site_dir(tmp_path) -> Path:
    """Hugo-сайт: три статьи (черновик, page bundle, обычная) и _index.md."""
    root = tmp_path / "site"
    posts = root / "content" / "posts"
    bundle = posts / "clean-architecture-data-layer"
    bundle.mkdir(parents=True)

    (bundle / "index.md").write_text(POST_FLUTTER, encoding="utf-8")
    (posts / "clean-architecture-intro.md").write_text(POST_INTRO, encoding="utf-8")
    (posts / "presentation-layer.md").write_text(POST_DRAFT, encoding="utf-8")
    (posts / "_index.md").write_text(SECTION_INDEX, encoding="utf-8")

    return root


@pytest.fixture
def blog_toml(site_dir) -> Path:
    """blog.toml в корне тестового сайта."""
    path = site_dir / "blog.toml"
    path.write_text(
        """
[build]
environment = "production"

[remote]
user = "admin"
host = "blog.example.com"
dir = "apps/blog/public/"
key = "~/keys/deploy.pem"
""",
        encoding="utf-8",
    )
    return path
