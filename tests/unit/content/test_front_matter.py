"""Тесты разбора front matter (YAML и TOML)."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from blog_core.content import FrontMatterError
from blog_core.content.front_matter import parse_front_matter, split_front_matter
from blog_core.domain import FrontMatterFormat


class TestSplitFrontMatter:
    def test_yaml_block(self):
        block = split_front_matter("---\ntitle: Hi\n---\nBody\n")

        assert block.format == FrontMatterFormat.YAML
        assert block.raw == "title: Hi\n"
        assert block.body == "Body\n"
        assert block.body_line == 4

    def test_toml_block(self):
        block = split_front_matter('+++\ntitle = "Hi"\n+++\n\nBody\n')

        assert block.format == FrontMatterFormat.TOML
        assert block.raw == 'title = "Hi"\n'
        assert block.body == "\nBody\n"

    def test_no_front_matter(self):
        block = split_front_matter("# Just markdown\n")

        assert block.format == FrontMatterFormat.NONE
        assert block.body == "# Just markdown\n"
        assert block.body_line == 1

    def test_empty_file(self):
        assert split_front_matter("").format == FrontMatterFormat.NONE

    def test_bom_is_ignored(self):
        block = split_front_matter("\ufeff---\ntitle: Hi\n---\n")

        assert block.format == FrontMatterFormat.YAML

    def test_crlf_line_endings(self):
        block = split_front_matter("---\r\ntitle: Hi\r\n---\r\nBody\r\n")

        assert block.raw == "title: Hi\r\n"
        assert block.body == "Body\r\n"

    def test_unterminated(self):
        with pytest.raises(FrontMatterError, match="Unterminated") as exc_info:
            split_front_matter("---\ntitle: Hi\n", Path("posts/a.md"))

        assert exc_info.value.path == Path("posts/a.md")
        assert str(exc_info.value).startswith("posts/a.md: ")

    def test_horizontal_rule_in_body_is_not_a_fence(self):
        block = split_front_matter("Intro\n---\nMore\n")

        assert block.format == FrontMatterFormat.NONE


class TestParseYaml:
    def test_all_fields(self):
        text = """---
title: "Data Layer"
date: 2023-03-12T10:00:00+07:00
draft: false
tags: ["flutter", "clean-architecture"]
description: "Repositories"
image: "images/cover.png"
slug: data-layer
series: flutter
---
Body
"""
        meta, _ = parse_front_matter(text)

        assert meta.title == "Data Layer"
        assert meta.date == datetime(2023, 3, 12, 10, tzinfo=timezone(timedelta(hours=7)))
        assert meta.draft is False
        assert meta.tags == ["flutter", "clean-architecture"]
        assert meta.description == "Repositories"
        assert meta.image == "images/cover.png"
        assert meta.extra == {"slug": "data-layer", "series": "flutter"}

    def test_plain_date(self):
        meta, _ = parse_front_matter("---\ndate: 2023-01-05\n---\n")

        assert meta.date == datetime(2023, 1, 5)

    def test_quoted_iso_date(self):
        meta, _ = parse_front_matter('---\ndate: "2023-01-05T08:30:00"\n---\n')

        assert meta.date == datetime(2023, 1, 5, 8, 30)

    def test_tags_as_comma_string(self):
        meta, _ = parse_front_matter("---\ntags: flutter, dart ,\n---\n")

        assert meta.tags == ["flutter", "dart"]

    def test_draft_as_string(self):
        meta, _ = parse_front_matter('---\ndraft: "true"\n---\n')

        assert meta.draft is True

    def test_empty_block(self):
        meta, block = parse_front_matter("---\n---\nBody\n")

        assert meta.title == ""
        assert meta.tags == []
        assert block.body == "Body\n"

    def test_defaults_without_front_matter(self):
        meta, block = parse_front_matter("Body\n")

        assert meta.title == ""
        assert meta.date is None
        assert meta.draft is False
        assert block.format == FrontMatterFormat.NONE

    def test_invalid_yaml(self):
        with pytest.raises(FrontMatterError, match="Invalid YAML"):
            parse_front_matter("---\ntitle: [unclosed\n---\n")

    def test_impossible_date(self):
        with pytest.raises(FrontMatterError, match="Invalid YAML") as exc_info:
            parse_front_matter("---\ntitle: X\ndate: 2023-02-30\n---\n", Path("feb.md"))

        assert exc_info.value.path == Path("feb.md")

    def test_not_a_mapping(self):
        with pytest.raises(FrontMatterError, match="mapping"):
            parse_front_matter("---\n- a\n- b\n---\n")

    def test_invalid_date(self):
        with pytest.raises(FrontMatterError, match="Invalid date"):
            parse_front_matter("---\ndate: yesterday\n---\n")

    def test_invalid_draft(self):
        with pytest.raises(FrontMatterError, match="draft"):
            parse_front_matter("---\ndraft: maybe\n---\n")

    def test_invalid_tags(self):
        with pytest.raises(FrontMatterError, match="tags"):
            parse_front_matter("---\ntags: {a: 1}\n---\n")


class TestParseToml:
    def test_all_fields(self):
        text = """+++
title = "Presentation layer"
date = 2023-05-01T08:00:00Z
draft = true
tags = ["flutter", "bloc"]
+++
"""
        meta, block = parse_front_matter(text)

        assert block.format == FrontMatterFormat.TOML
        assert meta.title == "Presentation layer"
        assert meta.date == datetime(2023, 5, 1, 8, tzinfo=timezone.utc)
        assert meta.draft is True
        assert meta.tags == ["flutter", "bloc"]

    def test_invalid_toml(self):
        with pytest.raises(FrontMatterError, match="Invalid TOML"):
            parse_front_matter('+++\ntitle = "unterminated\n+++\n')
