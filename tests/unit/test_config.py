"""Тесты BlogConfig: источники настроек и их приоритет."""

from pathlib import Path

import pytest

from blog_core.config import (
    BlogConfig,
    find_config_file,
    get_config,
    reset_config,
)


class TestDefaults:
    """Конфиг без blog.toml и без переменных окружения."""

    def test_default_values(self):
        config = BlogConfig()

        assert config.site_dir == Path(".")
        assert config.content_dir == Path("content")
        assert config.public_dir == Path("public")
        assert config.environment == "production"
        assert config.hugo_bin == "hugo"
        assert config.build_args == []
        assert config.remote_user is None
        assert config.remote_host is None
        assert config.remote_dir == ""
        assert config.ssh_key is None
        assert config.delete is True
        assert config.log_level == "INFO"

    def test_derived_paths(self, tmp_path):
        config = BlogConfig(site_dir=tmp_path, public_dir="dist")

        assert config.content_path == tmp_path / "content"
        assert config.public_path == tmp_path / "dist"

    def test_absolute_public_dir_is_kept(self, tmp_path):
        public = tmp_path / "out"
        config = BlogConfig(site_dir=tmp_path / "site", public_dir=public)

        assert config.public_path == public


class TestTomlLoading:
    """Чтение blog.toml."""

    def test_sections_are_flattened(self, site_dir, blog_toml):
        config = BlogConfig(site_dir=site_dir)

        assert config.remote_user == "admin"
        assert config.remote_host == "blog.example.com"
        assert config.remote_dir == "apps/blog/public/"
        assert config.ssh_key == Path("~/keys/deploy.pem").expanduser()
        assert config.environment == "production"

    def test_site_dir_defaults_to_toml_location(self, site_dir, blog_toml, monkeypatch):
        nested = site_dir / "content" / "posts"
        monkeypatch.chdir(nested)

        config = BlogConfig()

        assert config.site_dir == site_dir
        assert config.content_path == site_dir / "content"

    def test_relative_site_root(self, tmp_path, monkeypatch):
        (tmp_path / "blog.toml").write_text(
            '[site]\nroot = "hugo-site"\n', encoding="utf-8"
        )
        monkeypatch.chdir(tmp_path)

        config = BlogConfig()

        assert config.site_dir == tmp_path / "hugo-site"

    def test_flat_keys_are_supported(self, tmp_path, monkeypatch):
        (tmp_path / "blog.toml").write_text(
            'remote_host = "flat.example.com"\nremote_user = "deploy"\n',
            encoding="utf-8",
        )
        monkeypatch.chdir(tmp_path)

        config = BlogConfig()

        assert config.remote_host == "flat.example.com"
        assert config.remote_user == "deploy"

    def test_build_args_list(self, tmp_path, monkeypatch):
        (tmp_path / "blog.toml").write_text(
            '[build]\nargs = ["--minify", "--gc"]\n', encoding="utf-8"
        )
        monkeypatch.chdir(tmp_path)

        assert BlogConfig().build_args == ["--minify", "--gc"]

    def test_invalid_toml_raises(self, tmp_path, monkeypatch):
        (tmp_path / "blog.toml").write_text("[remote\nhost = ", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ValueError, match="Invalid"):
            BlogConfig()

    def test_empty_key_means_not_set(self, tmp_path, monkeypatch):
        (tmp_path / "blog.toml").write_text('[remote]\nkey = ""\n', encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert BlogConfig().ssh_key is None


class TestPriority:
    """kwargs > env > blog.toml > defaults."""

    def test_env_overrides_toml(self, site_dir, blog_toml, monkeypatch):
        monkeypatch.setenv("BLOG_REMOTE_HOST", "env.example.com")

        config = BlogConfig(site_dir=site_dir)

        assert config.remote_host == "env.example.com"
        assert config.remote_user == "admin"

    def test_dotenv_overrides_toml(self, site_dir, blog_toml, isolated_env):
        (isolated_env / ".env").write_text(
            "BLOG_REMOTE_HOST=dotenv.example.com\n", encoding="utf-8"
        )

        config = BlogConfig(site_dir=site_dir)

        assert config.remote_host == "dotenv.example.com"

    def test_kwargs_override_env(self, monkeypatch):
        monkeypatch.setenv("BLOG_ENVIRONMENT", "staging")

        assert BlogConfig().environment == "staging"
        assert BlogConfig(environment="preview").environment == "preview"

    def test_build_args_from_env_string(self, monkeypatch):
        monkeypatch.setenv("BLOG_BUILD_ARGS", "--minify --cleanDestinationDir")

        assert BlogConfig().build_args == ["--minify", "--cleanDestinationDir"]

    def test_bool_from_env(self, monkeypatch):
        monkeypatch.setenv("BLOG_DELETE", "false")

        assert BlogConfig().delete is False

    def test_blank_remote_values_are_none(self, monkeypatch):
        monkeypatch.setenv("BLOG_REMOTE_USER", "   ")

        assert BlogConfig().remote_user is None

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            BlogConfig(log_level="VERBOSE")


class TestRequireRemote:
    """Сборка DeployTarget."""

    def test_target_from_config(self, tmp_path):
        config = BlogConfig(
            remote_user="admin",
            remote_host="example.com",
            remote_dir="apps/blog",
            ssh_key=tmp_path / "key.pem",
        )

        target = config.require_remote()

        assert target.destination == "admin@example.com:~/apps/blog/"
        assert target.key_path == tmp_path / "key.pem"

    def test_missing_key_file_is_not_checked(self, tmp_path):
        config = BlogConfig(
            remote_user="admin",
            remote_host="example.com",
            ssh_key=tmp_path / "missing.pem",
        )

        assert config.require_remote().key_path == tmp_path / "missing.pem"

    def test_missing_host_and_user(self):
        with pytest.raises(ValueError) as exc_info:
            BlogConfig().require_remote()

        message = str(exc_info.value)
        assert "BLOG_REMOTE_USER" in message
        assert "BLOG_REMOTE_HOST" in message
        assert "blog.toml" in message

    def test_missing_host_only(self):
        with pytest.raises(ValueError, match="remote_host") as exc_info:
            BlogConfig(remote_user="admin").require_remote()

        assert "remote_user" not in str(exc_info.value)


class TestToTomlDict:
    def test_remote_section_omits_unset_values(self):
        data = BlogConfig(remote_host="example.com").to_toml_dict()

        assert data["remote"] == {"dir": "", "host": "example.com"}
        assert "file" not in data["logging"]

    def test_sections(self, tmp_path):
        data = BlogConfig(
            build_args=["--minify"],
            log_file=tmp_path / "deploy.log",
        ).to_toml_dict()

        assert set(data) == {"site", "build", "remote", "sync", "logging"}
        assert data["build"]["args"] == ["--minify"]
        assert data["logging"]["file"] == str(tmp_path / "deploy.log")


class TestFindConfigFile:
    def test_found_in_parent(self, site_dir, blog_toml):
        nested = site_dir / "content" / "posts" / "clean-architecture-data-layer"

        assert find_config_file(nested) == blog_toml

    def test_not_found(self, isolated_env):
        assert find_config_file(isolated_env) is None


class TestGlobalConfig:
    def test_cached_without_overrides(self):
        assert get_config() is get_config()

    def test_overrides_create_new_instance(self):
        first = get_config()
        second = get_config(environment="staging")

        assert second is not first
        assert second.environment == "staging"

    def test_reset(self):
        first = get_config()
        reset_config()

        assert get_config() is not first
