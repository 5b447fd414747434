"""Tests for configuration loading."""

import pytest

from submodule_commitmsg.config import (
    CONFIG_FILENAME,
    Config,
    ConfigError,
    config_path,
    git_executable,
    load_config,
    read_config,
)


class TestReadConfig:
    def test_full_file(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("title_prefix: Bump\nplaceholder: '-------'\nexclude:\n  - docs\n  - vendor/tool\n")

        assert read_config(path) == Config(
            title_prefix="Bump",
            placeholder="-------",
            exclude=("docs", "vendor/tool"),
        )

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("")
        assert read_config(path) == Config()

    def test_single_exclude_string(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("exclude: docs\n")
        assert read_config(path).exclude == ("docs",)

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("colour: blue\n")
        assert read_config(path) == Config()

    @pytest.mark.parametrize("content", [
        "- just\n- a list\n",
        "title_prefix: [1, 2]\n",
        "exclude: {a: b}\n",
        "exclude: [1, 2]\n",
        "title_prefix: 'unterminated\n",
    ])
    def test_malformed(self, tmp_path, content):
        path = tmp_path / "cfg.yaml"
        path.write_text(content)
        with pytest.raises(ConfigError):
            read_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            read_config(tmp_path / "missing.yaml")


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path):
        assert config_path(tmp_path) is None
        assert load_config(tmp_path) == Config()

    def test_file_at_root(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("title_prefix: Sync\n")
        assert load_config(tmp_path).title_prefix == "Sync"

    def test_environment_overrides_root_file(self, tmp_path, monkeypatch):
        (tmp_path / CONFIG_FILENAME).write_text("title_prefix: Sync\n")
        other = tmp_path / "other.yaml"
        other.write_text("title_prefix: Other\n")
        monkeypatch.setenv("SUBMODULE_COMMITMSG_CONFIG", str(other))

        assert config_path(tmp_path) == other
        assert load_config(tmp_path).title_prefix == "Other"

    def test_environment_pointing_at_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SUBMODULE_COMMITMSG_CONFIG", str(tmp_path / "missing.yaml"))
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestGitExecutable:
    def test_default(self):
        assert git_executable() == "git"

    def test_override(self, monkeypatch):
        monkeypatch.setenv("SUBMODULE_COMMITMSG_GIT", "/opt/git/bin/git")
        assert git_executable() == "/opt/git/bin/git"
