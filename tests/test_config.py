"""Tests for environment configuration."""

from pathlib import Path
from unittest.mock import patch

from ltex_launcher.config import DEFAULT_SETTINGS_FILE, load_config
from ltex_launcher.worktrees import create_worktree, which


def test_load_config_defaults():
    with patch("appdirs.user_data_dir", return_value="/home/user/.local/share/ltex-launcher"):
        config = load_config({})

    assert config.work_dir == Path("/home/user/.local/share/ltex-launcher")
    assert config.settings_file == DEFAULT_SETTINGS_FILE
    assert config.github_api == "https://api.github.com"
    assert config.github_token is None
    assert config.log_level == "INFO"


def test_load_config_overrides(tmp_path):
    config = load_config({
        "LTEX_LAUNCHER_WORK_DIR": str(tmp_path),
        "LTEX_LAUNCHER_SETTINGS_FILE": "settings/lsp.json",
        "LTEX_LAUNCHER_GITHUB_API": "https://ghe.example.com/api/v3/",
        "GITHUB_TOKEN": "token",
        "LTEX_LAUNCHER_LOG_LEVEL": "debug",
    })

    assert config.work_dir == tmp_path
    assert config.settings_file == "settings/lsp.json"
    assert config.github_api == "https://ghe.example.com/api/v3"
    assert config.github_token == "token"
    assert config.log_level == "debug"


def test_load_config_relative_work_dir_is_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    config = load_config({"LTEX_LAUNCHER_WORK_DIR": "rel"})

    assert config.work_dir.is_absolute()
    assert config.work_dir == tmp_path / "rel"


def test_create_worktree(tmp_path):
    worktree = create_worktree(str(tmp_path), env={"PATH": "/bin"})

    assert worktree.root == tmp_path.resolve()
    assert worktree.env == {"PATH": "/bin"}


def test_which_uses_worktree_path(tmp_path):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    tool = bin_dir / "ltex-ls-plus"
    tool.write_text("#!/bin/sh\n")
    tool.chmod(0o755)

    found = create_worktree(str(tmp_path), env={"PATH": str(bin_dir)})
    missing = create_worktree(str(tmp_path), env={"PATH": str(tmp_path)})

    assert which(found, "ltex-ls-plus") == str(tool)
    assert which(missing, "ltex-ls-plus") is None
