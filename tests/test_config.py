from pathlib import Path

import pytest

from nbsync.config import (
    CONFIG_FILENAME,
    GlobalConfig,
    resolve_config_path,
)
from nbsync.errors import ConfigError


def test_missing_file_gives_defaults(tmp_path):
    config = GlobalConfig.load(tmp_path / "absent.toml")

    assert config.converter.command == "jupytext"
    assert config.converter.timeout == 300
    assert config.sync.hidden_dir == ".nb"
    assert config.sync.ignore_patterns == []
    assert config.sync.jobs == 1
    assert config.verbose is False


def test_load_toml(tmp_path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text(
        """
[nbsync]
verbose = true

[converter]
command = "python -m jupytext"
timeout = 12.5

[sync]
hidden_dir = "_scripts"
ignore_patterns = [".ipynb_checkpoints", ".git"]
jobs = 4
""",
        encoding="utf-8",
    )

    config = GlobalConfig.load(path)

    assert config.verbose is True
    assert config.converter.command == "python -m jupytext"
    assert config.converter.timeout == 12.5
    assert config.sync.hidden_dir == "_scripts"
    assert config.sync.ignore_patterns == [".ipynb_checkpoints", ".git"]
    assert config.sync.jobs == 4


def test_partial_file_keeps_other_defaults(tmp_path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text("[sync]\njobs = 2\n", encoding="utf-8")

    config = GlobalConfig.load(path)

    assert config.sync.jobs == 2
    assert config.converter.command == "jupytext"


def test_invalid_toml_raises_config_error(tmp_path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text("[sync\njobs = ", encoding="utf-8")

    with pytest.raises(ConfigError):
        GlobalConfig.load(path)


@pytest.mark.parametrize(
    "data",
    [
        {"sync": {"jobs": "two"}},
        {"sync": {"jobs": 0}},
        {"sync": {"jobs": True}},
        {"sync": {"hidden_dir": "a/b"}},
        {"sync": {"hidden_dir": ""}},
        {"sync": {"ignore_patterns": [1, 2]}},
        {"sync": "fast"},
        {"converter": {"timeout": -1}},
        {"converter": {"timeout": "soon"}},
        {"converter": {"command": ""}},
        {"nbsync": {"verbose": "yes"}},
    ],
)
def test_invalid_values_raise_config_error(data):
    with pytest.raises(ConfigError):
        GlobalConfig.from_dict(data)


def test_save_writes_loadable_file(tmp_path):
    config = GlobalConfig()
    config.sync.jobs = 3
    config.sync.ignore_patterns = [".ipynb_checkpoints"]
    path = tmp_path / "nested" / CONFIG_FILENAME

    config.save(path)

    assert GlobalConfig.load(path) == config


def test_resolve_config_path_precedence(tmp_path, monkeypatch):
    assert resolve_config_path(tmp_path) == tmp_path / CONFIG_FILENAME

    monkeypatch.setenv("NBSYNC_CONFIG", str(tmp_path / "env.toml"))
    assert resolve_config_path(tmp_path) == tmp_path / "env.toml"

    assert resolve_config_path(tmp_path, tmp_path / "cli.toml") == tmp_path / "cli.toml"


def test_resolve_config_path_default_root():
    assert resolve_config_path() == Path(".") / CONFIG_FILENAME
