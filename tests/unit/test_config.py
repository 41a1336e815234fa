"""Unit tests for config.py"""

import pytest

from postindex.config import DEFAULT_EXCLUDE, load_config


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory so no stray postindex.yaml is read."""
    monkeypatch.chdir(tmp_path)


def test_load_config_defaults():
    settings = load_config()
    assert settings.parser_config == "gfm-like"
    assert settings.workers == 1
    assert settings.include_drafts is False
    assert settings.exclude == DEFAULT_EXCLUDE
    assert settings.log_level == "WARNING"


def test_load_config_reads_yaml(tmp_path):
    (tmp_path / "postindex.yaml").write_text("workers: 3\nexclude: [_site, docs]\n")
    settings = load_config()
    assert settings.workers == 3
    assert settings.exclude == ["_site", "docs"]


def test_load_config_env_overrides_yaml(tmp_path, monkeypatch):
    (tmp_path / "postindex.yaml").write_text("workers: 3\n")
    monkeypatch.setenv("POSTINDEX_WORKERS", "5")
    assert load_config().workers == 5


def test_load_config_cli_overrides_env(monkeypatch):
    monkeypatch.setenv("POSTINDEX_WORKERS", "5")
    assert load_config(overrides={"workers": 2, "parser_config": None}).workers == 2


def test_load_config_env_list_is_comma_separated(monkeypatch):
    monkeypatch.setenv("POSTINDEX_EXCLUDE", "_site, vendor,")
    assert load_config().exclude == ["_site", "vendor"]


def test_load_config_env_bool(monkeypatch):
    monkeypatch.setenv("POSTINDEX_INCLUDE_DRAFTS", "true")
    assert load_config().include_drafts is True


def test_load_config_invalid_yaml(tmp_path):
    (tmp_path / "postindex.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid postindex.yaml"):
        load_config()


def test_load_config_non_mapping_yaml(tmp_path):
    (tmp_path / "postindex.yaml").write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


@pytest.mark.parametrize("overrides", [{"workers": 0}, {"log_level": "LOUD"}])
def test_load_config_rejects_invalid_values(overrides):
    with pytest.raises(ValueError):
        load_config(overrides=overrides)


def test_load_config_rejects_unknown_parser_preset():
    """An unknown MarkdownIt preset is refused up front rather than failing mid-run."""
    with pytest.raises(ValueError):
        load_config(overrides={"parser_config": "no-such-preset"})


def test_load_config_accepts_known_parser_preset():
    assert load_config(overrides={"parser_config": "commonmark"}).parser_config == "commonmark"
