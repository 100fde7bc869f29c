"""Unit tests for config.py"""

import pytest

from mdsite.config import load_config
from mdsite.core.models import SiteMetadata
from mdsite.errors import ConfigurationError


def test_load_config_defaults():
    """Settings defaults apply when no config.yaml, env var, or CLI override exists."""
    settings = load_config()
    assert settings.site_title == "Writing Idiomatic Python"
    assert settings.content_dir == "content"
    assert settings.output_dir == "public"
    assert settings.on_error == "abort"
    assert settings.workers == 1


def test_load_config_reads_config_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("site_title: 'From YAML'\noutput_dir: site\n")
    settings = load_config()
    assert settings.site_title == "From YAML"
    assert settings.output_dir == "site"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """MDSITE_SITE_TITLE takes precedence over config.yaml."""
    (tmp_path / "config.yaml").write_text("site_title: 'From YAML'\n")
    monkeypatch.setenv("MDSITE_SITE_TITLE", "From Env")
    assert load_config().site_title == "From Env"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the environment; None overrides are ignored."""
    monkeypatch.setenv("MDSITE_SITE_TITLE", "From Env")
    settings = load_config(overrides={"site_title": "From CLI", "output_dir": None})
    assert settings.site_title == "From CLI"
    assert settings.output_dir == "public"


def test_load_config_env_coerces_types(monkeypatch):
    monkeypatch.setenv("MDSITE_WORKERS", "4")
    monkeypatch.setenv("MDSITE_CLEAN", "true")
    settings = load_config()
    assert settings.workers == 4
    assert settings.clean is True


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


@pytest.mark.parametrize("field,value", [
    ("on_error", "ignore"),
    ("parser_config", "markdown"),
    ("workers", 0),
])
def test_load_config_rejects_invalid_values(field, value):
    with pytest.raises(ValueError):
        load_config(overrides={field: value})


def test_site_metadata_from_settings():
    site = load_config(overrides={"site_title": " Idioms ", "base_path": "idioms"}).site()
    assert site == SiteMetadata(title="Idioms", base_path="/idioms/")


@pytest.mark.parametrize("yaml_text", ["site_title: ''\n", "site_title: null\n"])
def test_missing_site_title_raises_configuration_error(tmp_path, yaml_text):
    (tmp_path / "config.yaml").write_text(yaml_text)
    with pytest.raises(ConfigurationError):
        load_config().site()


def test_load_config_rejects_unknown_highlight_style():
    with pytest.raises(ValueError, match="unknown Pygments style 'nosuchstyle'"):
        load_config(overrides={"highlight_style": "nosuchstyle"})


def test_load_config_accepts_known_highlight_style(monkeypatch):
    monkeypatch.setenv("MDSITE_HIGHLIGHT_STYLE", "friendly")
    assert load_config().highlight_style == "friendly"
