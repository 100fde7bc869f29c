"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from mdsite.core.models import SiteMetadata
from mdsite.errors import ConfigurationError


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDSITE_"


class Settings(BaseModel):
    site_title:    Optional[str] = Field(default="Writing Idiomatic Python", description="Title shown in every page header")
    base_path:     str = Field(default="/",       description="URL prefix the site is served under")
    content_dir:   str = Field(default="content", description="Directory of Markdown pages")
    output_dir:    str = Field(default="public",  description="Directory for generated HTML")
    templates_dir: Optional[str] = Field(default=None, description="Override directory searched before bundled templates")
    parser_config: str = Field(default="gfm-like", pattern="^(commonmark|gfm-like|default|zero)$", description="MarkdownIt parser preset name")
    inline_code_marker: str = Field(default="÷", description="Separates language from code in inline code spans")
    highlight_style: str = Field(default="monokai", description="Pygments style for highlight.css")
    on_error:      str = Field(default="abort", pattern="^(abort|skip)$", description="abort the build or skip malformed pages")
    workers:       int = Field(default=1, ge=1, description="Documents parsed in parallel")
    clean:         bool = Field(default=False, description="Empty output_dir before writing")

    @field_validator("highlight_style")
    @classmethod
    def _known_style(cls, v: str) -> str:
        try:
            get_style_by_name(v)
        except ClassNotFound as e:
            raise ValueError(f"unknown Pygments style '{v}'") from e
        return v

    def site(self) -> SiteMetadata:
        """Read-only site metadata passed to rendering. Raises ConfigurationError without a title."""
        if not self.site_title or not self.site_title.strip():
            raise ConfigurationError("site_title is not configured")
        return SiteMetadata(title=self.site_title.strip(), base_path=self.base_path)


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
