"""Data models for documents, resolved pages, and site metadata"""

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


REQUIRED_KEYS = ("title", "date", "order")


class Document(BaseModel):
    """A content file: validated front-matter plus its Markdown body."""
    model_config = ConfigDict(frozen=True)

    title: str
    date: str                       # ISO calendar date, YYYY-MM-DD
    order: StrictInt
    body: str = ""
    path: str = ""                  # source path, relative to the content root
    slug: Optional[str] = None      # explicit route override from front-matter
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("title", mode="before")
    @classmethod
    def _title_not_blank(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("must not be empty")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def _iso_date(cls, v: Any) -> str:
        """Accept YAML dates and ISO strings; normalise to YYYY-MM-DD."""
        if isinstance(v, datetime):
            return v.date().isoformat()
        if isinstance(v, date):
            return v.isoformat()
        if isinstance(v, str):
            return date.fromisoformat(v.strip()).isoformat()
        raise ValueError(f"expected an ISO date, got {type(v).__name__}")

    @field_validator("slug", mode="before")
    @classmethod
    def _slug_not_blank(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Page(BaseModel):
    """A Document resolved to a route, with its body rendered to HTML."""
    model_config = ConfigDict(frozen=True)

    route: str                      # e.g. '/control-structures/'
    slug: str
    document: Document
    html: str

    @property
    def title(self) -> str:
        return self.document.title

    @property
    def order(self) -> int:
        return self.document.order

    @property
    def date(self) -> str:
        return self.document.date

    def output_path(self, output_dir: Path) -> Path:
        return output_dir / self.slug / "index.html"


class SiteMetadata(BaseModel):
    """Global, read-only site settings injected into every render."""
    model_config = ConfigDict(frozen=True)

    title: str
    base_path: str = "/"

    @field_validator("base_path", mode="before")
    @classmethod
    def _normalise_base_path(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().strip("/")
            return f"/{v}/" if v else "/"
        return v

    def url(self, route: str) -> str:
        """Prefix a site route ('/about/') with base_path."""
        return self.base_path + route.lstrip("/")


@dataclass
class BuildReport:
    """Outcome of a build: published pages, skipped files, and files written."""
    pages:    list[Page] = field(default_factory=list)
    failures: list[tuple[str, Exception]] = field(default_factory=list)
    written:  list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
