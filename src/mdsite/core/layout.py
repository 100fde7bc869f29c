"""Wrap rendered page bodies in the shared site chrome"""

from functools import lru_cache
from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from mdsite.core.models import Page, SiteMetadata
from mdsite.errors import ConfigurationError


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

EPIGRAPH = (
    "Always code as if the guy who ends up maintaining your code "
    "will be a violent psychopath who knows where you live.",
    "John Woods comp.lang.c++",
)


def make_environment(templates_dir: Optional[Path] = None) -> Environment:
    """Jinja2 environment over templates_dir, falling back to the bundled templates."""
    search = [str(templates_dir)] if templates_dir else []
    search.append(str(TEMPLATES_DIR))
    return Environment(
        loader=FileSystemLoader(search),
        autoescape=select_autoescape(enabled_extensions=("html", "jinja2")),
        trim_blocks=True,
        lstrip_blocks=True,
    )


@lru_cache(maxsize=1)
def default_environment() -> Environment:
    return make_environment()


def _check_site(site: Optional[SiteMetadata]) -> SiteMetadata:
    if site is None:
        raise ConfigurationError("Site metadata is missing; a site title must be configured")
    if not site.title or not site.title.strip():
        raise ConfigurationError("Site title is empty")
    return site


def compose(
    body_html: str,
    site: Optional[SiteMetadata],
    title: Optional[str] = None,
    env: Optional[Environment] = None,
    ) -> str:
    """Wrap body_html with the header (site title linking home) and the About link.

    Raises ConfigurationError when site metadata is missing.
    """
    site = _check_site(site)
    env = env or default_environment()
    return env.get_template("base.html.jinja2").render(
        site=site,
        title=title,
        content=Markup(body_html),
    )


def render_page(
    page: Page,
    site: Optional[SiteMetadata],
    pages: Sequence[Page] = (),
    env: Optional[Environment] = None,
    ) -> str:
    """Full HTML for one document page, with previous/next links in site order."""
    site = _check_site(site)
    env = env or default_environment()
    routes = [p.route for p in pages]
    prev_page = next_page = None
    if page.route in routes:
        i = routes.index(page.route)
        prev_page = pages[i - 1] if i > 0 else None
        next_page = pages[i + 1] if i + 1 < len(pages) else None
    body = env.get_template("page.html.jinja2").render(
        site=site,
        page=page,
        html=Markup(page.html),
        prev_page=prev_page,
        next_page=next_page,
    )
    return compose(body, site, title=page.title, env=env)


def render_index(pages: Sequence[Page], site: Optional[SiteMetadata], env: Optional[Environment] = None) -> str:
    """Home page listing every page in site order."""
    site = _check_site(site)
    env = env or default_environment()
    body = env.get_template("index.html.jinja2").render(site=site, pages=pages)
    return compose(body, site, env=env)


def render_about(site: Optional[SiteMetadata], env: Optional[Environment] = None) -> str:
    site = _check_site(site)
    env = env or default_environment()
    quote, source = EPIGRAPH
    body = env.get_template("about.html.jinja2").render(site=site, quote=quote, source=source)
    return compose(body, site, title="About", env=env)
