"""Pipeline step functions: parse, resolve, render, and write the site"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment

from mdsite.config import Settings
from mdsite.core.layout import make_environment, render_about, render_index, render_page
from mdsite.core.models import BuildReport, Document, Page, SiteMetadata
from mdsite.core.parse import discover_files, parse_file
from mdsite.core.render import highlight_css, make_parser, render_markdown
from mdsite.core.resolve import resolve_pages
from mdsite.core.utils.fs import check_clean_target, clean_dir, write_text
from mdsite.errors import ConfigurationError, MalformedMetadataError


log = logging.getLogger(__name__)

ON_ERROR_ABORT = "abort"
ON_ERROR_SKIP = "skip"


def _parse_one(path: Path, root: Path) -> tuple[Path, Optional[Document], Optional[MalformedMetadataError]]:
    try:
        return path, parse_file(path, root), None
    except MalformedMetadataError as e:
        return path, None, e


def run_parse(
    content_dir: Path,
    workers: int = 1,
    on_error: str = ON_ERROR_ABORT,
    ) -> tuple[list[Document], list[tuple[str, MalformedMetadataError]]]:
    """Parse every Markdown file under content_dir.

    Returns (documents, failures) in discovery order. With on_error='abort'
    the first malformed file (in discovery order) is raised instead.
    """
    if not content_dir.exists():
        raise ConfigurationError(f"Content directory not found: {content_dir}")
    files = discover_files(content_dir)
    log.debug("Discovered %d file(s) under %s", len(files), content_dir)

    if workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(lambda p: _parse_one(p, content_dir), files))
    else:
        outcomes = [_parse_one(p, content_dir) for p in files]

    docs: list[Document] = []
    failures: list[tuple[str, MalformedMetadataError]] = []
    for path, doc, err in outcomes:
        if err is None:
            docs.append(doc)
            continue
        if on_error == ON_ERROR_ABORT:
            raise err
        log.warning("Skipping %s: %s", path, "; ".join(err.problems))
        failures.append((str(path), err))
    return docs, failures


def render_site(
    pages: Sequence[Page],
    site: SiteMetadata,
    env: Optional[Environment] = None,
    highlight_style: str = "monokai",
    ) -> dict[str, str]:
    """Compose every output file in memory. Returns {relative_path: content}."""
    env = env or make_environment()
    files = {
        "index.html": render_index(pages, site, env=env),
        "about/index.html": render_about(site, env=env),
    }
    for page in pages:
        files[page.output_path(Path()).as_posix()] = render_page(page, site, pages, env=env)
    files["highlight.css"] = highlight_css(highlight_style)
    return files


def write_site(
    files: dict[str, str],
    output_dir: Path,
    clean: bool = False,
    protected: Sequence[Path] = (),
    ) -> list[Path]:
    """Write composed files below output_dir. Returns the written paths.

    With clean=True the directory is emptied first; ConfigurationError is
    raised instead if it is the working directory or contains a protected path.
    """
    if clean:
        clean_dir(output_dir, protected)
    return [write_text(output_dir / rel, content) for rel, content in files.items()]


def run_build(settings: Settings) -> BuildReport:
    """Run the full build: parse -> resolve -> render -> compose -> write."""
    site = settings.site()
    content_dir = Path(settings.content_dir)
    output_dir = Path(settings.output_dir)
    if settings.clean:
        check_clean_target(output_dir, [content_dir])

    docs, failures = run_parse(content_dir, settings.workers, settings.on_error)
    parser = make_parser(settings.parser_config, settings.inline_code_marker)
    pages = resolve_pages(docs, render=lambda body: render_markdown(body, parser))
    for page in pages:
        log.debug("Resolved %s -> %s (order %d)", page.document.path, page.route, page.order)

    env = make_environment(Path(settings.templates_dir) if settings.templates_dir else None)
    files = render_site(pages, site, env, settings.highlight_style)
    written = write_site(files, output_dir, settings.clean, [content_dir])
    log.info("Wrote %d file(s) to %s", len(written), output_dir)
    return BuildReport(pages=pages, failures=failures, written=written)
