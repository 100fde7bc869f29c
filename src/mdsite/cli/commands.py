"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from mdsite.config import Settings, load_config
from mdsite.core.pipeline import run_build, run_parse
from mdsite.core.render import make_parser, render_markdown
from mdsite.core.resolve import resolve_pages
from mdsite.errors import SiteError
from mdsite.logging_setup import configure_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _echo_failures(failures: list) -> None:
    for path, err in failures:
        typer.echo(f"  skipped: {path}", err=True)
        for problem in err.problems:
            typer.echo(f"    {problem}", err=True)


ContentArg = Annotated[Optional[str], typer.Argument(help="Directory of Markdown pages")]
VerboseOpt = Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")]


def build_cmd(
    content: ContentArg = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    title: Annotated[Optional[str], typer.Option("--title", help="Site title")] = None,
    base_path: Annotated[Optional[str], typer.Option("--base-path", help="URL prefix the site is served under")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    on_error: Annotated[Optional[str], typer.Option("--on-error", help="abort or skip malformed pages")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Documents parsed in parallel")] = None,
    clean: Annotated[Optional[bool], typer.Option("--clean/--no-clean", help="Empty the output directory first")] = None,
    verbose: VerboseOpt = False,
    ):
    """Build the static site: parse -> resolve -> render -> write."""
    configure_logging(verbose)
    settings = _settings(overrides={
        "content_dir": content, "output_dir": out, "site_title": title, "base_path": base_path,
        "parser_config": parser, "on_error": on_error, "workers": workers, "clean": clean,
    })
    try:
        report = run_build(settings)
    except SiteError as e:
        _fail(str(e))
    except Exception as e:
        _fail("Build failed", e)

    for page in report.pages:
        typer.echo(f"  {page.document.path} -> {page.route}")
    _echo_failures(report.failures)
    typer.echo(
        f"Built {len(report.pages)} page(s) to {settings.output_dir}/"
        + (f", skipped {len(report.failures)}" if report.failures else "")
    )


def check_cmd(
    content: ContentArg = None,
    on_error: Annotated[str, typer.Option("--on-error", help="abort at the first malformed page or skip and report all")] = "skip",
    verbose: VerboseOpt = False,
    ):
    """Validate front-matter and routes without writing output."""
    configure_logging(verbose)
    settings = _settings(overrides={"content_dir": content, "on_error": on_error})
    md = make_parser(settings.parser_config, settings.inline_code_marker)
    try:
        docs, failures = run_parse(Path(settings.content_dir), settings.workers, settings.on_error)
        pages = resolve_pages(docs, render=lambda body: render_markdown(body, md))
    except SiteError as e:
        _fail(str(e))

    _echo_failures(failures)
    if failures:
        typer.echo(f"{len(failures)} of {len(docs) + len(failures)} document(s) failed.", err=True)
        raise typer.Exit(1)
    typer.echo(f"OK: {len(pages)} document(s).")


def list_cmd(
    content: ContentArg = None,
    ):
    """List pages in site order."""
    settings = _settings(overrides={"content_dir": content})
    try:
        docs, _ = run_parse(Path(settings.content_dir), settings.workers, settings.on_error)
        pages = resolve_pages(docs, render=lambda body: "")
    except SiteError as e:
        _fail(str(e))
    if not pages:
        typer.echo("No pages found.")
        raise typer.Exit(1)
    for page in pages:
        typer.echo(f"{page.order:>4}  {page.route:<30} {page.title}")
