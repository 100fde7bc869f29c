"""Build-time error types raised while parsing, resolving, and composing pages"""

from pathlib import Path


class SiteError(Exception):
    """Base class for every error that aborts or skips part of a site build."""


class MalformedMetadataError(SiteError):
    """Front-matter is missing, unparsable, or fails validation."""

    def __init__(self, path: str | Path | None, problems: list[str]):
        self.path = str(path) if path is not None else None
        self.problems = list(problems)
        where = self.path or "<text>"
        super().__init__(f"Malformed front-matter in {where}: {'; '.join(self.problems)}")


class DuplicateRouteError(SiteError):
    """Two or more pages resolve to the same route."""

    def __init__(self, route: str, paths: list[str]):
        self.route = route
        self.paths = list(paths)
        super().__init__(f"Route {route} is claimed by more than one page: {', '.join(self.paths)}")


class ConfigurationError(SiteError):
    """Global site metadata is missing or invalid."""
