"""Map documents to routes and order them for publication"""

from collections import defaultdict
from pathlib import PurePosixPath
from typing import Callable, Iterable

from mdsite.core.models import Document, Page
from mdsite.core.utils.slug import slugify
from mdsite.errors import DuplicateRouteError


RESERVED_ROUTES = {"/about/": "<about page>"}


def route_for(doc: Document) -> tuple[str, str]:
    """Return (slug, route) for a document: front-matter slug, else file stem, else title."""
    slug = slugify(doc.slug or "")
    if not slug and doc.path:
        slug = slugify(PurePosixPath(doc.path).stem)
    if not slug:
        slug = slugify(doc.title) or "page"
    return slug, f"/{slug}/"


def sort_key(doc: Document) -> tuple[int, str]:
    return doc.order, doc.title


def resolve_pages(docs: Iterable[Document], render: Callable[[str], str]) -> list[Page]:
    """Resolve documents to Pages sorted by (order, title).

    Raises DuplicateRouteError if two documents, or a document and a
    generated page, share a route.
    """
    ordered = sorted(docs, key=sort_key)
    claims: dict[str, list[str]] = defaultdict(list)
    for route, owner in RESERVED_ROUTES.items():
        claims[route].append(owner)

    routed = []
    for doc in ordered:
        slug, route = route_for(doc)
        claims[route].append(doc.path or doc.title)
        routed.append((slug, route, doc))

    for route, owners in claims.items():
        if len(owners) > 1:
            raise DuplicateRouteError(route, owners)

    return [Page(route=route, slug=slug, document=doc, html=render(doc.body)) for slug, route, doc in routed]
