"""File discovery and front-matter extraction"""

import re
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from mdsite.core.models import REQUIRED_KEYS, Document
from mdsite.errors import MalformedMetadataError


FRONTMATTER_RE = re.compile(r'^---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)', re.DOTALL)
MD_EXTENSIONS = {'.md', '.mdx'}


def split_frontmatter(text: str, path: Optional[str] = None) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with the YAML header removed.

    Text without a header block yields ({}, text). The body is returned
    verbatim so that dump_frontmatter can reproduce the file.
    """
    text = text.lstrip('\ufeff')
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    try:
        fm = yaml.safe_load(m.group(1) or '') or {}
    except yaml.YAMLError as e:
        raise MalformedMetadataError(path, [f"invalid YAML: {e}"]) from e
    if not isinstance(fm, dict):
        raise MalformedMetadataError(path, [f"expected a mapping, got {type(fm).__name__}"])
    return fm, text[m.end():]


def _problems(e: ValidationError) -> list[str]:
    return [f"{'.'.join(str(p) for p in err['loc']) or 'front-matter'}: {err['msg']}" for err in e.errors()]


def parse_document(text: str, path: Optional[str] = None) -> Document:
    """Parse raw file text into a validated Document.

    Raises MalformedMetadataError when title, date, or order is missing,
    the date is not a calendar date, or order is not an integer.
    """
    fm, body = split_frontmatter(text, path)
    missing = [f"missing '{key}'" for key in REQUIRED_KEYS if key not in fm]
    if missing:
        raise MalformedMetadataError(path, missing)

    extra = {k: v for k, v in fm.items() if k not in REQUIRED_KEYS and k != 'slug'}
    try:
        return Document(
            title=fm['title'],
            date=fm['date'],
            order=fm['order'],
            slug=fm.get('slug'),
            body=body,
            path=path or '',
            extra=extra,
        )
    except ValidationError as e:
        raise MalformedMetadataError(path, _problems(e)) from e


def dump_frontmatter(doc: Document) -> str:
    """Serialise a Document back to front-matter plus body."""
    fm: dict[str, Any] = {'title': doc.title, 'date': doc.date, 'order': doc.order}
    if doc.slug:
        fm['slug'] = doc.slug
    fm.update(doc.extra)
    header = yaml.safe_dump(fm, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{header}---\n{doc.body}"


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


def parse_file(path: Path, root: Optional[Path] = None) -> Document:
    """Parse a single markdown file; Document.path is relative to root when given."""
    if root is None:
        rel = path
    elif root.is_dir():
        rel = path.relative_to(root)
    else:
        rel = Path(path.name)
    try:
        raw = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise MalformedMetadataError(rel.as_posix(), [f"not valid UTF-8: {e}"]) from e
    return parse_document(raw, rel.as_posix())
