"""Root test configuration: content-directory fixtures shared by all tests"""

import pytest


def page_text(title: str, date: str | None = "2019-01-01", order: int | None = 1, body: str = "Body.\n") -> str:
    """Markdown file text with a front-matter block; None omits a key."""
    lines = ["---", f'title: "{title}"']
    if date is not None:
        lines.append(f'date: "{date}"')
    if order is not None:
        lines.append(f"order: {order}")
    lines.append("---")
    return "\n".join(lines) + "\n\n" + body


@pytest.fixture(name="make_page")
def make_page_fixture():
    """Factory writing a Markdown page into a directory."""
    def _make(directory, name, title, date="2019-01-01", order=1, body="Body.\n"):
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(page_text(title, date, order, body), encoding="utf-8")
        return path
    return _make


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path, make_page):
    """Two valid pages, written in reverse of their publication order."""
    content = tmp_path / "content"
    make_page(content, "general-advice.md", "General Advice", order=4,
              body="# Avoid global state\n\n```python\nx = 1\n```\n")
    make_page(content, "control-structures.md", "Control Structures", order=1,
              body="Use `python÷enumerate(items)` instead of a counter.\n")
    return content


@pytest.fixture(autouse=True)
def isolate_env(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory with no MDSITE_* variables."""
    import os
    for name in list(os.environ):
        if name.startswith("MDSITE_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
