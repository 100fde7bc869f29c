"""Markdown-to-HTML rendering with Pygments code highlighting"""

import re
from typing import Optional

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound


DEFAULT_INLINE_MARKER = '÷'
CODE_SELECTOR = 'code[class*="language-"]'
LANG_RE = re.compile(r'[\w+#.-]+')

_FORMATTER = HtmlFormatter(nowrap=True)


def _lexer(lang: str) -> Optional[Lexer]:
    if not lang or not LANG_RE.fullmatch(lang):
        return None
    try:
        return get_lexer_by_name(lang)
    except ClassNotFound:
        return None


def highlight_code(code: str, lang: str, attrs: str = '') -> str:
    """markdown-it highlight hook: Pygments spans, or '' to fall back to escaped text."""
    lexer = _lexer(lang)
    if lexer is None:
        return ''
    return highlight(code, lexer, _FORMATTER)


def make_parser(preset: str = 'gfm-like', inline_marker: str = DEFAULT_INLINE_MARKER) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name.

    Fenced blocks are highlighted by language. Inline code of the form
    `lang<marker>code` is highlighted too; without a known language prefix it
    renders as plain inline code.
    """
    md = MarkdownIt(preset, options_update={"linkify": False, "highlight": highlight_code})

    def code_inline(self, tokens, idx, options, env):
        token = tokens[idx]
        if inline_marker:
            lang, sep, code = token.content.partition(inline_marker)
            lexer = _lexer(lang) if sep else None
            if lexer is not None:
                spans = highlight(code, lexer, _FORMATTER).rstrip('\n')
                return f'<code class="language-{escapeHtml(lang)}">{spans}</code>'
        return f"<code{self.renderAttrs(token)}>{escapeHtml(token.content)}</code>"

    md.add_render_rule('code_inline', code_inline)
    return md


def render_markdown(body: str, parser: MarkdownIt) -> str:
    """Render a Markdown body to an HTML fragment."""
    return parser.render(body)


def highlight_css(style: str = 'monokai') -> str:
    """Return the Pygments stylesheet for highlighted code blocks."""
    return HtmlFormatter(style=style).get_style_defs(CODE_SELECTOR)
