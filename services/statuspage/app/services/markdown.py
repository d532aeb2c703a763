"""
Markdown rendering for incident messages.

Messages are written in CommonMark. Raw HTML is escaped unless
MARKDOWN_ALLOW_HTML is enabled.
"""

from functools import lru_cache

from markdown_it import MarkdownIt
from markupsafe import Markup

from ..core.config import get_settings


class MarkdownRenderer:
    def __init__(self, allow_html: bool = False) -> None:
        self.allow_html = allow_html
        self._md = MarkdownIt("commonmark", {"html": allow_html})

    def convert_to_html(self, text: str | None) -> str:
        if not text:
            return ""
        return self._md.render(text)

    def strip_tags(self, html: str) -> str:
        return strip_tags(html)


def strip_tags(html: str) -> str:
    """Plain text of an HTML fragment with whitespace collapsed."""
    return Markup(html).striptags()


@lru_cache(maxsize=1)
def get_markdown_renderer() -> MarkdownRenderer:
    return MarkdownRenderer(allow_html=get_settings().markdown_allow_html)
