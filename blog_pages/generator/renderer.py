"""Utilities for rendering Markdown bodies and titles into HTML."""

from __future__ import annotations

import re
import typing as typ

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter
from pymdownx import emoji

from .typography import TypographyExtension

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

PARAGRAPH_WRAPPER = re.compile(r"<p>(.*)</p>\s*")


class HtmlContentRenderer:
    """Render Markdown with consistent extensions and typography."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a renderer with the Pygments style for code blocks.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions.

        A fresh :class:`~markdown.Markdown` instance is built per call, so the
        renderer can be shared by concurrent workers.
        """
        if not text.strip():
            return ""
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            "pymdownx.emoji",
            "pymdownx.tilde",
            "pymdownx.caret",
            "pymdownx.mark",
            TypographyExtension(),
        ]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                },
                "pymdownx.emoji": {
                    "emoji_index": emoji.gemoji,
                    "emoji_generator": emoji.to_alt,
                },
            },
        )
        return md.convert(text) + "\n"

    def inline(self, text: str) -> str:
        """Render a one-line Markdown fragment without its paragraph wrapper.

        Examples
        --------
        >>> HtmlContentRenderer().inline("*Hi* there")
        '<em>Hi</em> there'
        """
        return PARAGRAPH_WRAPPER.sub(r"\1", self.markdown(text))


__all__ = ["PARAGRAPH_WRAPPER", "HtmlContentRenderer"]
