"""Typographic substitutions applied to rendered Markdown text.

Straight quotes, triple dots and spaced hyphens in literal text runs are
replaced with their typographic counterparts. Inline code, code blocks and raw
HTML never reach the substitutions: code text is stored as ``AtomicString`` by
Python-Markdown, ``pre``/``code`` subtrees are skipped, and raw HTML is stashed
outside the element tree.
"""

from __future__ import annotations

import re
import typing as typ

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markdown.util import AtomicString

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

RIGHT_SINGLE_QUOTE = "’"
LEFT_DOUBLE_QUOTE = "“"
RIGHT_DOUBLE_QUOTE = "”"
ELLIPSIS = "…"
EN_DASH = "–"

SKIPPED_TAGS = frozenset({"code", "pre", "kbd", "samp", "script", "style"})

_SUBSTITUTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\.\.\."), ELLIPSIS),
    (re.compile(r" - "), f" {EN_DASH} "),
    (re.compile(r'"\b'), LEFT_DOUBLE_QUOTE),
    (re.compile(r'^"'), LEFT_DOUBLE_QUOTE),
    (re.compile(r'\b"'), RIGHT_DOUBLE_QUOTE),
    (re.compile(r'"$'), RIGHT_DOUBLE_QUOTE),
)


def curl_text(text: str) -> str:
    """Apply the typographic substitutions to a single literal text run.

    Every apostrophe becomes a right single quote; a double quote opens when it
    precedes a word or starts the run and closes when it follows a word or
    ends the run.

    Examples
    --------
    >>> curl_text('"hello"')
    '“hello”'
    >>> curl_text("it's fine...")
    'it’s fine…'
    """
    curled = text.replace("'", RIGHT_SINGLE_QUOTE)
    for pattern, replacement in _SUBSTITUTIONS:
        curled = pattern.sub(replacement, curled)
    return curled


class TypographyExtension(Extension):
    """Register :class:`TypographyTreeprocessor` on a Markdown instance."""

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Run the typography pass after inline patterns are resolved."""
        md.treeprocessors.register(TypographyTreeprocessor(md), "blog_typography", 15)


class TypographyTreeprocessor(Treeprocessor):
    """Curl quotes and dashes in the text and tail of every eligible element."""

    def run(self, root: Element) -> Element:
        """Rewrite literal text in ``root`` in place."""
        self._curl(root, skip=False)
        return root

    def _curl(self, element: Element, *, skip: bool) -> None:
        skip = skip or element.tag in SKIPPED_TAGS
        if not skip:
            element.text = _curl_run(element.text)
        for child in element:
            self._curl(child, skip=skip)
            if not skip:
                child.tail = _curl_run(child.tail)


def _curl_run(text: str | None) -> str | None:
    if not text or isinstance(text, AtomicString):
        return text
    return curl_text(text)


__all__ = [
    "ELLIPSIS",
    "EN_DASH",
    "LEFT_DOUBLE_QUOTE",
    "RIGHT_DOUBLE_QUOTE",
    "RIGHT_SINGLE_QUOTE",
    "TypographyExtension",
    "TypographyTreeprocessor",
    "curl_text",
]
