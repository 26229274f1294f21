"""Shared dataclasses used by the site build pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from blog_pages._constants import TAGS_KEY

if typ.TYPE_CHECKING:
    import datetime as dt
    from pathlib import Path

    from blog_pages.front_matter import FrontMatter


@dc.dataclass(slots=True)
class PageRecord:
    """A content file prepared for rendering.

    Attributes
    ----------
    source_path : Path
        Absolute path of the source file.
    local_path : str
        Output path relative to the output root, ``/``-separated. Markdown
        sources always end in ``.html``.
    is_markdown : bool
        Whether the body is Markdown and must be converted after templating.
    is_post : bool
        Whether the file is a dated post under ``_posts/``.
    variables : dict[str, Value]
        The ``page`` template variable: decoded front matter plus the derived
        ``id``, ``url``, ``tags`` and ``title``. ``content`` and ``excerpt``
        are merged in once pre-rendering has finished.
    raw_content : str
        Template source of the body.
    """

    source_path: Path
    local_path: str
    is_markdown: bool
    is_post: bool
    variables: FrontMatter
    raw_content: str

    @property
    def date(self) -> dt.datetime:
        """Return the post timestamp used for ordering."""
        return typ.cast("dt.datetime", self.variables["date"])

    @property
    def tags(self) -> list[str]:
        """Return the declared tags, or an empty list."""
        return typ.cast("list[str]", self.variables.get(TAGS_KEY) or [])


@dc.dataclass(frozen=True, slots=True)
class StaticFile:
    """A file without front matter, copied verbatim to ``local_path``."""

    source_path: Path
    local_path: str


@dc.dataclass(frozen=True, slots=True)
class PrerenderResult:
    """Output of the first rendering pass for one page."""

    content: str
    excerpt: str


@dc.dataclass(slots=True)
class SiteModel:
    """Aggregate view of the site exposed to templates as ``site``.

    Attributes
    ----------
    variables : dict[str, Any]
        Configuration keys plus ``time``, ``posts``, ``html_pages``, ``tags``,
        ``years`` and ``years_posts``.
    pages : list[PageRecord]
        Every content page and post, in load order.
    """

    variables: dict[str, typ.Any]
    pages: list[PageRecord]


__all__ = ["PageRecord", "PrerenderResult", "SiteModel", "StaticFile"]
