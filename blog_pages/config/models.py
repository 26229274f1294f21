"""Typed dataclasses describing the site configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from blog_pages.errors import DecodeError

if typ.TYPE_CHECKING:
    from blog_pages.front_matter import FrontMatter

DEFAULT_CULTURE = "en-US"
DEFAULT_PYGMENTS_STYLE = "monokai"


class SiteConfigError(DecodeError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteConfig:
    """Settings read from ``_config.yml``.

    Attributes
    ----------
    variables : dict[str, Value]
        Every key declared in the configuration file; exposed to templates as
        ``site.*`` alongside the computed aggregates.
    excerpt_separator : str
        Marker splitting rendered content into its excerpt.
    culture : str
        Culture used by the ``date`` template filter.
    pygments_style : str
        Pygments style applied to highlighted code blocks.
    """

    variables: FrontMatter
    excerpt_separator: str
    culture: str = DEFAULT_CULTURE
    pygments_style: str = DEFAULT_PYGMENTS_STYLE


__all__ = [
    "DEFAULT_CULTURE",
    "DEFAULT_PYGMENTS_STYLE",
    "SiteConfig",
    "SiteConfigError",
]
