"""Load ``_config.yml`` into a typed :class:`SiteConfig`."""

from __future__ import annotations

import typing as typ

from blog_pages._constants import EXCERPT_SEPARATOR_KEY
from blog_pages.errors import LoadError
from blog_pages.front_matter import decode_front_matter, get_str

from .models import DEFAULT_CULTURE, DEFAULT_PYGMENTS_STYLE, SiteConfig, SiteConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path

SUPPORTED_CULTURES = frozenset({"en-US"})


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML document describing site-wide variables.

    Parameters
    ----------
    path : Path
        Filesystem path to the configuration file (``<site>/_config.yml``).

    Returns
    -------
    SiteConfig
        Parsed configuration. Every declared key is kept in
        :attr:`SiteConfig.variables`, including the ones promoted to typed
        attributes.

    Raises
    ------
    LoadError
        If the configuration file does not exist or cannot be read.
    DecodeError
        If the YAML content is malformed (same rules as page front matter).
    SiteConfigError
        If ``excerpt_separator`` is missing or empty, or a typed setting has
        an unsupported value.

    Examples
    --------
    >>> from pathlib import Path
    >>> from blog_pages.config import load_site_config
    >>> config = load_site_config(Path("site/_config.yml"))  # doctest: +SKIP
    >>> config.excerpt_separator  # doctest: +SKIP
    '<!--more-->'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise LoadError(msg)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Unable to read configuration file '{path}': {exc}"
        raise LoadError(msg) from exc

    variables = decode_front_matter(text, source=path.name)
    excerpt_separator = get_str(variables, EXCERPT_SEPARATOR_KEY, source=path.name)
    if not excerpt_separator:
        msg = f"{path.name}: '{EXCERPT_SEPARATOR_KEY}' must be a non-empty string."
        raise SiteConfigError(msg)

    culture = get_str(variables, "culture", source=path.name) or DEFAULT_CULTURE
    if culture not in SUPPORTED_CULTURES:
        msg = f"{path.name}: unsupported culture '{culture}'."
        raise SiteConfigError(msg)
    pygments_style = (
        get_str(variables, "pygments_style", source=path.name) or DEFAULT_PYGMENTS_STYLE
    )

    return SiteConfig(
        variables=variables,
        excerpt_separator=excerpt_separator,
        culture=culture,
        pygments_style=pygments_style,
    )


__all__ = ["SUPPORTED_CULTURES", "load_site_config"]
