"""Static blog builder: front matter, layouts, Jinja templates and Markdown.

This package exposes the CLI entry point used by the ``blog-pages`` console
script together with the builder it drives.

Exports
-------
- ``app``: Cyclopts application entry.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``SiteBuilder``: Programmatic access to the full build.

Examples
--------
>>> from blog_pages import main
>>> main()  # doctest: +SKIP
>>> from blog_pages import SiteBuilder
>>> SiteBuilder.__name__
'SiteBuilder'
"""

from __future__ import annotations

from .cli import app, main
from .generator import SiteBuilder

__all__ = ["SiteBuilder", "app", "main"]
