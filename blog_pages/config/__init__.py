"""Load and validate the site configuration file.

This subpackage parses ``_config.yml`` with the same decoder used for page
front matter and exposes a typed :class:`SiteConfig`. The primary entry point
is :func:`load_site_config`, which ensures an ``excerpt_separator`` is present
and returns the declared keys ready to be merged into the ``site`` template
variable.

Examples
--------
>>> from pathlib import Path
>>> from blog_pages.config import load_site_config
>>> site = load_site_config(Path("site/_config.yml"))  # doctest: +SKIP
>>> site.variables["title"]  # doctest: +SKIP
'My blog'
"""

from .loader import load_site_config
from .models import SiteConfig, SiteConfigError

__all__ = ["SiteConfig", "SiteConfigError", "load_site_config"]
