"""Utilities for deriving, rendering, and writing site pages."""

from .layouts import LayoutResolver
from .models import PageRecord, PrerenderResult, SiteModel, StaticFile
from .pipeline import BuildReport, SiteBuilder, prerender_page
from .renderer import HtmlContentRenderer
from .site_model import build_site_model, derive_page, derive_url
from .templating import TemplateRenderer, TemplateSettings
from .typography import TypographyExtension, curl_text
from .writer import OutputWriter

__all__ = [
    "BuildReport",
    "HtmlContentRenderer",
    "LayoutResolver",
    "OutputWriter",
    "PageRecord",
    "PrerenderResult",
    "SiteBuilder",
    "SiteModel",
    "StaticFile",
    "TemplateRenderer",
    "TemplateSettings",
    "TypographyExtension",
    "build_site_model",
    "curl_text",
    "derive_page",
    "derive_url",
    "prerender_page",
]
