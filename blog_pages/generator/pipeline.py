"""High-level orchestration for a full site build.

:class:`SiteBuilder` runs the build as a strict sequence of phases separated by
barriers:

1. load ``_config.yml``, the layouts and every source file;
2. decode front matter and derive per-page variables;
3. compute the site aggregates (single-threaded);
4. pre-render every post body, then every other page body (template, then
   Markdown and typography);
5. wrap every page in its layout chain;
6. write pages and copy static files.

Phases 1, 2, 4, 5 and 6 fan their units out over a bounded thread pool. Each
unit only reads the shared site model and its own page; pre-render results are
returned to the coordinator, which merges ``content`` and ``excerpt`` into the
page variables after the phase barrier. When any unit of a phase fails, the
remaining units still run to completion and the build stops with a
:class:`~blog_pages.errors.BuildFailure` listing every error.

Example
-------
>>> from pathlib import Path
>>> from blog_pages.generator import SiteBuilder
>>> report = SiteBuilder(Path("site"), Path("public")).run()  # doctest: +SKIP
>>> report.pages[:1]  # doctest: +SKIP
[PosixPath('public/hello.html')]
"""

from __future__ import annotations

import contextlib
import dataclasses as dc
import functools
import time
import typing as typ
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from blog_pages._constants import (
    CONFIG_FILE,
    CONTENT_KEY,
    EXCERPT_KEY,
    INCLUDES_FOLDER,
    LAYOUTS_FOLDER,
    POSTS_FOLDER,
)
from blog_pages.config import SiteConfig, load_site_config
from blog_pages.errors import BuildError, BuildFailure
from blog_pages.loader import ContentFile, SiteTree, load_content_file, load_layouts

from .layouts import LayoutResolver
from .models import PageRecord, PrerenderResult, SiteModel, StaticFile
from .renderer import HtmlContentRenderer
from .site_model import build_site_model, derive_page, derive_static
from .templating import TemplateRenderer, TemplateSettings
from .writer import OutputWriter

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

T = typ.TypeVar("T")


@dc.dataclass(slots=True)
class BuildReport:
    """Summary of a completed build.

    Attributes
    ----------
    output_root : Path
        Directory the site was written to.
    phases : list[tuple[str, float]]
        Phase names with their elapsed wall-clock seconds, in execution order.
    pages : list[Path]
        Rendered pages written, ordered like the source pages.
    statics : list[Path]
        Static files copied, ordered like the source files.
    """

    output_root: Path
    phases: list[tuple[str, float]] = dc.field(default_factory=list)
    pages: list[Path] = dc.field(default_factory=list)
    statics: list[Path] = dc.field(default_factory=list)


def split_excerpt(content: str, separator: str) -> str:
    """Return the text before the first ``separator``, or all of ``content``.

    Examples
    --------
    >>> split_excerpt("<p>Hello<!--more-->World</p>", "<!--more-->")
    '<p>Hello'
    >>> split_excerpt("<p>Hello</p>", "<!--more-->")
    '<p>Hello</p>'
    """
    return content.split(separator, 1)[0]


def prerender_page(
    page: PageRecord,
    site: typ.Mapping[str, typ.Any],
    *,
    templates: TemplateRenderer,
    markdown: HtmlContentRenderer,
    excerpt_separator: str,
) -> PrerenderResult:
    """Render a page body against ``{site, page}``.

    Markdown pages are then converted to HTML with typography applied. The page
    itself is not modified; the caller merges the returned content.
    """
    content = templates.render(
        page.raw_content,
        {"site": site, "page": page.variables},
        name=page.source_path.name,
    )
    if page.is_markdown:
        content = markdown.markdown(content)
    return PrerenderResult(content=content, excerpt=split_excerpt(content, excerpt_separator))


class SiteBuilder:
    """Build a static site from ``site_root`` into ``output_root``."""

    def __init__(
        self,
        site_root: Path,
        output_root: Path,
        *,
        max_workers: int | None = None,
        now: dt.datetime | None = None,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        site_root : Path
            Directory holding ``_config.yml``, ``_layouts``, ``_includes``,
            ``_posts`` and the page sources.
        output_root : Path
            Directory receiving the rendered site.
        max_workers : int, optional
            Upper bound on concurrent workers; ``None`` uses the executor
            default.
        now : datetime, optional
            Timestamp exposed as ``site.time``; defaults to the build start.
        """
        self.site_root = site_root.resolve()
        self.output_root = output_root
        self.posts_dir = self.site_root / POSTS_FOLDER
        self.max_workers = max_workers
        self.now = now
        self.writer = OutputWriter(output_root)

    def run(self) -> BuildReport:
        """Execute every phase and return the build report.

        Raises
        ------
        BuildError
            If configuration, layouts or a single-threaded step fail.
        BuildFailure
            If any unit of a parallel phase fails.
        """
        report = BuildReport(output_root=self.output_root)

        with self._phase("Loading", report):
            config = load_site_config(self.site_root / CONFIG_FILE)
            layouts = load_layouts(self.site_root / LAYOUTS_FOLDER)
            sources = [*SiteTree(self.site_root), *SiteTree(self.posts_dir)]
            files = self._run(
                "Loading", [functools.partial(load_content_file, path) for path in sources]
            )

        markdown = HtmlContentRenderer(config.pygments_style)
        with self._phase("Parsing", report):
            pages, statics = self._parse(files, markdown)

        with self._phase("Aggregating", report):
            site = build_site_model(config, pages, now=self.now)

        templates = TemplateRenderer(
            TemplateSettings(
                includes_dir=self.site_root / INCLUDES_FOLDER,
                site_root=self.site_root,
                culture=config.culture,
                stylesheet=markdown.stylesheet,
            )
        )
        with self._phase("Pre-render", report):
            self._prerender(site, config, templates, markdown)

        with self._phase("Render", report):
            resolver = LayoutResolver(layouts, templates)
            rendered = self._run(
                "Render",
                [
                    functools.partial(resolver.resolve, page, site.variables)
                    for page in site.pages
                ],
            )

        with self._phase("Writing", report):
            page_jobs = [
                functools.partial(self.writer.write_page, page.local_path, html)
                for page, html in zip(site.pages, rendered, strict=True)
            ]
            static_jobs = [
                functools.partial(self.writer.copy_static, item.source_path, item.local_path)
                for item in statics
            ]
            written = self._run("Writing", [*page_jobs, *static_jobs])
            report.pages = written[: len(page_jobs)]
            report.statics = written[len(page_jobs) :]

        return report

    def _parse(
        self, files: list[ContentFile], markdown: HtmlContentRenderer
    ) -> tuple[list[PageRecord], list[StaticFile]]:
        statics = [
            derive_static(item.path, site_root=self.site_root)
            for item in files
            if item.is_static
        ]
        pages = self._run(
            "Parsing",
            [
                functools.partial(
                    derive_page,
                    item,
                    site_root=self.site_root,
                    posts_dir=self.posts_dir,
                    markdown=markdown,
                )
                for item in files
                if not item.is_static
            ],
        )
        return pages, statics

    def _prerender(
        self,
        site: SiteModel,
        config: SiteConfig,
        templates: TemplateRenderer,
        markdown: HtmlContentRenderer,
    ) -> None:
        """Pre-render posts, merge them, then pre-render the remaining pages.

        Pages therefore see every post's ``content`` and ``excerpt`` (for
        listings), while posts never see another page's rendered body.
        """
        posts = [page for page in site.pages if page.is_post]
        others = [page for page in site.pages if not page.is_post]
        for batch in (posts, others):
            results = self._run(
                "Pre-render",
                [
                    functools.partial(
                        prerender_page,
                        page,
                        site.variables,
                        templates=templates,
                        markdown=markdown,
                        excerpt_separator=config.excerpt_separator,
                    )
                    for page in batch
                ],
            )
            for page, result in zip(batch, results, strict=True):
                page.variables[CONTENT_KEY] = result.content
                page.variables[EXCERPT_KEY] = result.excerpt

    def _run(self, phase: str, jobs: cabc.Sequence[cabc.Callable[[], T]]) -> list[T]:
        """Run ``jobs`` on the worker pool and return results in job order."""
        results: list[T | None] = [None] * len(jobs)
        failures: list[tuple[int, BuildError]] = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {executor.submit(job): index for index, job in enumerate(jobs)}
            for future in as_completed(futures):
                index = futures[future]
                try:
                    results[index] = future.result()
                except BuildError as exc:
                    failures.append((index, exc))
        if failures:
            failures.sort(key=lambda item: item[0])
            raise BuildFailure(phase, [error for _, error in failures])
        return typ.cast("list[T]", results)

    @contextlib.contextmanager
    def _phase(self, name: str, report: BuildReport) -> cabc.Iterator[None]:
        started = time.perf_counter()
        yield
        report.phases.append((name, time.perf_counter() - started))


__all__ = ["BuildReport", "SiteBuilder", "prerender_page", "split_excerpt"]
