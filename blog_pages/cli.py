"""Cyclopts CLI entrypoint for building a static blog.

The ``blog-pages`` console script defined here takes exactly two positional
arguments, the site source root and the output root, runs the full build and
prints how long each phase took. Any fatal load, decode or render error is
reported on stderr and the process exits with status 1.

Examples
--------
Build the site in ``site/`` into ``public/``:

>>> from blog_pages.cli import app
>>> app(["site", "public"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
from pathlib import Path

from cyclopts import App

from .errors import BuildError
from .generator import BuildReport, SiteBuilder

app = App(name="blog-pages", help="Render a static blog from a source tree.")


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _print_report(report: BuildReport) -> None:
    for phase, elapsed in report.phases:
        print(f"{phase + ':':<13}{elapsed:.3f}s")
    print(
        f"wrote {len(report.pages)} pages and {len(report.statics)} static files "
        f"to {_format_path(report.output_root)}"
    )


@app.default
def build(site_root: Path, output_root: Path, /) -> None:
    """Build the site found in ``site_root`` into ``output_root``.

    Parameters
    ----------
    site_root : Path
        Source tree holding ``_config.yml``, ``_layouts``, ``_includes``,
        ``_posts`` and the pages.
    output_root : Path
        Directory that receives the rendered site.

    Returns
    -------
    None
        Writes the site and prints per-phase timings.

    Raises
    ------
    SystemExit
        With status 1 when the build fails; the error is printed to stderr.
    """
    try:
        report = SiteBuilder(site_root, output_root).run()
    except BuildError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    _print_report(report)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``blog-pages`` command.

    Returns
    -------
    None
        This function executes for its side effects of parsing CLI arguments
        and running the build.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
