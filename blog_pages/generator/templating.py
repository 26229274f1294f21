"""Jinja environment and helper functions exposed to site templates.

Each build constructs its own :class:`TemplateRenderer` from a
:class:`TemplateSettings` value; filters, globals and the include loader live
on that instance rather than on any process-wide registry, so concurrent
renders and tests never share engine state.

Template helpers
----------------
- ``file_hash(path)``: SHA-1 hex digest of a site file (``""`` when missing).
- ``highlight_css()``: Pygments stylesheet for highlighted code blocks.
- ``value | encode``: escape ``<`` and ``>`` (and ``&`` with
  ``encode(ampersands=True)``).
- ``value | date(format)``: strftime-style formatting with fixed culture names.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import functools
import hashlib
import re
import traceback
import typing as typ

from jinja2 import Environment, FileSystemLoader, TemplateSyntaxError

from blog_pages.errors import RenderError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from jinja2 import Template

DEFAULT_DATE_FORMAT = "%Y-%m-%d"
_DATE_DIRECTIVE = re.compile(r"%(.)")
_CULTURE_NAMES: dict[str, dict[str, tuple[str, ...]]] = {
    "en-US": {
        "B": (
            "January",
            "February",
            "March",
            "April",
            "May",
            "June",
            "July",
            "August",
            "September",
            "October",
            "November",
            "December",
        ),
        "b": (
            "Jan",
            "Feb",
            "Mar",
            "Apr",
            "May",
            "Jun",
            "Jul",
            "Aug",
            "Sep",
            "Oct",
            "Nov",
            "Dec",
        ),
        "A": (
            "Monday",
            "Tuesday",
            "Wednesday",
            "Thursday",
            "Friday",
            "Saturday",
            "Sunday",
        ),
        "a": ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
    },
}


@dc.dataclass(frozen=True, slots=True)
class TemplateSettings:
    """Configuration for one build's template environment.

    Attributes
    ----------
    includes_dir : Path
        Directory searched by ``{% include %}``.
    site_root : Path
        Root used to resolve ``file_hash`` arguments.
    culture : str
        Culture whose month and day names the ``date`` filter uses.
    stylesheet : str
        CSS returned by ``highlight_css()``.
    """

    includes_dir: Path
    site_root: Path
    culture: str = "en-US"
    stylesheet: str = ""


def file_hash(site_root: Path, path: str) -> str:
    """Return the SHA-1 digest of ``path`` below ``site_root``, or ``""``.

    ``path`` is a site URL such as ``/css/site.css``; leading slashes are
    ignored. Paths resolving outside ``site_root`` hash to ``""``.
    """
    root = site_root.resolve()
    target = root.joinpath(*[part for part in path.strip().split("/") if part]).resolve()
    if not target.is_relative_to(root) or not target.is_file():
        return ""
    return hashlib.sha1(target.read_bytes()).hexdigest()  # noqa: S324


def encode(value: object, ampersands: bool = False) -> str:  # noqa: FBT001, FBT002
    """Escape angle brackets, leaving existing entities intact by default.

    Examples
    --------
    >>> encode("List<T>")
    'List&lt;T&gt;'
    >>> encode("a & <b>", ampersands=True)
    'a &amp; &lt;b&gt;'
    """
    text = str(value)
    if ampersands:
        text = text.replace("&", "&amp;")
    return text.replace("<", "&lt;").replace(">", "&gt;")


def format_date(
    value: dt.date, fmt: str = DEFAULT_DATE_FORMAT, *, culture: str = "en-US"
) -> str:
    """Format ``value`` with strftime directives and fixed culture names.

    ``%B``, ``%b``, ``%A`` and ``%a`` are resolved from the culture table so
    the output does not depend on the process locale.

    Examples
    --------
    >>> format_date(dt.datetime(2023, 1, 2, tzinfo=dt.UTC), "%A, %B %d %Y")
    'Monday, January 02 2023'
    """
    if not isinstance(value, dt.date):
        msg = f"date filter expects a datetime, got {type(value).__name__}"
        raise TypeError(msg)
    names = _CULTURE_NAMES[culture]

    def _repl(match: re.Match[str]) -> str:
        directive = match.group(1)
        if directive == "B":
            return names["B"][value.month - 1]
        if directive == "b":
            return names["b"][value.month - 1]
        if directive == "A":
            return names["A"][value.weekday()]
        if directive == "a":
            return names["a"][value.weekday()]
        return match.group(0)

    return value.strftime(_DATE_DIRECTIVE.sub(_repl, fmt))


class TemplateRenderer:
    """Compile and render templates against an explicit variable scope."""

    def __init__(self, settings: TemplateSettings) -> None:
        self.settings = settings
        self.env = Environment(
            loader=FileSystemLoader(str(settings.includes_dir)),
            autoescape=False,  # noqa: S701
            keep_trailing_newline=True,
        )
        self.env.filters["encode"] = encode
        self.env.filters["date"] = functools.partial(format_date, culture=settings.culture)
        self.env.globals["file_hash"] = functools.partial(file_hash, settings.site_root)
        self.env.globals["highlight_css"] = lambda: settings.stylesheet

    def compile(self, source: str, *, name: str) -> Template:
        """Parse ``source`` into a template.

        Raises
        ------
        RenderError
            If the template has a syntax error; the message carries the
            engine's line number and diagnostic.
        """
        try:
            return self.env.from_string(source)
        except TemplateSyntaxError as exc:
            raise RenderError(name, exc.message or str(exc), lineno=exc.lineno) from exc

    def render(
        self,
        template: Template | str,
        scope: cabc.Mapping[str, typ.Any],
        *,
        name: str,
    ) -> str:
        """Render ``template`` with ``scope`` as its variables.

        Parameters
        ----------
        template : Template or str
            Compiled template, or source text compiled on the fly.
        scope : Mapping[str, Any]
            Template variables, typically ``site``, ``page`` and ``content``.
        name : str
            Label used in error messages.

        Raises
        ------
        RenderError
            If compilation fails, an include has a syntax error, or expansion
            raises; the original exception is chained as the cause.
        """
        if isinstance(template, str):
            template = self.compile(template, name=name)
        try:
            return template.render(scope)
        except TemplateSyntaxError as exc:
            include = f"{name} -> {exc.name}" if exc.name else name
            raise RenderError(include, exc.message or str(exc), lineno=exc.lineno) from exc
        except Exception as exc:
            message = f"{type(exc).__name__}: {exc}"
            raise RenderError(name, message, lineno=_template_lineno(exc)) from exc


def _template_lineno(exc: BaseException) -> int | None:
    """Return the innermost template line recorded in ``exc``'s traceback."""
    lineno = None
    for frame in traceback.extract_tb(exc.__traceback__):
        if frame.filename == "<template>" or frame.filename.endswith(".html"):
            lineno = frame.lineno
    return lineno


__all__ = [
    "DEFAULT_DATE_FORMAT",
    "TemplateRenderer",
    "TemplateSettings",
    "encode",
    "file_hash",
    "format_date",
]
