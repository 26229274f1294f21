"""Derive per-page variables and the site-wide aggregates.

Per-page derivation (``id``, ``url``, ``tags``, ``title`` and the output path)
runs independently for each content file. :func:`build_site_model` then runs
once, single-threaded, after every page is derived; the lists it builds are
never re-sorted afterwards.

Examples
--------
>>> derive_url("blog/index.html")
'/blog'
>>> derive_url("index.html")
'/'
>>> derive_url("feed.xml")
'/feed.xml'
"""

from __future__ import annotations

import datetime as dt
import re
import typing as typ
from pathlib import PurePosixPath

from blog_pages._constants import (
    HTML_EXTENSION,
    ID_KEY,
    INDEX_FILE,
    MARKDOWN_EXTENSION,
    TAGS_KEY,
    TITLE_KEY,
    URL_KEY,
)
from blog_pages.errors import DecodeError
from blog_pages.front_matter import (
    DATE_KEY,
    decode_front_matter,
    get_str,
    get_str_list,
    get_timestamp,
)

from .models import PageRecord, SiteModel, StaticFile

if typ.TYPE_CHECKING:
    from pathlib import Path

    from blog_pages.config import SiteConfig
    from blog_pages.loader import ContentFile

    from .renderer import HtmlContentRenderer

POST_ID_PATTERN = re.compile(r"^(\d+)-(.+)$")


def post_id(filename: str) -> int | None:
    """Return the numeric sequence prefix of a post filename.

    Examples
    --------
    >>> post_id("12-hello.md")
    12
    >>> post_id("hello.md") is None
    True
    """
    match = POST_ID_PATTERN.match(filename)
    return int(match.group(1)) if match else None


def derive_url(local_path: str) -> str:
    """Return the site-absolute URL for an output path.

    ``.html`` is dropped, a trailing ``index`` segment is removed and the result
    always starts with ``/``.
    """
    path = PurePosixPath(local_path)
    if path.suffix == HTML_EXTENSION:
        path = path.with_suffix("")
    parts = list(path.parts)
    if parts and parts[-1] == INDEX_FILE:
        parts.pop()
    return "/" + "/".join(parts)


def post_local_path(path: Path) -> str:
    """Return the output path of a post: its filename without the ``<id>-`` prefix.

    Examples
    --------
    >>> from pathlib import Path
    >>> post_local_path(Path("_posts/12-hello.md"))
    'hello.md'
    """
    match = POST_ID_PATTERN.match(path.name)
    return match.group(2) if match else path.name


def derive_static(path: Path, *, site_root: Path) -> StaticFile:
    """Return the copy instruction for a file without front matter.

    Static files keep their path relative to ``site_root``, including those
    under ``_posts/``.
    """
    return StaticFile(source_path=path, local_path=path.relative_to(site_root).as_posix())


def derive_page(
    content_file: ContentFile,
    *,
    site_root: Path,
    posts_dir: Path,
    markdown: HtmlContentRenderer,
) -> PageRecord:
    """Decode a content file's front matter and derive its page variables.

    Parameters
    ----------
    content_file : ContentFile
        Loaded file carrying a front-matter block.
    site_root : Path
        Root of the site sources.
    posts_dir : Path
        The ``_posts`` folder; files directly inside it are posts.
    markdown : HtmlContentRenderer
        Renderer used to turn a declared ``title`` into inline HTML.

    Returns
    -------
    PageRecord
        Page with ``id``, ``url``, validated ``tags`` and rendered ``title``.

    Raises
    ------
    DecodeError
        If the front matter is malformed, ``tags``/``title`` have the wrong
        type, or a post has no ``date``.
    """
    path = content_file.path
    label = path.relative_to(site_root).as_posix()
    is_markdown = path.suffix == MARKDOWN_EXTENSION
    is_post = path.parent == posts_dir
    local_path = post_local_path(path) if is_post else path.relative_to(site_root).as_posix()
    if is_markdown:
        local_path = PurePosixPath(local_path).with_suffix(HTML_EXTENSION).as_posix()

    variables = decode_front_matter(content_file.front_matter_raw, source=label)
    variables[ID_KEY] = post_id(path.name) if is_post else None
    tags = get_str_list(variables, TAGS_KEY, source=label)
    if tags is not None:
        variables[TAGS_KEY] = tags
    title = get_str(variables, TITLE_KEY, source=label)
    if title is not None:
        variables[TITLE_KEY] = markdown.inline(title)
    if is_post and get_timestamp(variables, DATE_KEY, source=label) is None:
        msg = f"{label}: posts must declare a '{DATE_KEY}'."
        raise DecodeError(msg)
    variables[URL_KEY] = derive_url(local_path)

    return PageRecord(
        source_path=path,
        local_path=local_path,
        is_markdown=is_markdown,
        is_post=is_post,
        variables=variables,
        raw_content=content_file.body or "",
    )


def build_site_model(
    config: SiteConfig,
    pages: typ.Sequence[PageRecord],
    *,
    now: dt.datetime | None = None,
) -> SiteModel:
    """Compute the ``site`` variable from the configuration and every page.

    Parameters
    ----------
    config : SiteConfig
        Site configuration; its keys are copied into the result.
    pages : Sequence[PageRecord]
        Every derived page and post.
    now : datetime, optional
        Build timestamp exposed as ``site.time``; defaults to the current UTC
        time.

    Returns
    -------
    SiteModel
        Model whose ``variables`` hold ``posts`` (newest first, ties by local
        path descending), ``html_pages`` (by local path), ``tags`` (distinct,
        first-seen order), ``years`` (descending) and ``years_posts``.
    """
    posts = sorted(
        (page for page in pages if page.is_post),
        key=lambda page: (page.date, page.local_path),
        reverse=True,
    )
    html_pages = sorted(
        (
            page
            for page in pages
            if not page.is_post and page.local_path.endswith(HTML_EXTENSION)
        ),
        key=lambda page: page.local_path,
    )
    tags = list(dict.fromkeys(tag for post in posts for tag in post.tags))
    years = sorted({post.date.year for post in posts}, reverse=True)
    years_posts: dict[int, list[typ.Any]] = {}
    for post in posts:
        years_posts.setdefault(post.date.year, []).append(post.variables)

    variables: dict[str, typ.Any] = dict(config.variables)
    variables["time"] = now or dt.datetime.now(dt.UTC)
    variables["posts"] = [post.variables for post in posts]
    variables["html_pages"] = [page.variables for page in html_pages]
    variables[TAGS_KEY] = tags
    variables["years"] = years
    variables["years_posts"] = years_posts
    return SiteModel(variables=variables, pages=list(pages))


__all__ = [
    "POST_ID_PATTERN",
    "build_site_model",
    "derive_page",
    "derive_static",
    "derive_url",
    "post_id",
    "post_local_path",
]
