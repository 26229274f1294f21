"""Walk a site tree and split source files into front matter and body.

A file whose first line is exactly ``---`` is a *content file*: the lines up to
the next ``---`` line form its raw front matter and the remainder its body.
Every other file is *static* and is later copied byte-for-byte, so static files
are never decoded as text.

Examples
--------
>>> from pathlib import Path
>>> from blog_pages.loader import SiteTree, load_content_file
>>> tree = SiteTree(Path("site"))  # doctest: +SKIP
>>> [load_content_file(path).is_static for path in tree]  # doctest: +SKIP
[False, True]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
from pathlib import Path

from ._constants import BASE_LAYOUT, FRONT_MATTER_SEPARATOR
from .errors import LoadError
from .front_matter import FrontMatter, decode_front_matter

_BOM = b"\xef\xbb\xbf"


def is_visible(name: str) -> bool:
    """Return ``True`` unless ``name`` is hidden or underscore-prefixed."""
    return not name.startswith((".", "_"))


class SiteTree(cabc.Iterable[Path]):
    """Lazy, restartable traversal of the visible files below ``root``.

    Each call to :meth:`__iter__` starts a fresh depth-first walk. Entries are
    visited in sorted order and :func:`is_visible` is applied to files and
    directories alike at every depth.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def __iter__(self) -> cabc.Iterator[Path]:
        if not self.root.is_dir():
            return iter(())
        return self._walk(self.root)

    def _walk(self, directory: Path) -> cabc.Iterator[Path]:
        entries = sorted(entry for entry in directory.iterdir() if is_visible(entry.name))
        for entry in entries:
            if entry.is_file():
                yield entry
        for entry in entries:
            if entry.is_dir():
                yield from self._walk(entry)


@dc.dataclass(frozen=True, slots=True)
class ContentFile:
    """A source file split into optional front matter and body."""

    path: Path
    front_matter_raw: str | None = None
    body: str | None = None

    @property
    def is_static(self) -> bool:
        """Return ``True`` when the file carries no front-matter block."""
        return self.front_matter_raw is None


def load_content_file(path: Path) -> ContentFile:
    """Read ``path`` and split it into front matter and body.

    Parameters
    ----------
    path : Path
        File to load.

    Returns
    -------
    ContentFile
        Content file with front matter and body, or a static record when the
        first line is not a ``---`` separator.

    Raises
    ------
    LoadError
        If the file cannot be read, is not valid UTF-8 despite opening with a
        separator, or ends before the closing separator.
    """
    try:
        raw = path.read_bytes()
    except OSError as exc:
        msg = f"Unable to read '{path}': {exc}"
        raise LoadError(msg) from exc
    raw = raw.removeprefix(_BOM)
    first_line = raw.split(b"\n", 1)[0].rstrip(b"\r")
    if first_line != FRONT_MATTER_SEPARATOR.encode():
        return ContentFile(path)

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"'{path}' is not valid UTF-8: {exc}"
        raise LoadError(msg) from exc

    lines = text.splitlines(keepends=True)
    for index, line in enumerate(lines[1:], start=1):
        if line.rstrip("\r\n") == FRONT_MATTER_SEPARATOR:
            front_matter = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            return ContentFile(path, front_matter, body)
    msg = f"'{path}' has no closing '{FRONT_MATTER_SEPARATOR}' front matter separator."
    raise LoadError(msg)


@dc.dataclass(frozen=True, slots=True)
class LayoutRecord:
    """A named layout template and its decoded front matter."""

    name: str
    path: Path
    front_matter: FrontMatter
    body: str


@dc.dataclass(slots=True)
class LayoutSet:
    """Layouts keyed by file stem, with the distinguished base layout."""

    base: LayoutRecord
    layouts: dict[str, LayoutRecord]

    def __len__(self) -> int:
        return len(self.layouts)

    def __contains__(self, name: object) -> bool:
        return name in self.layouts

    def get(self, name: str) -> LayoutRecord | None:
        """Return the layout registered under ``name``, if any."""
        return self.layouts.get(name)

    def is_base(self, layout: LayoutRecord) -> bool:
        """Return ``True`` when ``layout`` is the base layout instance."""
        return layout is self.base


def load_layouts(layouts_dir: Path) -> LayoutSet:
    """Load every layout under ``layouts_dir``.

    The base layout (``base.html``) is mandatory and always registered with
    empty front matter; any front matter it declares is dropped so the chain
    cannot continue past it. Other files are registered only when they carry a
    front-matter block.

    Raises
    ------
    LoadError
        If the base layout is missing or any layout fails to load.
    """
    base_path = layouts_dir / BASE_LAYOUT
    if not base_path.is_file():
        msg = f"Base layout '{base_path}' not found."
        raise LoadError(msg)
    base_file = load_content_file(base_path)
    if base_file.is_static:
        try:
            base_body = base_path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Unable to read base layout '{base_path}': {exc}"
            raise LoadError(msg) from exc
    else:
        base_body = base_file.body or ""
    base = LayoutRecord(name=base_path.stem, path=base_path, front_matter={}, body=base_body)

    layouts: dict[str, LayoutRecord] = {base.name: base}
    for path in sorted(layouts_dir.iterdir()):
        if path == base_path or not path.is_file():
            continue
        layout_file = load_content_file(path)
        if layout_file.is_static:
            continue
        layouts[path.stem] = LayoutRecord(
            name=path.stem,
            path=path,
            front_matter=decode_front_matter(
                layout_file.front_matter_raw, source=f"{layouts_dir.name}/{path.name}"
            ),
            body=layout_file.body or "",
        )
    return LayoutSet(base=base, layouts=layouts)


__all__ = [
    "ContentFile",
    "LayoutRecord",
    "LayoutSet",
    "SiteTree",
    "is_visible",
    "load_content_file",
    "load_layouts",
]
