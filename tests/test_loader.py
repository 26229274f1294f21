"""Unit tests for site traversal, front-matter splitting and layout loading."""

from __future__ import annotations

import typing as typ

import pytest

from blog_pages.errors import LoadError
from blog_pages.front_matter import decode_front_matter
from blog_pages.loader import SiteTree, is_visible, load_content_file, load_layouts

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, content: str | bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


def test_content_file_round_trip(tmp_path: Path) -> None:
    """A separator-delimited header should split into front matter and body."""
    path = _write(tmp_path / "page.md", "---\ntitle: X\n---\nbody")
    loaded = load_content_file(path)
    assert not loaded.is_static
    assert decode_front_matter(loaded.front_matter_raw) == {"title": "X"}
    assert loaded.body == "body"


def test_crlf_separators_are_recognised(tmp_path: Path) -> None:
    """Windows line endings around the separators should still split the file."""
    path = _write(tmp_path / "page.md", b"---\r\ntitle: X\r\n---\r\nline one\r\n")
    loaded = load_content_file(path)
    assert decode_front_matter(loaded.front_matter_raw) == {"title": "X"}
    assert loaded.body == "line one\r\n"


def test_empty_front_matter_block(tmp_path: Path) -> None:
    """Two consecutive separators should yield empty front matter, not a static file."""
    path = _write(tmp_path / "page.html", "---\n---\n<p>hi</p>\n")
    loaded = load_content_file(path)
    assert loaded.front_matter_raw == ""
    assert not loaded.is_static
    assert loaded.body == "<p>hi</p>\n"


@pytest.mark.parametrize(
    "content",
    [
        "",
        "plain text\n---\n",
        b"\x89PNG\r\n\x1a\n\x00\xff\xfe",
        "--- \ntitle: not front matter\n---\n",
    ],
)
def test_files_without_leading_separator_are_static(
    tmp_path: Path, content: str | bytes
) -> None:
    """Files not starting with a ``---`` line should be classified static."""
    loaded = load_content_file(_write(tmp_path / "asset.bin", content))
    assert loaded.is_static
    assert loaded.front_matter_raw is None
    assert loaded.body is None


def test_missing_closing_separator_is_fatal(tmp_path: Path) -> None:
    """Reaching end-of-file inside the front matter should raise LoadError."""
    path = _write(tmp_path / "broken.md", "---\ntitle: X\nbody without end\n")
    with pytest.raises(LoadError, match="no closing"):
        load_content_file(path)


def test_bare_separator_file_is_fatal(tmp_path: Path) -> None:
    """A file containing only an opening separator has no closing one."""
    with pytest.raises(LoadError):
        load_content_file(_write(tmp_path / "only.md", "---\n"))


@pytest.mark.parametrize(
    ("name", "expected"),
    [("index.html", True), (".git", False), ("_posts", False), ("a_b", True)],
)
def test_is_visible(name: str, *, expected: bool) -> None:
    """Hidden and underscore-prefixed names should be excluded."""
    assert is_visible(name) is expected


def test_site_tree_excludes_hidden_and_underscore_entries(tmp_path: Path) -> None:
    """The traversal should skip excluded names at every depth."""
    for relative in (
        "index.html",
        "css/site.css",
        "blog/2023/notes.md",
        "blog/_drafts/wip.md",
        "blog/.cache",
        ".git/config",
        "_layouts/base.html",
        "_config.yml",
        "img/.DS_Store",
    ):
        _write(tmp_path / relative, "x")
    tree = SiteTree(tmp_path)
    found = [path.relative_to(tmp_path).as_posix() for path in tree]
    assert found == ["index.html", "blog/2023/notes.md", "css/site.css"]


def test_site_tree_is_restartable(tmp_path: Path) -> None:
    """Iterating twice should yield the same files."""
    _write(tmp_path / "a.txt", "a")
    _write(tmp_path / "sub" / "b.txt", "b")
    tree = SiteTree(tmp_path)
    assert list(tree) == list(tree)
    assert len(list(tree)) == 2


def test_site_tree_of_missing_directory_is_empty(tmp_path: Path) -> None:
    """A missing root (for example no ``_posts`` folder) yields nothing."""
    assert list(SiteTree(tmp_path / "_posts")) == []


def test_load_layouts_registers_base_and_front_matter_layouts(tmp_path: Path) -> None:
    """Layouts with front matter are keyed by stem; base is always present."""
    layouts_dir = tmp_path / "_layouts"
    _write(layouts_dir / "base.html", "<html>{{ content }}</html>\n")
    _write(layouts_dir / "post.html", "---\nlayout: base\n---\n<article>{{ content }}</article>\n")
    _write(layouts_dir / "fragment.html", "<div>no front matter</div>\n")

    layouts = load_layouts(layouts_dir)

    assert sorted(layouts.layouts) == ["base", "post"]
    assert layouts.base.body == "<html>{{ content }}</html>\n"
    assert layouts.base.front_matter == {}
    assert layouts.get("post").front_matter == {"layout": "base"}
    assert layouts.is_base(layouts.get("base"))
    assert not layouts.is_base(layouts.get("post"))


def test_base_layout_front_matter_is_dropped(tmp_path: Path) -> None:
    """A base layout declaring ``layout`` must not continue the chain."""
    layouts_dir = tmp_path / "_layouts"
    _write(layouts_dir / "base.html", "---\nlayout: post\n---\n<html>{{ content }}</html>")
    layouts = load_layouts(layouts_dir)
    assert layouts.base.front_matter == {}
    assert layouts.base.body == "<html>{{ content }}</html>"


def test_missing_base_layout_is_fatal(tmp_path: Path) -> None:
    """Loading layouts without ``base.html`` should raise LoadError."""
    _write(tmp_path / "_layouts" / "post.html", "---\nlayout: base\n---\n")
    with pytest.raises(LoadError, match="Base layout"):
        load_layouts(tmp_path / "_layouts")
