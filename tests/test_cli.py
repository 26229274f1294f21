"""Tests for the ``blog-pages`` command."""

from __future__ import annotations

import contextlib
import typing as typ

import pytest

from blog_pages import cli

if typ.TYPE_CHECKING:
    from pathlib import Path


def _site(root: Path) -> Path:
    (root / "_layouts").mkdir(parents=True)
    (root / "_config.yml").write_text('excerpt_separator: "<!--more-->"\n', encoding="utf-8")
    (root / "_layouts" / "base.html").write_text("{{ content }}", encoding="utf-8")
    (root / "index.html").write_text("---\nlayout: base\n---\nhome\n", encoding="utf-8")
    (root / "robots.txt").write_text("User-agent: *\n", encoding="utf-8")
    return root


def test_build_prints_phase_timings(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """A successful build reports each phase and a summary line."""
    output = tmp_path / "public"
    cli.build(_site(tmp_path / "site"), output)

    stdout = capsys.readouterr().out
    for phase in ("Loading:", "Parsing:", "Aggregating:", "Pre-render:", "Render:", "Writing:"):
        assert phase in stdout, f"missing {phase} in {stdout!r}"
    assert "wrote 1 pages and 1 static files" in stdout
    assert (output / "index.html").read_text(encoding="utf-8") == "home\n"
    assert (output / "robots.txt").is_file()


def test_build_failure_exits_non_zero(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Fatal errors are printed to stderr with exit status 1."""
    site = tmp_path / "site"
    site.mkdir()
    with pytest.raises(SystemExit) as excinfo:
        cli.build(site, tmp_path / "public")

    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith("error: ")


def test_app_accepts_two_positional_roots(tmp_path: Path) -> None:
    """The Cyclopts app dispatches both positional arguments to ``build``."""
    site = _site(tmp_path / "site")
    output = tmp_path / "public"
    with contextlib.suppress(SystemExit):
        cli.app([str(site), str(output)])
    assert (output / "index.html").is_file()
