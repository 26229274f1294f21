"""Behaviour tests for building a complete blog site.

The scenarios in ``build_site.feature`` write a small site into a temporary
folder, run :class:`~blog_pages.generator.SiteBuilder` over it and inspect the
output tree: the post's output path, its rendered body, the excerpt exposed to
other pages and the ordering of posts that share a date.

Usage
-----
Run ``pytest tests/bdd/test_build_site.py -v``. The scenarios only touch the
``tmp_path`` fixture and share values through ``scenario_state``.
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from blog_pages.generator import SiteBuilder

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "build_site.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _write(root: Path, files: dict[str, str]) -> None:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def _as_path(value: object) -> Path:
    assert isinstance(value, Path)
    return value


@given("a site with a base layout and one post")
def given_single_post_site(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Write a site with one post and a page echoing the post's excerpt."""
    site_root = tmp_path / "site"
    _write(
        site_root,
        {
            "_config.yml": 'excerpt_separator: "<!--more-->"\n',
            "_layouts/base.html": "{{ content }}",
            "_posts/1-hello.md": (
                "---\ntitle: Hello\ndate: 2023-01-01T00:00:00Z\n---\nHello<!--more-->World\n"
            ),
            "excerpt.html": "---\n---\n{{ site.posts[0].excerpt }}",
        },
    )
    scenario_state["site_root"] = site_root


@given("a site with two posts on the same date and an index")
def given_tied_posts_site(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Write two posts sharing a date and an index listing their URLs."""
    site_root = tmp_path / "site"
    post = "---\ntitle: {title}\ndate: 2023-05-01T00:00:00Z\n---\n{title}\n"
    _write(
        site_root,
        {
            "_config.yml": 'excerpt_separator: "<!--more-->"\n',
            "_layouts/base.html": "{{ content }}",
            "_posts/1-alpha.md": post.format(title="Alpha"),
            "_posts/2-beta.md": post.format(title="Beta"),
            "index.html": "---\n---\n{% for post in site.posts %}{{ post.url }};{% endfor %}",
        },
    )
    scenario_state["site_root"] = site_root


@when("I build the site")
def when_build(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Build the scenario's site into a temporary output folder."""
    output_root = tmp_path / "public"
    site_root = _as_path(scenario_state["site_root"])
    SiteBuilder(site_root, output_root, now=dt.datetime(2024, 1, 1, tzinfo=dt.UTC)).run()
    scenario_state["output_root"] = output_root


@then("the post is written without its id prefix")
def then_post_path(scenario_state: dict[str, object]) -> None:
    """The ``1-`` prefix is dropped from the post's output name."""
    output_root = _as_path(scenario_state["output_root"])
    assert (output_root / "hello.html").is_file()
    assert not (output_root / "1-hello.html").exists()


@then("the post body contains both halves of the separator")
def then_post_body(scenario_state: dict[str, object]) -> None:
    """The full post keeps the text on both sides of the separator."""
    output_root = _as_path(scenario_state["output_root"])
    html = (output_root / "hello.html").read_text(encoding="utf-8")
    paragraph = BeautifulSoup(html, "html.parser").find("p")
    assert paragraph is not None
    text = paragraph.get_text()
    assert "Hello" in text
    assert "World" in text


@then("the post excerpt stops at the separator")
def then_post_excerpt(scenario_state: dict[str, object]) -> None:
    """The excerpt is everything before the first separator."""
    output_root = _as_path(scenario_state["output_root"])
    assert (output_root / "excerpt.html").read_text(encoding="utf-8") == "<p>Hello"


@then(parsers.parse('the index lists "{expected}"'))
def then_index_lists(scenario_state: dict[str, object], expected: str) -> None:
    """Posts appear newest first, ties broken by local path descending."""
    output_root = _as_path(scenario_state["output_root"])
    assert (output_root / "index.html").read_text(encoding="utf-8") == expected
