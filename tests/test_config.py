"""Tests for loading ``_config.yml``."""

from __future__ import annotations

import typing as typ

import pytest

from blog_pages.config import SiteConfigError, load_site_config
from blog_pages.errors import DecodeError, LoadError

if typ.TYPE_CHECKING:
    from pathlib import Path


def _config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "_config.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_config_keeps_every_key(tmp_path: Path) -> None:
    """Declared keys stay available to templates; typed settings are promoted."""
    config = load_site_config(
        _config(
            tmp_path,
            'title: Blog\nexcerpt_separator: "<!--more-->"\nnav: [home, about]\n',
        )
    )
    assert config.excerpt_separator == "<!--more-->"
    assert config.variables["title"] == "Blog"
    assert config.variables["nav"] == ["home", "about"]
    assert config.culture == "en-US"
    assert config.pygments_style == "monokai"


def test_typed_settings_override_defaults(tmp_path: Path) -> None:
    """``pygments_style`` and ``culture`` are read when present."""
    config = load_site_config(
        _config(tmp_path, "excerpt_separator: '---8<---'\npygments_style: friendly\nculture: en-US\n")
    )
    assert config.pygments_style == "friendly"
    assert config.culture == "en-US"


@pytest.mark.parametrize(
    "text",
    ["title: Blog\n", "excerpt_separator: ''\n", ""],
)
def test_excerpt_separator_is_required(tmp_path: Path, text: str) -> None:
    """A missing or empty separator is a configuration error."""
    with pytest.raises(SiteConfigError, match="excerpt_separator"):
        load_site_config(_config(tmp_path, text))


def test_unsupported_culture_is_rejected(tmp_path: Path) -> None:
    """Only cultures with a name table are accepted."""
    with pytest.raises(SiteConfigError, match="culture"):
        load_site_config(_config(tmp_path, "excerpt_separator: x\nculture: fr-FR\n"))


def test_config_errors_are_decode_errors(tmp_path: Path) -> None:
    """Malformed YAML uses the same rules as page front matter."""
    with pytest.raises(DecodeError, match="_config.yml"):
        load_site_config(_config(tmp_path, "excerpt_separator: [\n"))


def test_missing_config_is_load_error(tmp_path: Path) -> None:
    """A site without ``_config.yml`` cannot be loaded."""
    with pytest.raises(LoadError, match="not found"):
        load_site_config(tmp_path / "_config.yml")
