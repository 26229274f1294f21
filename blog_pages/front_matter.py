"""Decode YAML front matter into the closed value model used by templates.

Front matter is parsed with ruamel.yaml (YAML 1.2, safe loader) and then
validated so that every value is one of :data:`Value`'s members. Keys named
``date`` are normalized into timezone-aware UTC datetimes at every nesting
level; implicit YAML timestamps are disabled so the strict
``yyyy-MM-ddTHH:mm:ssZ`` pattern is the only accepted spelling.

Examples
--------
>>> from blog_pages.front_matter import decode_front_matter
>>> decode_front_matter("title: Hello\\ndate: 2023-01-02T03:04:05Z\\n")["date"].year
2023
>>> decode_front_matter("")
{}
"""

from __future__ import annotations

import datetime as dt
import re
import typing as typ

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.constructor import SafeConstructor

from .errors import DecodeError

DATE_KEY = "date"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", re.ASCII)

Value: typ.TypeAlias = (
    "str | int | float | bool | None | dt.datetime | list[Value] | dict[str, Value]"
)
FrontMatter: typ.TypeAlias = "dict[str, Value]"


class _FrontMatterConstructor(SafeConstructor):
    """Safe constructor that keeps YAML timestamps as plain strings."""


_FrontMatterConstructor.add_constructor(
    "tag:yaml.org,2002:timestamp", SafeConstructor.construct_yaml_str
)


def _yaml() -> YAML:
    loader = YAML(typ="safe", pure=True)
    loader.version = (1, 2)
    loader.Constructor = _FrontMatterConstructor
    return loader


def decode_front_matter(text: str | None, *, source: str | None = None) -> FrontMatter:
    """Decode a raw front-matter block into a validated mapping.

    Parameters
    ----------
    text : str or None
        YAML text without the ``---`` separators. ``None`` or blank text
        decodes to an empty mapping.
    source : str, optional
        Label for error messages, typically the file's site-relative path.

    Returns
    -------
    dict[str, Value]
        Decoded mapping with every ``date`` key converted to a UTC datetime.

    Raises
    ------
    DecodeError
        If the YAML is malformed, the top level is not a mapping, a key is not
        a string, a value falls outside the value model, or a ``date`` does
        not match ``yyyy-MM-ddTHH:mm:ssZ``.
    """
    label = source or "<front matter>"
    if text is None or not text.strip():
        return {}
    try:
        loaded = _yaml().load(text)
    except YAMLError as exc:
        msg = f"{label}: invalid front matter: {exc}"
        raise DecodeError(msg) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = f"{label}: front matter must be a mapping, got {type(loaded).__name__}."
        raise DecodeError(msg)
    return _normalize_mapping(loaded, label)


def parse_timestamp(value: object, *, label: str = DATE_KEY) -> dt.datetime:
    """Parse ``value`` as a ``yyyy-MM-ddTHH:mm:ssZ`` UTC timestamp."""
    if not isinstance(value, str):
        msg = f"{label}: expected a timestamp string, got {type(value).__name__}."
        raise DecodeError(msg)
    msg = f"{label}: '{value}' does not match yyyy-MM-ddTHH:mm:ssZ."
    if DATE_PATTERN.fullmatch(value) is None:
        raise DecodeError(msg)
    try:
        parsed = dt.datetime.strptime(value, DATE_FORMAT)
    except ValueError as exc:
        raise DecodeError(msg) from exc
    return parsed.replace(tzinfo=dt.UTC)


def _normalize_mapping(raw: dict[typ.Any, typ.Any], label: str) -> FrontMatter:
    result: FrontMatter = {}
    for key, value in raw.items():
        if not isinstance(key, str):
            msg = f"{label}: front matter keys must be strings, got {key!r}."
            raise DecodeError(msg)
        if key == DATE_KEY and not isinstance(value, dict):
            result[key] = parse_timestamp(value, label=f"{label}: {key}")
        else:
            result[key] = _normalize_value(value, f"{label}: {key}")
    return result


def _normalize_value(value: object, label: str) -> Value:
    match value:
        case dict():
            return _normalize_mapping(value, label)
        case list():
            return [_normalize_value(item, label) for item in value]
        case None | bool() | int() | float() | str() | dt.datetime():
            return value
        case _:
            msg = f"{label}: unsupported value of type {type(value).__name__}."
            raise DecodeError(msg)


def get_str(
    front_matter: typ.Mapping[str, Value], key: str, *, source: str = "<front matter>"
) -> str | None:
    """Return ``front_matter[key]`` as a string, or ``None`` when absent."""
    value = front_matter.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"{source}: '{key}' must be a string, got {type(value).__name__}."
        raise DecodeError(msg)
    return value


def get_str_list(
    front_matter: typ.Mapping[str, Value], key: str, *, source: str = "<front matter>"
) -> list[str] | None:
    """Return ``front_matter[key]`` as a list of strings, or ``None`` when absent."""
    value = front_matter.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        msg = f"{source}: '{key}' must be a list of strings."
        raise DecodeError(msg)
    return list(typ.cast("list[str]", value))


def get_timestamp(
    front_matter: typ.Mapping[str, Value], key: str, *, source: str = "<front matter>"
) -> dt.datetime | None:
    """Return ``front_matter[key]`` as a datetime, or ``None`` when absent."""
    value = front_matter.get(key)
    if value is None:
        return None
    if not isinstance(value, dt.datetime):
        msg = f"{source}: '{key}' must be a timestamp, got {type(value).__name__}."
        raise DecodeError(msg)
    return value


__all__ = [
    "DATE_FORMAT",
    "DATE_KEY",
    "DATE_PATTERN",
    "FrontMatter",
    "Value",
    "decode_front_matter",
    "get_str",
    "get_str_list",
    "get_timestamp",
    "parse_timestamp",
]
