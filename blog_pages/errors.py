"""Exception hierarchy for fatal site build failures.

Every error raised by the pipeline derives from :class:`BuildError`, so the CLI
can report any failure with a single ``except`` clause and exit non-zero.

Examples
--------
>>> from blog_pages.errors import BuildError, LoadError
>>> issubclass(LoadError, BuildError)
True
"""

from __future__ import annotations

import typing as typ


class BuildError(RuntimeError):
    """Raised when the site build cannot complete."""


class LoadError(BuildError):
    """Raised when a source file cannot be read or split into front matter."""


class DecodeError(BuildError):
    """Raised when front matter is malformed or holds an unexpected value."""


class RenderError(BuildError):
    """Raised when a template fails to parse or to render.

    Attributes
    ----------
    template : str
        Name of the offending template (source path or layout name).
    lineno : int or None
        Line reported by the template engine, when known.
    """

    def __init__(self, template: str, message: str, *, lineno: int | None = None) -> None:
        self.template = template
        self.lineno = lineno
        location = f"{template}:{lineno}" if lineno else template
        super().__init__(f"{location}: {message}")


class BuildFailure(BuildError):
    """Raised when one or more units of a parallel build phase failed."""

    def __init__(self, phase: str, errors: typ.Sequence[BuildError]) -> None:
        self.phase = phase
        self.errors = list(errors)
        details = "\n".join(f"  - {error}" for error in self.errors)
        noun = "error" if len(self.errors) == 1 else "errors"
        super().__init__(f"{phase} failed with {len(self.errors)} {noun}:\n{details}")


__all__ = [
    "BuildError",
    "BuildFailure",
    "DecodeError",
    "LoadError",
    "RenderError",
]
