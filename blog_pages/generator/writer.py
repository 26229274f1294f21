"""Write rendered pages and copy static files into the output tree."""

from __future__ import annotations

import shutil
import typing as typ

from blog_pages.errors import BuildError

if typ.TYPE_CHECKING:
    from pathlib import Path


class OutputWriter:
    """Persist build artifacts below ``output_root``.

    Parent directories are created with ``exist_ok=True``, so several workers
    may create the same directory concurrently.
    """

    def __init__(self, output_root: Path) -> None:
        self.output_root = output_root

    def destination(self, local_path: str) -> Path:
        """Return the output path for a ``/``-separated local path."""
        return self.output_root.joinpath(*local_path.split("/"))

    def write_page(self, local_path: str, content: str) -> Path:
        """Write ``content`` as UTF-8 (no byte-order mark) to ``local_path``."""
        target = self.destination(local_path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            msg = f"Unable to write '{target}': {exc}"
            raise BuildError(msg) from exc
        return target

    def copy_static(self, source: Path, local_path: str) -> Path:
        """Copy ``source`` byte-for-byte to ``local_path``, overwriting."""
        target = self.destination(local_path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
        except OSError as exc:
            msg = f"Unable to copy '{source}' to '{target}': {exc}"
            raise BuildError(msg) from exc
        return target


__all__ = ["OutputWriter"]
