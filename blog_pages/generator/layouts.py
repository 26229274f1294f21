"""Walk a page's layout chain, wrapping its content at every step.

The resolver is a small state machine. A post starts with the ``post`` layout
(or the base layout when there is none) and any other page with no layout,
using its own variables as the current front matter and its pre-rendered
``content``. At each step a ``layout`` key in the current front matter
overrides the layout name; an empty name ends the walk. Otherwise the named
layout is rendered with ``{site, page, content}``, its output becomes the new
content and its front matter the current front matter. Rendering the base
layout always ends the walk.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from blog_pages._constants import CONTENT_KEY, LAYOUT_KEY, POST_LAYOUT
from blog_pages.errors import RenderError
from blog_pages.front_matter import get_str

if typ.TYPE_CHECKING:
    from jinja2 import Template

    from blog_pages.front_matter import FrontMatter
    from blog_pages.loader import LayoutRecord, LayoutSet

    from .models import PageRecord
    from .templating import TemplateRenderer


@dc.dataclass(frozen=True, slots=True)
class Rendering:
    """Active state: the next layout to apply and the content so far."""

    layout_name: str
    front_matter: FrontMatter
    content: str


@dc.dataclass(frozen=True, slots=True)
class Done:
    """Terminal state holding the fully wrapped content."""

    content: str


LayoutState: typ.TypeAlias = Rendering | Done


class LayoutResolver:
    """Apply the layout chain for pages sharing one set of layouts.

    Layout templates are compiled once, when the resolver is created, and are
    only read afterwards; a single resolver can serve concurrent workers.
    """

    def __init__(self, layouts: LayoutSet, renderer: TemplateRenderer) -> None:
        self.layouts = layouts
        self.renderer = renderer
        self._templates: dict[str, Template] = {
            name: renderer.compile(layout.body, name=_layout_label(layout))
            for name, layout in layouts.layouts.items()
        }

    @property
    def max_steps(self) -> int:
        """Return the longest chain a well-formed layout set can produce."""
        return len(self.layouts) + 1

    def initial_state(self, page: PageRecord) -> Rendering:
        """Return the starting state for ``page``.

        Posts start from the ``post`` layout, or from the base layout when the
        site defines no ``post`` layout.
        """
        layout_name = ""
        if page.is_post:
            layout_name = POST_LAYOUT if POST_LAYOUT in self.layouts else self.layouts.base.name
        return Rendering(
            layout_name=layout_name,
            front_matter=page.variables,
            content=typ.cast("str", page.variables.get(CONTENT_KEY) or ""),
        )

    def step(
        self, state: Rendering, page: PageRecord, site: typ.Mapping[str, typ.Any]
    ) -> LayoutState:
        """Advance the chain by one layout.

        Raises
        ------
        RenderError
            If the layout name is unknown or the layout fails to render.
        """
        label = page.source_path.name
        override = get_str(state.front_matter, LAYOUT_KEY, source=label)
        layout_name = override if override is not None else state.layout_name
        if not layout_name:
            return Done(state.content)

        layout = self.layouts.get(layout_name)
        if layout is None:
            msg = f"unknown layout '{layout_name}'"
            raise RenderError(label, msg)
        content = self.renderer.render(
            self._templates[layout_name],
            {"site": site, "page": page.variables, CONTENT_KEY: state.content},
            name=_layout_label(layout),
        )
        if self.layouts.is_base(layout):
            return Done(content)
        return Rendering(layout_name, layout.front_matter, content)

    def resolve(self, page: PageRecord, site: typ.Mapping[str, typ.Any]) -> str:
        """Run the chain for ``page`` to completion and return its final HTML.

        Raises
        ------
        RenderError
            If a layout fails, or the chain grows past :attr:`max_steps`
            without reaching the base layout (for example two layouts naming
            each other).
        """
        state: LayoutState = self.initial_state(page)
        chain: list[str] = []
        while isinstance(state, Rendering):
            if len(chain) >= self.max_steps:
                msg = f"layout chain does not reach the base layout: {' -> '.join(chain)}"
                raise RenderError(page.source_path.name, msg)
            state = self.step(state, page, site)
            if isinstance(state, Rendering):
                chain.append(state.layout_name)
        return state.content


def _layout_label(layout: LayoutRecord) -> str:
    return f"{layout.path.parent.name}/{layout.path.name}"


__all__ = ["Done", "LayoutResolver", "LayoutState", "Rendering"]
