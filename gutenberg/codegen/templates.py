"""Jinja2 rendering of Move source skeletons.

Provides the TemplateRenderer class which loads ``.move.j2`` templates from
the ``gutenberg/codegen/templates/`` directory.  Templates cover the parts of
a module that are mostly literal text (the module wrapper and the generated
test functions); emitters fill them with pre-rendered fragments.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates into Move source text.

    Undefined variables raise instead of rendering as empty strings, so a
    template and its emitter cannot silently drift apart.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["args"] = _args_filter

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"tests/mint.move.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered text without a trailing newline.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)


@lru_cache(maxsize=1)
def default_renderer() -> TemplateRenderer:
    """Shared renderer over the bundled templates."""
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------


def _args_filter(values: list[str], indent: int = 12) -> str:
    """One argument per line with trailing commas, for multi-line calls."""
    pad = " " * indent
    return "\n".join(f"{pad}{value}," for value in values)
