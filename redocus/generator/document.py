"""Serialize a render descriptor into a complete HTML document.

The serializer wraps the descriptor's head components and content in the
``document.jinja`` shell, applying the ``<html>`` and ``<body>`` attribute
mappings. Falsy head components are skipped and ``None`` attribute values are
omitted, so plugins can drop an attribute by setting it to ``None``.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .composer import to_markup

if typ.TYPE_CHECKING:
    from .composer import RenderDescriptor

DOCUMENT_TEMPLATE = "document.jinja"


class DocumentSerializer:
    """Render descriptors through the shared document template."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``document.jinja``. Defaults to
            ``redocus/templates``.
        """
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template(DOCUMENT_TEMPLATE)

    def serialize(self, descriptor: RenderDescriptor) -> str:
        """Return the full HTML document for ``descriptor``.

        Notes
        -----
        The content element is evaluated here, so page components and the
        wrapper run once per serialization. The result always ends with a
        newline.
        """
        context = {
            "html_attributes": _attributes(descriptor.html_attributes),
            "body_attributes": _attributes(descriptor.body_attributes),
            "head_components": [
                to_markup(component)
                for component in descriptor.head_components
                if component
            ],
            "content": to_markup(descriptor.content),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html


def _attributes(values: cabc.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
    """Drop ``None`` values and render booleans the way HTML expects."""
    normalized: dict[str, typ.Any] = {}
    for key, value in values.items():
        if value is None or value is False:
            continue
        normalized[key] = key if value is True else value
    return normalized


__all__ = ["DOCUMENT_TEMPLATE", "DocumentSerializer"]
