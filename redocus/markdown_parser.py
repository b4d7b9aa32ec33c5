r"""Split Markdown content files into front matter and body.

Content files open with an optional YAML block fenced by ``---`` lines. The
block becomes the page's ``data`` mapping; everything after it is the
Markdown body handed to the renderer.

Example
-------
>>> from redocus.markdown_parser import parse_front_matter
>>> doc = parse_front_matter("---\ntitle: Intro\n---\nHello\n")
>>> doc.data["title"], doc.body
('Intro', 'Hello\n')
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

FRONT_MATTER_PATTERN = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(.*?)(?:\r?\n)?^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


class FrontMatterError(ValueError):
    """Raised when a content file carries malformed front matter."""


@dc.dataclass(slots=True)
class FrontMatter:
    """Front matter metadata and the remaining Markdown body.

    Attributes
    ----------
    data : dict[str, Any]
        Parsed YAML mapping; empty when the file has no front matter.
    body : str
        Markdown following the closing fence.
    """

    data: dict[str, typ.Any]
    body: str


def _yaml_loader() -> YAML:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader


def parse_front_matter(text: str) -> FrontMatter:
    """Separate YAML front matter from the Markdown body.

    Parameters
    ----------
    text : str
        Full content file text.

    Returns
    -------
    FrontMatter
        Parsed metadata and body. Text without a leading ``---`` fence is
        returned unchanged as the body with empty metadata.

    Raises
    ------
    FrontMatterError
        If the YAML block cannot be parsed or is not a mapping.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if match is None:
        return FrontMatter(data={}, body=text)
    try:
        loaded = _yaml_loader().load(match.group(1)) or {}
    except YAMLError as exc:
        msg = f"Invalid front matter: {exc}"
        raise FrontMatterError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Front matter must be a mapping."
        raise FrontMatterError(msg)
    return FrontMatter(data=dict(loaded), body=text[match.end() :])


__all__ = ["FrontMatter", "FrontMatterError", "parse_front_matter"]
