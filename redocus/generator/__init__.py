"""Render composition, Markdown rendering, and document serialization."""

from .components import ComponentOverrideExtension
from .composer import Element, RenderComposer, RenderDescriptor, identity_wrapper
from .document import DocumentSerializer
from .renderer import HtmlContentRenderer

__all__ = [
    "ComponentOverrideExtension",
    "DocumentSerializer",
    "Element",
    "HtmlContentRenderer",
    "RenderComposer",
    "RenderDescriptor",
    "identity_wrapper",
]
