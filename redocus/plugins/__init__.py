"""Bundled plugins."""

from .markdown import MarkdownComponent, MarkdownSource, create_markdown_page

__all__ = ["MarkdownComponent", "MarkdownSource", "create_markdown_page"]
