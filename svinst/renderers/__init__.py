"""Renderer implementations for extraction results.

This package contains the output format renderers:
- yaml: the structured document read by hierarchy tools
- markdown: GitHub Flavoured Markdown tables for review

All renderers are automatically registered via decorators.
"""

from .base import ResultRenderer, renderer_registry, to_document
from .yaml import YamlRenderer
from .markdown import MarkdownRenderer

__all__ = [
    "ResultRenderer",
    "renderer_registry",
    "to_document",
    "YamlRenderer",
    "MarkdownRenderer",
]
