"""YAML renderer.

Renders the result document with PyYAML.  Key order is preserved,
sequences are indented under their parent key and empty port or
instance lists come out as ``[]``.
"""

from __future__ import annotations

import yaml

from ..model import CompilationResult
from .base import ResultRenderer, renderer_registry, to_document


class _IndentedDumper(yaml.SafeDumper):
    """Safe dumper that indents block sequences inside mappings."""

    def increase_indent(self, flow=False, indentless=False):
        return super().increase_indent(flow, False)


@renderer_registry.register("yaml")
class YamlRenderer(ResultRenderer):
    """Render the result as a YAML document."""

    def render(self, result: CompilationResult) -> str:
        return yaml.dump(
            to_document(result),
            Dumper=_IndentedDumper,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
