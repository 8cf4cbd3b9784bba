"""Markdown renderer.

Renders each module as a pair of GitHub Flavoured Markdown tables, one
for its ports and one for its instances.  Files dumped as a full
syntax tree are rendered as a nested bullet list.  Meant for reading,
not for downstream tools.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from ..model import CompilationResult, InstanceRecord, PortRecord
from .base import ResultRenderer, renderer_registry


def _table(headers: List[str], rows: Iterable[List[str]]) -> str:
    # Header row with alignment specifier
    header_line = "| " + " | ".join(headers) + " |"
    align_line = "|" + "|".join([":" + "-" * (len(h) + 1) for h in headers]) + "|"
    lines: List[str] = [header_line, align_line]
    for row in rows:
        lines.append("| " + " | ".join(row) + " |")
    return "\n".join(lines)


@renderer_registry.register("markdown")
class MarkdownRenderer(ResultRenderer):
    """Render modules as GitHub Flavoured Markdown tables."""

    def render_port_table(self, ports: Iterable[PortRecord]) -> str:
        return _table(
            ["Port Name", "Direction", "Width"],
            ([p.name, p.direction.value, str(p.width)] for p in ports),
        )

    def render_instance_table(self, instances: Iterable[InstanceRecord]) -> str:
        return _table(
            ["Module", "Instance"],
            ([i.module_name, i.instance_name] for i in instances),
        )

    def render_syntax_tree(self, entries: Iterable[Dict[str, Any]], depth: int = 0) -> str:
        lines: List[str] = []
        indent = "  " * depth
        for entry in entries:
            if "Token" in entry:
                lines.append(f"{indent}- `{entry['Token']}` (line {entry['Line']})")
                continue
            for kind, children in entry.items():
                lines.append(f"{indent}- {kind}")
                if children:
                    lines.append(self.render_syntax_tree(children, depth + 1))
        return "\n".join(lines)

    def render(self, result: CompilationResult) -> str:
        sections: List[str] = []
        for file_result in result.files:
            sections.append(f"# File {file_result.file_path}")
            if file_result.syntax_tree is not None:
                sections.append(self.render_syntax_tree(file_result.syntax_tree))
                continue
            for mod in file_result.modules:
                sections.append(f"## Module {mod.name}")
                sections.append(self.render_port_table(mod.ports))
                if mod.instances:
                    sections.append(self.render_instance_table(mod.instances))
                else:
                    sections.append("_No instances._")
        return "\n\n".join(sections) + "\n"
