"""Base renderer class and registry.

This module defines the abstract :class:`ResultRenderer` interface,
the :data:`renderer_registry` for plugin-style registration of
concrete implementations, and :func:`to_document`, which turns a
result into the plain nested structure every renderer starts from.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..model import CompilationResult, FileResult, ModuleRecord
from ..registry import Registry

# Registry for renderer implementations
renderer_registry = Registry("renderer")


def module_document(module: ModuleRecord) -> Dict[str, Any]:
    """Return the document entry for one module."""
    return {
        "mod_name": module.name,
        "ports": [
            {
                "port_name": p.name,
                "port_dir": p.direction.value,
                "port_width": p.width,
            }
            for p in module.ports
        ],
        "insts": [
            {
                "mod_name": i.module_name,
                "inst_name": i.instance_name,
            }
            for i in module.instances
        ],
    }


def to_document(result: CompilationResult) -> Dict[str, List[Dict[str, Any]]]:
    """Return the output document for a whole run.

    Key names and nesting are what downstream hierarchy tools read::

        files:
          - file_name: ...
            defs:
              - mod_name: ...
                ports: [{port_name, port_dir, port_width}, ...]
                insts: [{mod_name, inst_name}, ...]

    Files carrying a full syntax tree get a ``syntax_tree`` entry in
    place of ``defs``.
    """
    return {"files": [file_document(f) for f in result.files]}


def file_document(file_result: FileResult) -> Dict[str, Any]:
    """Return the document entry for one file."""
    if file_result.syntax_tree is not None:
        return {"file_name": file_result.file_path, "syntax_tree": file_result.syntax_tree}
    return {
        "file_name": file_result.file_path,
        "defs": [module_document(m) for m in file_result.modules],
    }


class ResultRenderer(ABC):
    """Abstract base class for rendering a compilation result."""

    @abstractmethod
    def render(self, result: CompilationResult) -> str:
        """Render a compilation result.

        Args:
            result: The :class:`CompilationResult` to render.

        Returns:
            The rendered document as a string.
        """
        raise NotImplementedError
