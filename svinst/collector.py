"""Module collection over a compilation unit.

:func:`collect` walks the top-level members of one file's syntax tree
and turns every module declaration into a
:class:`svinst.model.ModuleRecord`.  Packages, interfaces, programs,
classes and other top-level constructs are skipped.
"""

from __future__ import annotations

import logging
from typing import Any, List, Set

from .errors import DuplicateModule, ExtractionError
from .instances import resolve_instances
from .model import ModuleRecord
from .ports import resolve_ports
from .syntax import kind_name, token_text

logger = logging.getLogger(__name__)


def collect_module(decl: Any) -> ModuleRecord:
    """Build the record for one ``ModuleDeclaration`` node."""
    header = decl.header
    name = token_text(header.name)
    members = list(getattr(decl, "members", None) or [])
    ports = resolve_ports(name, header, members)
    instances = resolve_instances(members)
    logger.debug("module %s: %d ports, %d instances", name, len(ports), len(instances))
    return ModuleRecord(name=name, ports=tuple(ports), instances=tuple(instances))


def collect(root: Any, file_path: str = "") -> List[ModuleRecord]:
    """Collect the modules of a compilation unit in source order.

    Args:
        root: The ``CompilationUnit`` syntax node of one file.
        file_path: Source path, attached to any error raised.

    Returns:
        The module records, in the order they are defined.

    Raises:
        ExtractionError: If a module cannot be resolved.  The error
            carries ``file_path``.
    """
    modules: List[ModuleRecord] = []
    seen: Set[str] = set()
    for member in getattr(root, "members", None) or []:
        kind = kind_name(member)
        if kind != "ModuleDeclaration":
            logger.debug("%s: skipping unsupported top-level %s", file_path, kind or type(member).__name__)
            continue
        try:
            record = collect_module(member)
            if record.name in seen:
                raise DuplicateModule("module is defined more than once", module_name=record.name)
        except ExtractionError as exc:
            exc.with_file(file_path)
            raise
        seen.add(record.name)
        modules.append(record)
    return modules
