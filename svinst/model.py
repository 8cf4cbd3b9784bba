"""Data model for module/port/instance extraction.

This module defines the records produced while walking a
SystemVerilog syntax tree.  Each class represents a single concept:

* :class:`PortRecord` – one port of a module (name, direction, width).
* :class:`InstanceRecord` – one instance of another module.
* :class:`ModuleRecord` – a module definition with its ports and instances.
* :class:`FileResult` – all modules defined in one source file.
* :class:`CompilationResult` – the file results of a whole run.

All records are frozen dataclasses.  They are created in a single
pass over one file's syntax tree and never mutated afterwards; the
sequences they hold are stored as tuples.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple


class Direction(str, Enum):
    """Port direction keywords supported by the extractor."""

    INPUT = "input"
    OUTPUT = "output"
    INOUT = "inout"

    @classmethod
    def from_keyword(cls, keyword: str) -> Optional["Direction"]:
        """Return the direction for a keyword, or ``None`` if it is not one."""
        try:
            return cls(keyword.strip().lower())
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PortRecord:
    """Represents a module port."""

    name: str
    direction: Direction
    width: int = 1

    def __post_init__(self) -> None:
        if self.width < 1:
            raise ValueError(f"port '{self.name}' has non-positive width {self.width}")

    def __str__(self) -> str:
        if self.width == 1:
            return f"{self.direction} {self.name}"
        return f"{self.direction} [{self.width - 1}:0] {self.name}"


@dataclass(frozen=True)
class InstanceRecord:
    """Represents one named instance of another module.

    Only the identity of the instance is kept; port connections are
    not interpreted.
    """

    module_name: str
    instance_name: str

    def __str__(self) -> str:
        return f"{self.module_name} {self.instance_name}"


@dataclass(frozen=True)
class ModuleRecord:
    """Represents a SystemVerilog module with its ports and instances."""

    name: str
    ports: Tuple[PortRecord, ...] = ()
    instances: Tuple[InstanceRecord, ...] = ()

    def get_port(self, name: str) -> Optional[PortRecord]:
        for p in self.ports:
            if p.name == name:
                return p
        return None

    def __str__(self) -> str:
        return f"module {self.name}"


@dataclass(frozen=True)
class FileResult:
    """Modules defined in one source file, in source order.

    ``syntax_tree`` holds the token tree of the file instead of modules
    when the full syntax tree was requested.
    """

    file_path: str
    modules: Tuple[ModuleRecord, ...] = ()
    syntax_tree: Optional[List[Any]] = field(default=None, compare=False, hash=False)

    def get_module(self, name: str) -> Optional[ModuleRecord]:
        for m in self.modules:
            if m.name == name:
                return m
        return None


@dataclass
class CompilationResult:
    """File results of a run, in command-line order.

    ``failures`` collects per-file errors when the run was allowed to
    continue past a failing file (see :mod:`svinst.strategy`).
    """

    files: List[FileResult] = field(default_factory=list)
    failures: List[Exception] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
