"""Exceptions raised while extracting modules from SystemVerilog files.

Every error carries the location it refers to (file, module and port,
where known) so the command line can report it in one line.  Errors
are never turned into default values: a port that cannot be resolved
fails the whole file.
"""

from __future__ import annotations

from typing import Optional


class ExtractionError(RuntimeError):
    """Base class for all extraction failures."""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        module_name: Optional[str] = None,
        port_name: Optional[str] = None,
    ) -> None:
        self.message = message
        self.file_path = file_path
        self.module_name = module_name
        self.port_name = port_name
        super().__init__(message)

    def with_file(self, file_path: str) -> "ExtractionError":
        """Attach the file path if the error does not carry one yet."""
        if not self.file_path:
            self.file_path = file_path
        return self

    def __str__(self) -> str:
        parts = []
        if self.file_path:
            parts.append(self.file_path)
        if self.module_name:
            parts.append(f"module '{self.module_name}'")
        if self.port_name:
            parts.append(f"port '{self.port_name}'")
        parts.append(self.message)
        return ": ".join(parts)


class ParseError(ExtractionError):
    """The front-end rejected the file (syntax or preprocessor errors)."""


class UnsupportedRange(ExtractionError):
    """A packed dimension is not a literal, zero based ``[msb:0]`` range."""


class UnresolvedPort(ExtractionError):
    """A non-ANSI header port has no direction declaration in the body."""


class UnsupportedPort(ExtractionError):
    """A port uses a declaration form the extractor does not handle."""


class DuplicateModule(ExtractionError):
    """Two module definitions in one file share a name."""
