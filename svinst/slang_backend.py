"""Slang-backed syntax tree provider.

This module defines a :class:`SlangTreeProvider` class that wraps the
``pyslang`` Python bindings to preprocess and parse SystemVerilog
source files.  Only the syntax tree is built: no elaboration is
performed, so modules instantiated but defined in another file do not
cause errors, and every file is parsed on its own.

Because this provider depends on compiled extensions, it will raise
an exception if the `pyslang` package cannot be imported.  There is
intentionally **no** fallback parser.

The extraction layer does not depend on this class directly: anything
with a ``parse(path)`` method returning a compilation-unit node
satisfies the :class:`TreeProvider` protocol, which lets tests feed
hand-built trees.  Providers that also implement ``dump(path)``
support the full syntax tree output (``--full-tree``).
"""

from __future__ import annotations

import logging
import os
import re
import types
from typing import Any, Dict, Iterable, List, Optional, Protocol

from .errors import ParseError
from .syntax import kind_name

# Attempt to import the pyslang package.  If it is not installed we
# set it to None; calling :meth:`SlangTreeProvider.parse` will raise
# an error.
try:
    import pyslang  # type: ignore[import]
except ImportError:
    pyslang = None  # type: ignore

logger = logging.getLogger(__name__)

# Diagnostics dropped when includes are ignored
_INCLUDE_DIAGS = {"CouldNotOpenIncludeFile"}


def find_symbol(module: Any, name: str) -> Any:
    """Look up a binding in pyslang or one of its submodules.

    Older releases export everything at the top level, newer ones
    group the bindings into submodules (``pyslang.syntax``, ...).

    Raises:
        ImportError: If no module provides ``name``.
    """
    if hasattr(module, name):
        return getattr(module, name)
    for sub in vars(module).values():
        if isinstance(sub, types.ModuleType) and hasattr(sub, name):
            return getattr(sub, name)
    version = getattr(module, "__version__", "unknown")
    raise ImportError(
        f"the installed pyslang (version {version}) does not provide '{name}'; "
        "this pyslang version is incompatible."
    )


def diag_name(diag: Any) -> str:
    """Return the code name of a diagnostic (``CouldNotOpenIncludeFile``)."""
    code = str(getattr(diag, "code", ""))
    m = re.match(r"^DiagCode\((\w+)\)$", code)
    return m.group(1) if m else code


def dump_syntax(item: Any, line_of) -> Dict[str, Any]:
    """Convert a syntax node or token into nested plain data.

    Nodes become ``{Kind: [children...]}``, tokens become
    ``{"Token": text, "Line": line}``.  Missing (empty) tokens are
    left out.

    Args:
        item: A pyslang syntax node or token.
        line_of: Callable mapping a token to its line number.
    """
    if hasattr(item, "rawText"):
        return {"Token": item.rawText, "Line": line_of(item)}
    children: List[Dict[str, Any]] = []
    for i in range(len(item)):
        child = item[i]
        if child is None:
            continue
        if hasattr(child, "rawText") and (getattr(child, "isMissing", False) or not child.rawText):
            continue
        children.append(dump_syntax(child, line_of))
    return {kind_name(item) or type(item).__name__: children}


class TreeProvider(Protocol):
    """Produce the compilation-unit syntax node of one source file."""

    def parse(self, path: str) -> Any:  # pragma: no cover
        ...


class SlangTreeProvider:
    """Parse SystemVerilog sources using the slang front-end.

    Include directories and preprocessor defines are recorded at
    construction and applied to every file.  Defines use the command
    line form ``NAME`` or ``NAME=VALUE``.  With ``ignore_include`` set,
    ``include`` directives whose file cannot be found are not errors.

    A fresh source manager is used for each file, so a single provider
    may be shared by worker threads.
    """

    def __init__(
        self,
        include_dirs: Optional[Iterable[str]] = None,
        defines: Optional[Iterable[str]] = None,
        ignore_include: bool = False,
    ) -> None:
        self.include_dirs: List[str] = list(include_dirs or [])
        self.defines: List[str] = list(defines or [])
        self.ignore_include = ignore_include

    def _options(self) -> Any:
        pp = find_symbol(pyslang, "PreprocessorOptions")()
        pp.predefines = list(self.defines)
        pp.additionalIncludePaths = list(self.include_dirs)
        return find_symbol(pyslang, "Bag")([pp])

    def _errors(self, tree: Any) -> List[Any]:
        errors = [d for d in tree.diagnostics if d.isError()]
        if self.ignore_include:
            errors = [d for d in errors if diag_name(d) not in _INCLUDE_DIAGS]
        return errors

    def _parse(self, path: str):
        if pyslang is None:
            raise ImportError(
                "pyslang is required for the SlangTreeProvider but is not installed. "
                "Install it via `pip install pyslang`."
            )
        if not os.path.isfile(path):
            raise ParseError("file not found", file_path=path)

        sm = find_symbol(pyslang, "SourceManager")()
        tree = find_symbol(pyslang, "SyntaxTree").fromFile(path, sm, self._options())

        errors = self._errors(tree)
        if errors:
            report = find_symbol(pyslang, "DiagnosticEngine").reportAll(sm, errors).strip()
            logger.debug("%s: %d parse errors", path, len(errors))
            raise ParseError(f"parse failed\n{report}", file_path=path)
        return tree, sm

    def parse_tree(self, path: str) -> Any:
        """Parse a file and return the pyslang ``SyntaxTree``.

        Raises:
            ImportError: If ``pyslang`` is missing or incompatible.
            ParseError: If the file is missing or slang reports any
                preprocessor or syntax error.
        """
        tree, _ = self._parse(path)
        return tree

    def parse(self, path: str) -> Any:
        """Return the compilation-unit node of a file."""
        return self.parse_tree(path).root

    def dump(self, path: str) -> List[Dict[str, Any]]:
        """Return the full token tree of a file, with line numbers."""
        tree, sm = self._parse(path)
        return [dump_syntax(tree.root, lambda tok: sm.getLineNumber(tok.location))]
