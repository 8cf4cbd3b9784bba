"""Top level package for SystemVerilog module/port/instance extraction.

This package reads SystemVerilog source files and reports, for every
module they define, its ports (name, direction, width) and the
instances it creates.  The result feeds hierarchy construction tools
that need to know exactly which ports a module exposes.

Key concepts:

* **Model classes** represent modules, ports and instances.
  See :mod:`svinst.model`.
* **Backend** uses pyslang for parsing.  See :mod:`svinst.slang_backend`.
* **Resolvers** turn syntax into records: :mod:`svinst.width`,
  :mod:`svinst.ports`, :mod:`svinst.instances` and
  :mod:`svinst.collector`.
* **Pipeline** runs the resolvers over many files.
  See :mod:`svinst.pipeline`.
* **Strategy** decides what a failing file does to the run.
  See :mod:`svinst.strategy`.
* **Renderer** provides pluggable output formats (YAML, Markdown).
  See :mod:`svinst.renderers`.
"""

from .model import (
    Direction,
    PortRecord,
    InstanceRecord,
    ModuleRecord,
    FileResult,
    CompilationResult,
)
from .errors import (
    ExtractionError,
    ParseError,
    UnsupportedRange,
    UnresolvedPort,
    UnsupportedPort,
    DuplicateModule,
)
from .slang_backend import SlangTreeProvider, TreeProvider
from .registry import Registry
from .strategy import FailurePolicy, StrictPolicy, KeepGoingPolicy, policy_registry
from .pipeline import aggregate, extract_file, process
from .renderers import ResultRenderer, YamlRenderer, MarkdownRenderer, renderer_registry

__all__ = [
    "Direction",
    "PortRecord",
    "InstanceRecord",
    "ModuleRecord",
    "FileResult",
    "CompilationResult",
    "ExtractionError",
    "ParseError",
    "UnsupportedRange",
    "UnresolvedPort",
    "UnsupportedPort",
    "DuplicateModule",
    "SlangTreeProvider",
    "TreeProvider",
    "Registry",
    "FailurePolicy",
    "StrictPolicy",
    "KeepGoingPolicy",
    "policy_registry",
    "aggregate",
    "extract_file",
    "process",
    "ResultRenderer",
    "YamlRenderer",
    "MarkdownRenderer",
    "renderer_registry",
]
