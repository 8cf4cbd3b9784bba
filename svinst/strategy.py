"""Per-file failure policies.

When a file cannot be parsed or one of its modules cannot be resolved,
the run either stops or carries on with the remaining files.  Each
behaviour is a small policy class registered in
:data:`policy_registry`:

* ``strict`` (the default) re-raises the first failure in input order,
  so nothing is rendered and the command exits with status 1.
* ``keep-going`` records the failure on the
  :class:`svinst.model.CompilationResult`, omits the failing file from
  the output and processes the remaining files.  The command still
  exits with status 1.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .errors import ExtractionError
from .model import CompilationResult
from .registry import Registry

logger = logging.getLogger(__name__)

# Registry for failure policy implementations
policy_registry = Registry("policy")

DEFAULT_POLICY = "strict"


class FailurePolicy(ABC):
    """Abstract base class for per-file failure handling.

    ``stop_on_failure`` tells a sequential run that no further file
    needs processing once one has failed.
    """

    stop_on_failure = False

    @abstractmethod
    def on_failure(self, result: CompilationResult, error: ExtractionError) -> None:
        """Handle the failure of one file.

        Args:
            result: The result being assembled.
            error: The error raised while processing the file.
        """
        raise NotImplementedError


@policy_registry.register("strict")
class StrictPolicy(FailurePolicy):
    """Abort the run at the first failing file."""

    stop_on_failure = True

    def on_failure(self, result: CompilationResult, error: ExtractionError) -> None:
        raise error


@policy_registry.register("keep-going")
class KeepGoingPolicy(FailurePolicy):
    """Skip failing files and report them after the run."""

    def on_failure(self, result: CompilationResult, error: ExtractionError) -> None:
        logger.warning("skipping %s", error.file_path)
        result.failures.append(error)
