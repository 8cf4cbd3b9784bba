"""Run extraction over a list of files.

:func:`process` is the entry point of the library: it parses every
file with a :class:`svinst.slang_backend.TreeProvider`, collects its
modules and assembles the :class:`svinst.model.CompilationResult`.

Files are independent of each other.  With ``jobs > 1`` they are
processed by a thread pool; results are still assembled in input
order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Union

from .collector import collect
from .errors import ExtractionError
from .model import CompilationResult, FileResult, ModuleRecord
from .slang_backend import SlangTreeProvider, TreeProvider
from .strategy import DEFAULT_POLICY, FailurePolicy, policy_registry

logger = logging.getLogger(__name__)

_Outcome = Union[FileResult, ExtractionError]


def aggregate(file_path: str, modules: Iterable[ModuleRecord]) -> FileResult:
    """Wrap the modules of one file into a :class:`FileResult`."""
    return FileResult(file_path=file_path, modules=tuple(modules))


def extract_file(path: str, provider: TreeProvider, full_tree: bool = False) -> FileResult:
    """Parse one file and collect its modules.

    With ``full_tree`` the file's token tree is returned instead of
    its modules; the provider must then implement ``dump(path)``.

    Raises:
        ExtractionError: If the file cannot be parsed or resolved.
    """
    logger.debug("parsing %s", path)
    if full_tree:
        return FileResult(file_path=path, syntax_tree=provider.dump(path))
    root = provider.parse(path)
    return aggregate(path, collect(root, path))


def _extract_or_error(path: str, provider: TreeProvider, full_tree: bool) -> _Outcome:
    try:
        return extract_file(path, provider, full_tree)
    except ExtractionError as exc:
        exc.with_file(path)
        return exc


def process(
    paths: Sequence[str],
    provider: Optional[TreeProvider] = None,
    policy: Union[str, FailurePolicy] = DEFAULT_POLICY,
    jobs: int = 1,
    full_tree: bool = False,
) -> CompilationResult:
    """Extract modules from every file in ``paths``.

    Args:
        paths: Source files, in the order results should appear.
        provider: Syntax tree provider; defaults to a
            :class:`SlangTreeProvider` without defines or include dirs.
        policy: Failure policy instance or registered policy name.
        jobs: Number of worker threads.
        full_tree: Report each file's token tree instead of its modules.

    Returns:
        The compilation result, one :class:`FileResult` per successful
        file, in input order.

    Raises:
        ExtractionError: When the policy aborts on a failing file.
    """
    if provider is None:
        provider = SlangTreeProvider()
    if isinstance(policy, str):
        policy = policy_registry.create(policy)

    if jobs > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            outcomes: List[_Outcome] = list(
                pool.map(lambda p: _extract_or_error(p, provider, full_tree), paths)
            )
    else:
        outcomes = []
        for path in paths:
            outcome = _extract_or_error(path, provider, full_tree)
            outcomes.append(outcome)
            if isinstance(outcome, ExtractionError) and policy.stop_on_failure:
                break

    result = CompilationResult()
    for outcome in outcomes:
        if isinstance(outcome, ExtractionError):
            policy.on_failure(result, outcome)
        else:
            result.files.append(outcome)
    return result
