"""Instance extraction for module bodies."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List

from .model import InstanceRecord
from .syntax import iter_kind, kind_name, token_text

logger = logging.getLogger(__name__)

# Members whose nested instances are not reported
_GENERATE_KINDS = {"GenerateRegion", "IfGenerate", "LoopGenerate", "CaseGenerate", "GenerateBlock"}


def resolve_instances(members: Iterable[Any]) -> List[InstanceRecord]:
    """Return the instances created by a module body, in source order.

    Each ``HierarchyInstantiation`` member yields one record per
    instance, left to right, all sharing the instantiated type name
    (``case2 c2a (...), c2b (...);`` gives ``c2a`` then ``c2b``).
    Port connections are not inspected.  Instances nested in generate
    blocks are not reported.
    """
    records: List[InstanceRecord] = []
    for member in members:
        kind = kind_name(member)
        if kind in _GENERATE_KINDS:
            logger.debug("skipping instances inside %s", kind)
            continue
        if kind != "HierarchyInstantiation":
            continue
        module_name = token_text(member.type)
        for inst in iter_kind(member.instances, "HierarchicalInstance"):
            decl = getattr(inst, "decl", None)
            instance_name = token_text(getattr(decl, "name", None))
            if not instance_name:
                logger.debug("skipping unnamed instance of %s", module_name)
                continue
            records.append(InstanceRecord(module_name, instance_name))
    return records
