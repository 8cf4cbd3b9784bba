"""Port resolution for module headers.

A module declares its ports in one of two mutually exclusive styles:

* **ANSI** – the header list carries direction, type and packed range
  inline (``module m(input logic [7:0] a, b, output y);``).  Ports that
  do not restate a direction inherit the direction and width of the
  group they follow.
* **Non-ANSI** – the header lists bare names (``module m(a, b, y);``)
  and the body declares them (``input [7:0] a, b; output y;``).

The style is read from the kind of the header's port list, see
:func:`port_style`.  Non-ANSI resolution is done in two passes: the
header gives the ordered skeleton of names, the body gives a mapping
from name to resolved port.  The result always follows header order,
whatever the order of the body declarations.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Set

from .errors import UnresolvedPort, UnsupportedPort, UnsupportedRange
from .model import Direction, PortRecord
from .syntax import iter_declarators, iter_kind, kind_name, node_text, token_text
from .width import evaluate

# Data types whose width is fully given by their packed dimensions
_VECTOR_TYPES = {"LogicType", "BitType", "RegType", "ImplicitType"}


class PortStyle(Enum):
    """How a module header declares its ports."""

    NONE = "none"
    ANSI = "ansi"
    NON_ANSI = "non-ansi"


class _PortGroup(NamedTuple):
    """Direction and width shared by consecutive ANSI ports."""

    direction: Direction
    width: int


def port_style(header: Any) -> PortStyle:
    """Return the declaration style of a module header.

    Raises:
        UnsupportedPort: For port lists that are neither ANSI nor
            non-ANSI (e.g. the ``(.*)`` wildcard list).
    """
    port_list = getattr(header, "ports", None)
    if port_list is None:
        return PortStyle.NONE
    kind = kind_name(port_list)
    if kind == "AnsiPortList":
        return PortStyle.ANSI
    if kind == "NonAnsiPortList":
        return PortStyle.NON_ANSI
    raise UnsupportedPort(f"unsupported port list '{node_text(port_list)}'")


def resolve_ports(module_name: str, header: Any, members: Iterable[Any]) -> List[PortRecord]:
    """Resolve the ports of one module, in header order.

    Args:
        module_name: Name of the module, used in error messages.
        header: The ``ModuleHeader`` syntax node.
        members: The module body members.

    Returns:
        The resolved ports.

    Raises:
        UnresolvedPort: If a non-ANSI header name is never declared.
        UnsupportedRange: If a port's packed range cannot be evaluated.
        UnsupportedPort: For interface ports, explicit port expressions
            and similar constructs.
    """
    try:
        style = port_style(header)
    except UnsupportedPort as exc:
        exc.module_name = module_name
        raise

    if style is PortStyle.ANSI:
        return resolve_ansi(module_name, header.ports.ports)
    if style is PortStyle.NON_ANSI:
        names = skeleton(module_name, header.ports.ports)
        return fill_skeleton(module_name, names, declared_ports(module_name, members, set(names)))
    return []


# ----------------------------------------------------------------------
# Shared helpers


def _is_bare(header: Any) -> bool:
    """True if a port header restates neither direction nor type."""
    if token_text(getattr(header, "direction", None)):
        return False
    if token_text(getattr(header, "netType", None)) or token_text(getattr(header, "varKeyword", None)):
        return False
    data_type = getattr(header, "dataType", None)
    if data_type is None:
        return True
    if kind_name(data_type) != "ImplicitType":
        return False
    if token_text(getattr(data_type, "signing", None)):
        return False
    return not list(iter_kind(getattr(data_type, "dimensions", None), "VariableDimension"))


def _declared_width(data_type: Any, module_name: str, port_name: str) -> int:
    """Width of a port's declared data type."""
    if data_type is None:
        return 1
    if kind_name(data_type) not in _VECTOR_TYPES:
        raise UnsupportedPort(
            f"data type '{node_text(data_type)}' is not supported",
            module_name=module_name,
            port_name=port_name,
        )
    return evaluate(getattr(data_type, "dimensions", None), module_name, port_name)


def _check_unpacked(declarator: Any, module_name: str, port_name: str) -> None:
    dims = list(iter_kind(getattr(declarator, "dimensions", None), "VariableDimension"))
    if dims:
        raise UnsupportedRange(
            "unpacked dimensions are not supported",
            module_name=module_name,
            port_name=port_name,
        )


def _direction(header: Any, module_name: str, port_name: str) -> Optional[Direction]:
    """Direction keyword of a port header, ``None`` when omitted."""
    keyword = token_text(getattr(header, "direction", None))
    if not keyword:
        return None
    direction = Direction.from_keyword(keyword)
    if direction is None:
        raise UnsupportedPort(
            f"'{keyword}' ports are not supported",
            module_name=module_name,
            port_name=port_name,
        )
    return direction


# ----------------------------------------------------------------------
# ANSI style


def resolve_ansi(module_name: str, ports: Iterable[Any]) -> List[PortRecord]:
    """Resolve an ANSI header port list left to right."""
    records: List[PortRecord] = []
    group: Optional[_PortGroup] = None

    for port in ports:
        kind = kind_name(port)
        if kind == "ExplicitAnsiPort":
            raise UnsupportedPort(
                "explicit port expressions are not supported",
                module_name=module_name,
                port_name=token_text(getattr(port, "name", None)),
            )
        if kind != "ImplicitAnsiPort":
            continue

        declarator = port.declarator
        name = token_text(declarator.name)
        header = port.header
        if kind_name(header) not in ("VariablePortHeader", "NetPortHeader"):
            raise UnsupportedPort(
                f"port header '{node_text(header)}' is not supported",
                module_name=module_name,
                port_name=name,
            )
        _check_unpacked(declarator, module_name, name)

        if group is not None and _is_bare(header):
            # Plain identifier: continues the current group
            records.append(PortRecord(name, group.direction, group.width))
            continue

        direction = _direction(header, module_name, name)
        if direction is None:
            # Type restated without direction: the direction carries over,
            # the first port of a list defaults to inout.
            direction = group.direction if group is not None else Direction.INOUT
        width = _declared_width(getattr(header, "dataType", None), module_name, name)
        group = _PortGroup(direction, width)
        records.append(PortRecord(name, direction, width))

    return records


# ----------------------------------------------------------------------
# Non-ANSI style


def skeleton(module_name: str, ports: Iterable[Any]) -> List[str]:
    """Return the port names of a non-ANSI header, in header order."""
    names: List[str] = []
    for port in ports:
        kind = kind_name(port)
        if kind == "ImplicitNonAnsiPort":
            expr = getattr(port, "expr", None)
            if kind_name(expr) != "PortReference" or getattr(expr, "select", None) is not None:
                raise UnsupportedPort(
                    f"port expression '{node_text(expr)}' is not supported",
                    module_name=module_name,
                )
            names.append(token_text(expr.name))
        elif kind in ("ExplicitNonAnsiPort", "EmptyNonAnsiPort"):
            raise UnsupportedPort(
                f"port '{node_text(port)}' is not supported",
                module_name=module_name,
                port_name=token_text(getattr(port, "name", None)) or None,
            )
    return names


def declared_ports(module_name: str, members: Iterable[Any], wanted: Set[str]) -> Dict[str, PortRecord]:
    """Map each wanted name to the port its body declaration describes.

    Only ``PortDeclaration`` members are considered.  The first
    declaration of a name wins; names outside ``wanted`` are internal
    nets and are ignored.
    """
    declared: Dict[str, PortRecord] = {}
    for member in iter_kind(members, "PortDeclaration"):
        header = member.header
        for declarator in iter_declarators(member.declarators):
            name = token_text(declarator.name)
            if name not in wanted or name in declared:
                continue
            if kind_name(header) not in ("VariablePortHeader", "NetPortHeader"):
                raise UnsupportedPort(
                    f"port header '{node_text(header)}' is not supported",
                    module_name=module_name,
                    port_name=name,
                )
            _check_unpacked(declarator, module_name, name)
            direction = _direction(header, module_name, name)
            if direction is None:
                raise UnresolvedPort(
                    "port declaration has no direction",
                    module_name=module_name,
                    port_name=name,
                )
            width = _declared_width(getattr(header, "dataType", None), module_name, name)
            declared[name] = PortRecord(name, direction, width)
    return declared


def fill_skeleton(module_name: str, names: List[str], declared: Dict[str, PortRecord]) -> List[PortRecord]:
    """Map the header skeleton through the body declarations."""
    records: List[PortRecord] = []
    for name in names:
        record = declared.get(name)
        if record is None:
            raise UnresolvedPort(
                "no direction declared in the module body",
                module_name=module_name,
                port_name=name,
            )
        records.append(record)
    return records
