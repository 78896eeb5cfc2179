"""Syntax tree node variants consumed by the documenter.

The tree is produced elsewhere (by a CoffeeScript parser run out of
process) and handed over either as these dataclasses or in their
serialized mapping form. Only the node shapes the documenter inspects
are modelled; anything else arrives as a ``Literal`` or is dropped by
the producer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Node:
    """Base class for all syntax tree nodes."""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary tagged with the node type.

        Returns:
            Dictionary representation of this node.
        """
        data: dict[str, Any] = {"type": type(self).__name__}
        data.update(self._fields_to_dict())
        return data

    def _fields_to_dict(self) -> dict[str, Any]:
        return {}


@dataclass
class Comment(Node):
    """A block comment; ``comment`` holds the text between the markers."""

    comment: str = ""

    def _fields_to_dict(self) -> dict[str, Any]:
        return {"comment": self.comment}


@dataclass
class Literal(Node):
    """An identifier, property name, or string literal."""

    value: str = ""

    def _fields_to_dict(self) -> dict[str, Any]:
        return {"value": self.value}


@dataclass
class ThisLiteral(Literal):
    """The constructor-level self reference (``@`` / ``this``)."""

    value: str = "this"


@dataclass
class Access(Node):
    """A single ``.name`` property access step."""

    name: str = ""

    def _fields_to_dict(self) -> dict[str, Any]:
        return {"name": self.name}


@dataclass
class Value(Node):
    """A base node followed by zero or more property accesses.

    Attributes:
        base: The leftmost node (identifier, object literal, class, ...).
        properties: Access steps applied to the base, in source order.
    """

    base: Node = field(default_factory=Literal)
    properties: list[Access] = field(default_factory=list)

    @property
    def this(self) -> bool:
        """Whether the value is bound to the self reference (``@name``)."""
        return isinstance(self.base, ThisLiteral)

    def _fields_to_dict(self) -> dict[str, Any]:
        return {
            "base": self.base.to_dict(),
            "properties": [p.to_dict() for p in self.properties],
        }


@dataclass
class Obj(Node):
    """An object literal; entries are usually ``Assign`` or ``Comment``."""

    properties: list[Node] = field(default_factory=list)

    def _fields_to_dict(self) -> dict[str, Any]:
        return {"properties": [p.to_dict() for p in self.properties]}


@dataclass
class Arr(Node):
    """An array literal."""

    objects: list[Node] = field(default_factory=list)

    def _fields_to_dict(self) -> dict[str, Any]:
        return {"objects": [o.to_dict() for o in self.objects]}


@dataclass
class Param(Node):
    """A declared function parameter.

    Attributes:
        name: A ``Literal`` for plain parameters, or a this-bound
            ``Value`` for the ``@name`` shorthand.
        splat: Whether the parameter is variadic (``args...``).
    """

    name: Node = field(default_factory=Literal)
    splat: bool = False

    def _fields_to_dict(self) -> dict[str, Any]:
        return {"name": self.name.to_dict(), "splat": self.splat}


@dataclass
class Block(Node):
    """An ordered list of statements."""

    expressions: list[Node] = field(default_factory=list)

    def _fields_to_dict(self) -> dict[str, Any]:
        return {"expressions": [e.to_dict() for e in self.expressions]}


@dataclass
class Code(Node):
    """A function literal (``->`` or, when ``bound``, ``=>``)."""

    params: list[Param] = field(default_factory=list)
    body: Block = field(default_factory=Block)
    bound: bool = False

    def _fields_to_dict(self) -> dict[str, Any]:
        return {
            "params": [p.to_dict() for p in self.params],
            "body": self.body.to_dict(),
            "bound": self.bound,
        }


@dataclass
class Assign(Node):
    """An assignment statement or an object literal entry."""

    variable: Node = field(default_factory=Value)
    value: Node = field(default_factory=Literal)

    def _fields_to_dict(self) -> dict[str, Any]:
        return {"variable": self.variable.to_dict(), "value": self.value.to_dict()}


@dataclass
class Class(Node):
    """A class declaration or class expression.

    Attributes:
        variable: The class's own name node, or None for anonymous classes.
        parent: The superclass expression, or None.
        body: The class body.
    """

    variable: Optional[Node] = None
    parent: Optional[Node] = None
    body: Block = field(default_factory=Block)

    def _fields_to_dict(self) -> dict[str, Any]:
        return {
            "variable": self.variable.to_dict() if self.variable else None,
            "parent": self.parent.to_dict() if self.parent else None,
            "body": self.body.to_dict(),
        }


@dataclass
class Call(Node):
    """A call expression such as ``require('fs')``."""

    variable: Node = field(default_factory=Value)
    args: list[Node] = field(default_factory=list)

    def _fields_to_dict(self) -> dict[str, Any]:
        return {
            "variable": self.variable.to_dict(),
            "args": [a.to_dict() for a in self.args],
        }


def qualified_name(node: Node) -> str:
    """Resolve a (possibly nested) identifier node into a dotted name.

    Args:
        node: A ``Literal``, ``Access`` or ``Value`` node.

    Returns:
        The dotted name, e.g. ``"Foo.Bar"`` or ``"this.render"``.

    Raises:
        TypeError: If the node cannot be named.
    """
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, Access):
        return node.name
    if isinstance(node, Value):
        parts = [qualified_name(node.base)]
        parts.extend(p.name for p in node.properties)
        return ".".join(parts)
    raise TypeError(f"Cannot resolve a name from {type(node).__name__} node")


def unwrap(node: Node) -> Node:
    """Return the base of a property-less ``Value``, else the node itself."""
    if isinstance(node, Value) and not node.properties:
        return node.base
    return node


def _opt(data: Optional[dict[str, Any]]) -> Optional[Node]:
    return node_from_dict(data) if data is not None else None


def _list(items: Optional[list[dict[str, Any]]]) -> list[Any]:
    return [node_from_dict(i) for i in items or []]


def node_from_dict(data: dict[str, Any]) -> Node:
    """Build a node (and its subtree) from its serialized mapping.

    Args:
        data: Mapping with a ``type`` tag naming the node variant.

    Returns:
        The reconstructed node.

    Raises:
        ValueError: If the type tag is missing or unknown.
    """
    node_type = data.get("type")

    if node_type == "Comment":
        return Comment(comment=data.get("comment", ""))
    if node_type == "Literal":
        return Literal(value=data.get("value", ""))
    if node_type == "ThisLiteral":
        return ThisLiteral()
    if node_type == "Access":
        return Access(name=data.get("name", ""))
    if node_type == "Value":
        return Value(
            base=node_from_dict(data["base"]),
            properties=_list(data.get("properties")),
        )
    if node_type == "Obj":
        return Obj(properties=_list(data.get("properties")))
    if node_type == "Arr":
        return Arr(objects=_list(data.get("objects")))
    if node_type == "Param":
        return Param(name=node_from_dict(data["name"]), splat=data.get("splat", False))
    if node_type == "Block":
        return Block(expressions=_list(data.get("expressions")))
    if node_type == "Code":
        body = data.get("body")
        return Code(
            params=_list(data.get("params")),
            body=node_from_dict(body) if body else Block(),
            bound=data.get("bound", False),
        )
    if node_type == "Assign":
        return Assign(
            variable=node_from_dict(data["variable"]),
            value=node_from_dict(data["value"]),
        )
    if node_type == "Class":
        body = data.get("body")
        return Class(
            variable=_opt(data.get("variable")),
            parent=_opt(data.get("parent")),
            body=node_from_dict(body) if body else Block(),
        )
    if node_type == "Call":
        return Call(
            variable=node_from_dict(data["variable"]),
            args=_list(data.get("args")),
        )

    raise ValueError(f"Unknown node type: {node_type!r}")
