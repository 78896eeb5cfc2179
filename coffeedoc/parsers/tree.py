"""Tree accessors that locate documentable nodes in a parsed script.

A parser here does not tokenize anything: it receives a finished tree
(a ``Block`` or its serialized mapping) and answers the four questions
the documenter asks of it. The module-system flavour decides where the
module body lives and how dependencies are declared.
"""

import logging
from typing import Any, Optional, Union

from coffeedoc.parsers.nodes import (
    Arr,
    Assign,
    Block,
    Call,
    Class,
    Code,
    Comment,
    Literal,
    Node,
    Value,
    node_from_dict,
    qualified_name,
    unwrap,
)

logger = logging.getLogger(__name__)

Tree = Union[Block, dict[str, Any]]


def _strip_quotes(text: str) -> str:
    return text.replace("'", "").replace('"', "")


def _local_name(node: Node) -> str:
    # destructuring targets such as `{a, b} = require "x"` have no single name
    base = node.base if isinstance(node, Value) else node
    if not isinstance(base, Literal):
        return ""
    return qualified_name(node)


class BaseParser:
    """Shared accessor logic; subclasses decide how dependencies look."""

    def get_nodes(self, tree: Tree) -> list[Node]:
        """Return the top-level statements of a parsed script.

        Args:
            tree: The root ``Block`` or its serialized mapping.

        Returns:
            Top-level statements in source order.

        Raises:
            TypeError: If the root is not a ``Block``.
        """
        root = node_from_dict(tree) if isinstance(tree, dict) else tree
        if not isinstance(root, Block):
            raise TypeError(f"Expected a Block at the root, got {type(root).__name__}")
        return list(root.expressions)

    def get_classes(self, nodes: list[Node]) -> list[Node]:
        """Select class declarations, including ``Foo = class Foo`` forms."""
        classes = []
        for node in nodes:
            if isinstance(node, Class):
                classes.append(node)
            elif isinstance(node, Assign) and isinstance(unwrap(node.value), Class):
                classes.append(node)
        return classes

    def get_functions(self, nodes: list[Node]) -> list[Node]:
        """Select ``name = (args) ->`` function assignments."""
        return [
            n for n in nodes if isinstance(n, Assign) and isinstance(n.value, Code)
        ]

    def get_dependencies(self, nodes: list[Node]) -> list[Any]:
        """Return the module's dependencies. The base parser knows none."""
        return []


class CommonJSParser(BaseParser):
    """Accessors for CommonJS modules (``name = require('path')``)."""

    def get_dependencies(self, nodes: list[Node]) -> list[tuple[str, str]]:
        """Collect ``(local_name, module_path)`` pairs for each require.

        Args:
            nodes: Top-level statements from ``get_nodes``.

        Returns:
            Dependency pairs in source order.
        """
        deps = []
        for node in nodes:
            if not isinstance(node, Assign):
                continue
            call = unwrap(node.value)
            if not isinstance(call, Call) or not call.args:
                continue
            if not isinstance(call.variable, (Literal, Value)):
                continue
            if qualified_name(call.variable) != "require":
                continue
            path = unwrap(call.args[0])
            if isinstance(path, Literal):
                deps.append((_local_name(node.variable), _strip_quotes(path.value)))
        return deps


class RequireJSParser(BaseParser):
    """Accessors for AMD modules wrapped in ``define [deps], (args) ->``."""

    def get_nodes(self, tree: Tree) -> list[Node]:
        """Return the statements of the ``define`` callback body.

        A comment preceding the ``define`` call is kept as the first node
        so it still documents the module, and the ``define`` call itself
        is kept last so ``get_dependencies`` can read it. Scripts without
        a ``define`` call are handled like plain scripts.
        """
        top = super().get_nodes(tree)
        define = self._find_define(top)
        if define is None:
            logger.debug("No define() call found, treating script as a plain module")
            return top

        callback = unwrap(define.args[-1])
        nodes: list[Node] = list(callback.body.expressions)
        if top and isinstance(top[0], Comment):
            nodes.insert(0, top[0])
        nodes.append(define)
        return nodes

    def get_dependencies(self, nodes: list[Node]) -> list[tuple[str, str]]:
        """Pair each ``define`` callback parameter with its module path.

        Args:
            nodes: Statements from ``get_nodes``.

        Returns:
            ``(param_name, module_path)`` pairs; paths without a matching
            parameter are paired with an empty name.
        """
        define = self._find_define(nodes)
        if define is None or len(define.args) < 2:
            return []

        paths = unwrap(define.args[0])
        callback = unwrap(define.args[-1])
        names = [_local_name(p.name) for p in callback.params]

        deps = []
        if isinstance(paths, Arr):
            for index, item in enumerate(paths.objects):
                item = unwrap(item)
                if not isinstance(item, Literal):
                    continue
                name = names[index] if index < len(names) else ""
                deps.append((name, _strip_quotes(item.value)))
        return deps

    @staticmethod
    def _find_define(nodes: list[Node]) -> Optional[Call]:
        for node in nodes:
            call = unwrap(node)
            if not isinstance(call, Call) or not call.args:
                continue
            if not isinstance(call.variable, (Literal, Value)):
                continue
            if qualified_name(call.variable) != "define":
                continue
            if isinstance(unwrap(call.args[-1]), Code):
                return call
        return None


_PARSERS = {
    "commonjs": CommonJSParser,
    "requirejs": RequireJSParser,
}


def get_parser(style: str = "commonjs") -> BaseParser:
    """Create a tree accessor for a module system.

    Args:
        style: ``"commonjs"`` or ``"requirejs"``.

    Returns:
        A parser instance.

    Raises:
        ValueError: If the style is not supported.
    """
    try:
        return _PARSERS[style.lower()]()
    except KeyError:
        raise ValueError(
            f"Unsupported module style {style!r}; expected one of {sorted(_PARSERS)}"
        ) from None
