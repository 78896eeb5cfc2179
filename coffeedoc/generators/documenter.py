"""Harvests documentation from CoffeeScript syntax trees.

Walks the module, class, and function nodes handed over by a tree
accessor, attaches each declaration's leading block comment as its
docstring, and sorts class members into static, instance, and private
groups.
"""

import logging
from typing import Any, Optional

from coffeedoc.analysis.annotations import parse_annotations
from coffeedoc.analysis.docstring import normalize
from coffeedoc.parsers.nodes import (
    Arr,
    Assign,
    Call,
    Class,
    Code,
    Comment,
    Literal,
    Node,
    Obj,
    Param,
    Value,
    qualified_name,
    unwrap,
)
from coffeedoc.parsers.structure import ClassDoc, FunctionDoc, ModuleDoc
from coffeedoc.parsers.tree import BaseParser, get_parser
from coffeedoc.utils.config import DocConfig

logger = logging.getLogger(__name__)

# CoffeeScript's shorthand for a this-bound parameter, e.g. (@name) ->
THIS_SHORTHAND = "@"


class Documenter:
    """Builds ModuleDoc, ClassDoc, and FunctionDoc objects from nodes.

    The documenter holds no per-tree state, so one instance can document
    any number of trees, from any number of threads.
    """

    def __init__(self, config: Optional[DocConfig] = None) -> None:
        """Initialize the documenter.

        Args:
            config: Markers and naming conventions; defaults to DocConfig().
        """
        self.config = config or DocConfig()

    def document_module(
        self, script: Any, parser: Optional[BaseParser] = None
    ) -> ModuleDoc:
        """Document a whole script.

        Args:
            script: The parsed tree, in whatever form the parser accepts.
            parser: Tree accessor; defaults to the configured module style.

        Returns:
            The module documentation.
        """
        if parser is None:
            parser = get_parser(self.config.dependency_style)

        nodes = parser.get_nodes(script)
        first = nodes[0] if nodes else None

        module = ModuleDoc(
            docstring=self._docstring(first),
            deps=parser.get_dependencies(nodes),
            classes=[self.document_class(c) for c in parser.get_classes(nodes)],
            functions=[
                self.document_function(f) for f in parser.get_functions(nodes)
            ],
        )

        logger.debug(
            "Documented module: %d classes, %d functions, %d dependencies",
            len(module.classes),
            len(module.functions),
            len(module.deps),
        )
        return module

    def document_class(self, node: Node) -> ClassDoc:
        """Document a class declaration.

        Args:
            node: A ``Class`` node, or an ``Assign`` whose value is a class.

        Returns:
            The class documentation.

        Raises:
            TypeError: If the node does not hold a class.
        """
        cls = unwrap(node.value) if isinstance(node, Assign) else node
        if not isinstance(cls, Class):
            raise TypeError(f"Expected a class node, got {type(cls).__name__}")

        expressions = cls.body.expressions
        static: list[FunctionDoc] = []
        instance: list[FunctionDoc] = []
        private: list[FunctionDoc] = []

        for expr in expressions:
            obj = unwrap(expr)
            if isinstance(obj, Obj):
                for entry in obj.properties:
                    if not _is_function_assign(entry):
                        continue
                    if _is_this_bound(entry.variable):
                        static.append(self._document_static(entry))
                    elif self._is_private(entry.variable):
                        private.append(self.document_function(entry))
                    else:
                        instance.append(self.document_function(entry))
            elif _is_function_assign(expr):
                # non-this-bound assignments are locals of the class body
                if _is_this_bound(expr.variable):
                    static.append(self._document_static(expr))
            elif not isinstance(expr, Comment):
                logger.debug(
                    "Skipping unclassified class body statement: %s",
                    type(expr).__name__,
                )

        name = qualified_name(cls.variable) if cls.variable is not None else ""
        return ClassDoc(
            name=name,
            docstring=self._class_docstring(expressions),
            parent=_parent_name(cls.parent),
            static_methods=static,
            instance_methods=instance,
            private_methods=private,
        )

    def document_function(self, node: Node) -> FunctionDoc:
        """Document a function assignment.

        Args:
            node: An ``Assign`` whose value is a ``Code`` node.

        Returns:
            The function documentation.

        Raises:
            TypeError: If the node is not a function assignment.
        """
        if not _is_function_assign(node):
            raise TypeError(
                f"Expected a function assignment, got {type(node).__name__}"
            )
        return self._document_code(qualified_name(node.variable), node.value)

    def _is_private(self, variable: Node) -> bool:
        return _member_name(variable).startswith(self.config.private_prefix)

    def _document_static(self, node: Assign) -> FunctionDoc:
        # the name is the property chain after the bound self reference
        name = ".".join(p.name for p in node.variable.properties)
        return self._document_code(name, node.value)

    def _document_code(self, name: str, code: Code) -> FunctionDoc:
        body = code.body.expressions
        first = body[0] if body else None
        raw_comment = first.comment if isinstance(first, Comment) else None

        return FunctionDoc(
            name=name,
            docstring=self._docstring(first),
            params=[self._render_param(p) for p in code.params],
            annotations=parse_annotations(raw_comment, self.config.tag_marker),
            raw_comment=raw_comment,
            escape_marker=self.config.escape_marker,
        )

    def _render_param(self, param: Param) -> str:
        name = param.name
        if isinstance(name, Value) and name.this and name.properties:
            return THIS_SHORTHAND + name.properties[0].name
        rendered = _pattern_name(name)
        if param.splat:
            rendered += self.config.splat_suffix
        return rendered

    def _class_docstring(self, expressions: list[Node]) -> Optional[str]:
        if len(expressions) > 1:
            return self._docstring(expressions[0])
        if not expressions:
            return None

        # a one-statement body nests the comment inside its object literal
        only = expressions[0]
        obj = unwrap(only)
        if isinstance(obj, Obj) and obj.properties:
            return self._docstring(obj.properties[0])
        return self._docstring(only)

    def _docstring(self, node: Optional[Node]) -> Optional[str]:
        if not isinstance(node, Comment):
            return None
        return normalize(node.comment, self.config.escape_marker)


def _is_function_assign(node: Node) -> bool:
    return isinstance(node, Assign) and isinstance(node.value, Code)


def _is_this_bound(variable: Node) -> bool:
    return isinstance(variable, Value) and variable.this


def _parent_name(node: Optional[Node]) -> Optional[str]:
    if node is None:
        return None
    target = unwrap(node)
    # `extends mixin(Base)` names the class factory
    if isinstance(target, Call):
        target = target.variable
    try:
        return qualified_name(target)
    except TypeError:
        logger.debug("Unnamed superclass expression: %s", type(target).__name__)
        return None


def _member_name(variable: Node) -> str:
    base = variable.base if isinstance(variable, Value) else variable
    return qualified_name(base) if isinstance(base, Literal) else ""


def _pattern_name(node: Node) -> str:
    if isinstance(node, Obj):
        return "{" + ", ".join(_pattern_name(p) for p in node.properties) + "}"
    if isinstance(node, Arr):
        return "[" + ", ".join(_pattern_name(o) for o in node.objects) + "]"
    if isinstance(node, Assign):
        return _pattern_name(node.variable)
    return qualified_name(node)


_default_documenter = Documenter()


def document_module(script: Any, parser: Optional[BaseParser] = None) -> ModuleDoc:
    """Document a whole script with the default configuration."""
    return _default_documenter.document_module(script, parser)


def document_class(node: Node) -> ClassDoc:
    """Document a class node with the default configuration."""
    return _default_documenter.document_class(node)


def document_function(node: Node) -> FunctionDoc:
    """Document a function assignment with the default configuration."""
    return _default_documenter.document_function(node)
