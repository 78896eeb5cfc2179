"""Data models for documented CoffeeScript modules.

Defines dataclasses for modules, classes, and functions as harvested
from a syntax tree. These models form the contract between the
documenter and whatever renders the documentation, and are frozen once
built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, Union

from coffeedoc.analysis.annotations import Annotation, Annotations, strip_annotations
from coffeedoc.analysis.docstring import ESCAPE_MARKER, normalize

Marker = Callable[[str], str]


@dataclass(frozen=True)
class FunctionDoc:
    """Documentation for a function or method.

    Attributes:
        name: Qualified function name.
        docstring: Normalized leading comment, or None.
        params: Rendered parameters in declaration order (``@name`` for
            this-bound shorthands, ``name...`` for variadics).
        annotations: Parsed ``@tag`` annotations, or None without a comment.
        raw_comment: The leading comment before normalization.
    """

    name: str
    docstring: Optional[str] = None
    params: list[str] = field(default_factory=list)
    annotations: Optional[Annotations] = None
    raw_comment: Optional[str] = field(default=None, repr=False)
    escape_marker: str = field(default=ESCAPE_MARKER, repr=False, compare=False)

    def annotation_free_docstring(
        self,
        marker: Union[Marker, Iterable[str], None] = None,
        filter_tags: Union[str, Iterable[str], None] = None,
    ) -> str:
        """Render the docstring with annotations removed.

        Accepts either ``(filter_tags)`` or ``(marker, filter_tags)``.

        Args:
            marker: Optional function applied to the normalized text, for
                example a Markdown renderer.
            filter_tags: Tags to remove, or a single tag; defaults to every
                tag present.

        Returns:
            The rendered text, or an empty string when the function has
            no leading comment.
        """
        if marker is not None and not callable(marker):
            marker, filter_tags = None, marker

        if self.raw_comment is None:
            return ""

        residual = strip_annotations(self.raw_comment, self.annotations, filter_tags)
        text = normalize(residual, self.escape_marker) or ""
        return marker(text) if marker else text

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this function.
        """
        annotations = None
        if self.annotations is not None:
            annotations = {
                tag: [a.to_dict() for a in occurrences]
                for tag, occurrences in self.annotations.items()
            }
        return {
            "name": self.name,
            "docstring": self.docstring,
            "params": self.params,
            "annotations": annotations,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FunctionDoc:
        """Deserialize from a dictionary.

        The raw comment is not serialized, so a restored function has no
        annotation-free rendering.

        Args:
            data: Dictionary with function fields.

        Returns:
            A new FunctionDoc instance.
        """
        annotations = data.get("annotations")
        if annotations is not None:
            annotations = {
                tag: [Annotation.from_dict(a) for a in occurrences]
                for tag, occurrences in annotations.items()
            }
        return cls(
            name=data["name"],
            docstring=data.get("docstring"),
            params=data.get("params", []),
            annotations=annotations,
        )


@dataclass(frozen=True)
class ClassDoc:
    """Documentation for a class.

    Attributes:
        name: Qualified class name.
        docstring: Normalized class comment, or None.
        parent: Qualified superclass name, or None.
        static_methods: Methods bound to the class itself (``@name:``).
        instance_methods: Public prototype methods.
        private_methods: Prototype methods named with a leading underscore.
    """

    name: str
    docstring: Optional[str] = None
    parent: Optional[str] = None
    static_methods: list[FunctionDoc] = field(default_factory=list)
    instance_methods: list[FunctionDoc] = field(default_factory=list)
    private_methods: list[FunctionDoc] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this class.
        """
        return {
            "name": self.name,
            "docstring": self.docstring,
            "parent": self.parent,
            "static_methods": [m.to_dict() for m in self.static_methods],
            "instance_methods": [m.to_dict() for m in self.instance_methods],
            "private_methods": [m.to_dict() for m in self.private_methods],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClassDoc:
        """Deserialize from a dictionary.

        Args:
            data: Dictionary with class fields.

        Returns:
            A new ClassDoc instance.
        """
        return cls(
            name=data["name"],
            docstring=data.get("docstring"),
            parent=data.get("parent"),
            static_methods=[
                FunctionDoc.from_dict(m) for m in data.get("static_methods", [])
            ],
            instance_methods=[
                FunctionDoc.from_dict(m) for m in data.get("instance_methods", [])
            ],
            private_methods=[
                FunctionDoc.from_dict(m) for m in data.get("private_methods", [])
            ],
        )


@dataclass(frozen=True)
class ModuleDoc:
    """Documentation for a whole script.

    Attributes:
        docstring: Normalized module comment, or None.
        deps: Dependencies exactly as reported by the tree accessor.
        classes: Top-level classes.
        functions: Top-level function assignments.
    """

    docstring: Optional[str] = None
    deps: list[Any] = field(default_factory=list)
    classes: list[ClassDoc] = field(default_factory=list)
    functions: list[FunctionDoc] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this module.
        """
        return {
            "docstring": self.docstring,
            "deps": [list(d) if isinstance(d, tuple) else d for d in self.deps],
            "classes": [c.to_dict() for c in self.classes],
            "functions": [f.to_dict() for f in self.functions],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModuleDoc:
        """Deserialize from a dictionary.

        Args:
            data: Dictionary with module fields.

        Returns:
            A new ModuleDoc instance.
        """
        return cls(
            docstring=data.get("docstring"),
            deps=list(data.get("deps", [])),
            classes=[ClassDoc.from_dict(c) for c in data.get("classes", [])],
            functions=[FunctionDoc.from_dict(f) for f in data.get("functions", [])],
        )
