"""Parsing of ``@tag value`` annotations embedded in doc comments.

An annotation starts on a line whose first non-blank character is the
tag marker. Following lines indented deeper than the marker continue
the annotation; the first line that is not terminates it and may start
the next one::

    Renders the view.
    @param el the element to render into,
      defaults to the body
    @return the view

The raw text of every occurrence is kept so the annotations can later
be removed verbatim from the comment.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional, Union

from coffeedoc.analysis.docstring import leading_whitespace

logger = logging.getLogger(__name__)

TAG_MARKER = "@"


@dataclass
class Annotation:
    """A single occurrence of an annotation.

    Attributes:
        value: Continuation-joined text with whitespace runs collapsed.
        raw_value: The exact source lines, each with its trailing newline.
    """

    value: str
    raw_value: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this annotation.
        """
        return {"value": self.value, "raw_value": self.raw_value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Annotation":
        """Deserialize from a dictionary.

        Args:
            data: Dictionary with annotation fields.

        Returns:
            A new Annotation instance.
        """
        return cls(value=data.get("value", ""), raw_value=data.get("raw_value", ""))


Annotations = dict[str, list[Annotation]]


class _State(Enum):
    SCANNING = "scanning"
    IN_ANNOTATION = "in_annotation"


@dataclass
class _PendingAnnotation:
    """The annotation being accumulated while in the IN_ANNOTATION state."""

    tag: str
    base_indent: int
    parts: list[str] = field(default_factory=list)
    raw_lines: list[str] = field(default_factory=list)

    def extend(self, line: str) -> None:
        self.parts.append(line.strip())
        self.raw_lines.append(line + "\n")

    def finish(self) -> Annotation:
        return Annotation(
            value=" ".join(" ".join(self.parts).split()),
            raw_value="".join(self.raw_lines),
        )


def _start_annotation(line: str, tag_marker: str) -> Optional[_PendingAnnotation]:
    stripped = line.lstrip()
    if not stripped.startswith(tag_marker):
        return None

    rest = stripped[len(tag_marker):]
    # a bare marker, or one followed by whitespace, names no tag
    if not rest or rest[0].isspace():
        return None

    tag, *initial = rest.split(None, 1)
    pending = _PendingAnnotation(tag=tag, base_indent=leading_whitespace(line))
    pending.parts.append(initial[0].strip() if initial else "")
    pending.raw_lines.append(line + "\n")
    return pending


def parse_annotations(
    raw_comment: Optional[str], tag_marker: str = TAG_MARKER
) -> Optional[Annotations]:
    """Collect the annotations of a raw comment.

    Args:
        raw_comment: Comment text before normalization, or None.
        tag_marker: Character that introduces an annotation.

    Returns:
        Mapping of tag name to its occurrences in source order (empty if
        the comment has no annotations), or None when there is no comment.
    """
    if raw_comment is None:
        return None

    annotations: Annotations = {}
    state = _State.SCANNING
    pending: Optional[_PendingAnnotation] = None

    for line in raw_comment.split("\n"):
        if state is _State.IN_ANNOTATION:
            if leading_whitespace(line) > pending.base_indent:
                pending.extend(line)
                continue
            annotations.setdefault(pending.tag, []).append(pending.finish())
            pending = None
            state = _State.SCANNING

        pending = _start_annotation(line, tag_marker)
        if pending is not None:
            state = _State.IN_ANNOTATION

    if pending is not None:
        annotations.setdefault(pending.tag, []).append(pending.finish())

    logger.debug("Parsed annotations: %s", sorted(annotations))
    return annotations


def strip_annotations(
    raw_comment: str,
    annotations: Optional[Annotations],
    filter_tags: Optional[Union[str, Iterable[str]]] = None,
) -> str:
    """Remove annotation occurrences from a raw comment.

    Args:
        raw_comment: Comment text before normalization.
        annotations: Result of ``parse_annotations`` for the same comment.
        filter_tags: Tags to remove, or a single tag; defaults to every
            tag present.

    Returns:
        The residual raw comment, ready for normalization.
    """
    if not annotations:
        return raw_comment

    # every captured line carries a newline, including the comment's last one
    padded = not raw_comment.endswith("\n")
    text = raw_comment + "\n" if padded else raw_comment

    if isinstance(filter_tags, str):
        filter_tags = [filter_tags]
    tags = list(annotations) if filter_tags is None else list(filter_tags)
    for tag in tags:
        for occurrence in annotations.get(tag, []):
            text = text.replace(occurrence.raw_value, "", 1)

    if padded and text.endswith("\n"):
        text = text[:-1]
    return text
