"""Docstring normalization for raw block comments.

Block comments keep the indentation they had in the source file. This
module strips that indentation while preserving the relative layout of
nested content such as code samples and lists.
"""

from typing import Optional

ESCAPE_MARKER = "#"


def leading_whitespace(line: str) -> int:
    """Return the length of a line's leading whitespace run."""
    return len(line) - len(line.lstrip())


def normalize(raw: str, escape_marker: str = ESCAPE_MARKER) -> Optional[str]:
    """Dedent a raw comment into a docstring.

    Backslash-escaped markers (``\\#``) are unescaped, leading blank
    lines are dropped, and the smallest indentation shared by the
    non-blank lines is removed from every line.

    Args:
        raw: The comment text as it appears between the comment markers.
        escape_marker: The character that may be escaped with a backslash
            so it can appear literally inside block comments.

    Returns:
        The normalized docstring, or None if the comment has no content.
    """
    text = raw.replace("\\" + escape_marker, escape_marker)
    lines = text.split("\n")

    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        return None

    indent = min(leading_whitespace(line) for line in lines if line.strip())
    return "\n".join(line[indent:] for line in lines)
