"""Tag release-note lines that mention tracked resource/data types.

Matching is a case-sensitive substring test with no word boundaries, so an
identifier that is a prefix of another (``aws_s3_bucket`` inside
``aws_s3_bucket_policy``) also matches.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List

from rich.markup import escape

from constants import Constants
from versioning.models import HighlightedLine


class StyleMode(Enum):
    """How relevant lines are emphasized."""
    DEFAULT = "default"
    CAPS = "caps"

    @classmethod
    def from_flag(cls, caps_style: bool) -> "StyleMode":
        return cls.CAPS if caps_style else cls.DEFAULT


def is_relevant(line: str, identifiers: Iterable[str]) -> bool:
    return any(ident and ident in line for ident in identifiers)


def highlight_body(body: str, identifiers: Iterable[str]) -> List[HighlightedLine]:
    """Split ``body`` on newlines and tag each line.

    Line order and count are preserved; carriage returns are left in place.
    """
    idents = [i for i in identifiers if i]
    return [
        HighlightedLine(text=line, relevant=bool(line) and is_relevant(line, idents))
        for line in (body or "").split("\n")
    ]


def style_line(line: HighlightedLine, mode: StyleMode) -> str:
    """Render one line as rich markup."""
    if not line.relevant:
        return escape(line.text)
    if mode is StyleMode.CAPS:
        return escape(Constants.CAPS_MARKER + line.text.upper())
    return f"[bold yellow]{escape(line.text)}[/]"


def style_body(lines: Iterable[HighlightedLine], mode: StyleMode) -> str:
    return "\n".join(style_line(line, mode) for line in lines)
