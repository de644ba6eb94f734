"""Permissive semantic version parsing for pinned versions and release tags."""

from typing import Optional

import semantic_version


def _strip_prefix(text: str) -> str:
    s = text.strip()
    if s[:1] in ("v", "V"):
        s = s[1:]
    return s


def parse_version(text: Optional[str]) -> Optional[semantic_version.Version]:
    """Parse ``text`` as a semantic version, or return None.

    Tolerates a leading ``v`` and non-strict forms such as ``1.2`` or
    ``1.2.3.4``: strict SemVer 2.0 is tried first, then coercion.
    """
    if not text:
        return None
    s = _strip_prefix(text)
    if not s:
        return None
    try:
        return semantic_version.Version(s)
    except ValueError:
        pass
    try:
        return semantic_version.Version.coerce(s)
    except ValueError:
        return None
