"""Exception types shared across the extractor, differ and CLI."""
from __future__ import annotations


class TFWhatsUpError(Exception):
    """Base class for anticipated failures."""


class HclParseError(TFWhatsUpError):
    """Raised when an HCL document cannot be parsed."""


class LockfileParseError(TFWhatsUpError):
    """Raised when the lock file, or one provider entry in it, is malformed."""


class InvalidVersionError(TFWhatsUpError):
    """Raised when a pinned version string is not a semantic version."""

    def __init__(self, version: str):
        super().__init__(f"'{version}' is not a valid semantic version")
        self.version = version
