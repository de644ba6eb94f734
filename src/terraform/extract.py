"""Extract pinned providers and referenced resource/data types.

Providers come from the ``provider`` blocks of ``.terraform.lock.hcl``;
type identifiers come from the ``resource`` and ``data`` blocks of every
configuration file. Both extractors report per-entry/per-file problems in
their result instead of raising, so one bad input never aborts the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Set, Tuple

from common.errors import HclParseError, LockfileParseError
from common.logging_utils import extra_context, is_debug_enabled
from versioning.models import ProviderRef
from .hcl import parse_hcl

logger = logging.getLogger(__name__)

TYPE_BLOCK_NAMES = ("resource", "data")


@dataclass(frozen=True)
class FileParseError:
    """A configuration file (or lock entry) that could not be used."""
    path: str
    message: str


@dataclass
class ProviderExtraction:
    """Providers read from a lock file plus the entries that were skipped."""
    providers: List[ProviderRef] = field(default_factory=list)
    errors: List[FileParseError] = field(default_factory=list)


@dataclass
class TypeScan:
    """Union of type identifiers across files plus per-file failures."""
    identifiers: Set[str] = field(default_factory=set)
    errors: List[FileParseError] = field(default_factory=list)
    parsed_files: int = 0

    def sorted_identifiers(self) -> List[str]:
        return sorted(self.identifiers)


def parse_provider_address(address: str) -> Tuple[str, str]:
    """Split ``hostname/vendor/name`` into ``(vendor, name)``.

    Raises:
        LockfileParseError: If the address has fewer than three segments.
    """
    segments = address.split("/")
    if len(segments) < 3 or not segments[1] or not segments[2]:
        raise LockfileParseError(f"Malformed provider address '{address}'")
    return segments[1], segments[2]


def extract_providers(lock_text: str, source: str = ".terraform.lock.hcl") -> ProviderExtraction:
    """Read every ``provider`` block from a lock file.

    Args:
        lock_text: Raw lock file contents.
        source: Path used when reporting malformed entries.

    Returns:
        ProviderExtraction with providers in document order.

    Raises:
        LockfileParseError: If the document itself is not valid HCL.
    """
    try:
        root = parse_hcl(lock_text)
    except HclParseError as exc:
        raise LockfileParseError(f"{source}: {exc}") from exc

    result = ProviderExtraction()
    for block in root.find("provider"):
        try:
            vendor, name = parse_provider_address(block.value)
            version = block.first("version")
            if version is None or not version.value:
                raise LockfileParseError(f"Provider '{block.value}' has no version")
        except LockfileParseError as exc:
            result.errors.append(FileParseError(path=source, message=str(exc)))
            continue
        result.providers.append(ProviderRef(vendor=vendor, name=name, pinned_version=version.value))

    if is_debug_enabled(logger):
        logger.debug(
            "Extracted providers",
            extra=extra_context(
                event="parse",
                component="extract",
                action="extract_providers",
                count=len(result.providers),
                errors=len(result.errors)
            )
        )
    return result


def type_identifiers(text: str) -> Set[str]:
    """Return the type names of the top-level resource/data blocks in ``text``.

    Raises:
        HclParseError: If the text is not valid HCL.
    """
    root = parse_hcl(text)
    return {
        block.value
        for block in root.children
        if block.name in TYPE_BLOCK_NAMES and block.value
    }


def extract_type_identifiers(sources: Mapping[str, str]) -> TypeScan:
    """Union the resource/data type identifiers across configuration files.

    Args:
        sources: Mapping of file path to raw contents; each file is parsed
            independently.

    Returns:
        TypeScan; files that fail to parse are listed in ``errors`` and
        contribute nothing.
    """
    scan = TypeScan()
    for path, text in sources.items():
        try:
            found = type_identifiers(text)
        except HclParseError as exc:
            scan.errors.append(FileParseError(path=path, message=str(exc)))
            continue
        scan.parsed_files += 1
        scan.identifiers |= found
    return scan
