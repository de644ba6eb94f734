"""Select the upstream releases that are newer than a pinned version."""

import functools
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

import semantic_version

from common.errors import InvalidVersionError
from common.logging_utils import extra_context, is_debug_enabled
from .models import Release
from .parser import parse_version

logger = logging.getLogger(__name__)


def is_applicable(candidate: semantic_version.Version, pinned: semantic_version.Version) -> bool:
    """Return True when ``candidate`` sort-orders strictly above ``pinned``."""
    return candidate > pinned


def _compare(a: Release, b: Release) -> int:
    # Precedence first; equal-precedence tags (build metadata only) by name.
    if a.version < b.version:
        return -1
    if b.version < a.version:
        return 1
    if a.tag_name < b.tag_name:
        return -1
    if a.tag_name > b.tag_name:
        return 1
    return 0


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def releases_from_api(items: Iterable[Dict[str, Any]]) -> List[Release]:
    """Build Release objects from hosting API dicts.

    Items whose tag is not a semantic version are dropped (DEBUG trace only),
    as are drafts, which have no published tag.
    """
    releases = []
    for item in items:
        if not isinstance(item, dict) or item.get("draft"):
            continue
        tag = str(item.get("tag_name") or "")
        version = parse_version(tag)
        if version is None:
            if is_debug_enabled(logger):
                logger.debug(
                    "Skipping unparseable release tag",
                    extra=extra_context(
                        event="decision",
                        component="differ",
                        action="releases_from_api",
                        outcome="unparseable_tag",
                        tag=tag
                    )
                )
            continue
        releases.append(Release(
            tag_name=tag,
            version=version,
            created_at=_parse_timestamp(item.get("created_at")),
            body=item.get("body") or "",
        ))
    return releases


def sort_releases(releases: Iterable[Release]) -> List[Release]:
    """Sort releases ascending by semantic version precedence."""
    return sorted(releases, key=functools.cmp_to_key(_compare))


def applicable_releases(pinned_version: str, releases: Iterable[Release]) -> List[Release]:
    """Return releases strictly newer than ``pinned_version``, oldest first.

    Args:
        pinned_version: Version string from the lock file.
        releases: Upstream releases in any order.

    Returns:
        Ascending list; empty when the provider is up to date.

    Raises:
        InvalidVersionError: If ``pinned_version`` is not a semantic version.
    """
    pinned = parse_version(pinned_version)
    if pinned is None:
        raise InvalidVersionError(pinned_version)

    newer = [r for r in releases if is_applicable(r.version, pinned)]
    if is_debug_enabled(logger):
        logger.debug(
            "Filtered releases",
            extra=extra_context(
                event="decision",
                component="differ",
                action="applicable_releases",
                pinned=str(pinned),
                count=len(newer)
            )
        )
    return sort_releases(newer)
