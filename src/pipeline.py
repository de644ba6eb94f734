"""Per-provider pipeline: resolve upstream, diff releases, highlight notes.

Each provider's result is computed independently and returned as a value
(``ResolutionResult`` / ``ProviderReport``); callers inspect the variant
instead of catching exceptions. Both stages fan out over a thread pool and
yield results in input order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator, List, Sequence

from constants import Constants
from common.errors import InvalidVersionError
from common.logging_utils import extra_context, is_debug_enabled
from output.highlight import highlight_body
from registry.terraform import TerraformRegistryClient
from repository.github import GitHubClient
from versioning.differ import applicable_releases, releases_from_api
from versioning.models import (
    ApplicableRelease,
    ProviderRef,
    ProviderReport,
    ResolutionResult,
    ResolvedProvider,
    SkipReason,
)

logger = logging.getLogger(__name__)


def build_report(
    provider: ResolvedProvider,
    github: GitHubClient,
    identifiers: Sequence[str],
) -> ProviderReport:
    """Diff and highlight one resolved provider."""
    raw = github.get_releases(provider.repo_org, provider.repo_name)
    if raw is None:
        return ProviderReport(
            provider=provider,
            skip_reason=SkipReason.RELEASES_UNAVAILABLE,
            detail=f"could not list releases for {provider.repo_org}/{provider.repo_name}",
        )

    try:
        newer = applicable_releases(provider.pinned_version, releases_from_api(raw))
    except InvalidVersionError as exc:
        return ProviderReport(
            provider=provider,
            skip_reason=SkipReason.INVALID_PINNED_VERSION,
            detail=f"pinned version of '{provider.name}' is unusable: {exc}",
        )

    if is_debug_enabled(logger):
        logger.debug(
            "Built provider report",
            extra=extra_context(
                event="function_exit",
                component="pipeline",
                action="build_report",
                provider=f"{provider.vendor}/{provider.name}",
                count=len(newer)
            )
        )
    return ProviderReport(
        provider=provider,
        releases=tuple(
            ApplicableRelease(release=r, lines=tuple(highlight_body(r.body, identifiers)))
            for r in newer
        ),
    )


def _workers(max_workers: int, count: int) -> int:
    return max(1, min(max_workers or Constants.MAX_WORKERS, count or 1))


def resolve_all(
    refs: Sequence[ProviderRef],
    registry: TerraformRegistryClient,
    max_workers: int = Constants.MAX_WORKERS,
) -> List[ResolutionResult]:
    """Resolve every provider concurrently; results follow ``refs`` order."""
    if not refs:
        return []
    with ThreadPoolExecutor(max_workers=_workers(max_workers, len(refs))) as executor:
        return list(executor.map(registry.resolve, refs))


def report_all(
    providers: Sequence[ResolvedProvider],
    github: GitHubClient,
    identifiers: Iterable[str],
    max_workers: int = Constants.MAX_WORKERS,
) -> Iterator[ProviderReport]:
    """Yield a report per provider, in order, as soon as each is ready."""
    if not providers:
        return
    idents = sorted(set(identifiers))
    with ThreadPoolExecutor(max_workers=_workers(max_workers, len(providers))) as executor:
        futures = [executor.submit(build_report, p, github, idents) for p in providers]
        for future in futures:
            yield future.result()
