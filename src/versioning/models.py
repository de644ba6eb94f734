"""Data models for providers, releases and per-provider results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

import semantic_version

from constants import Constants


@dataclass(frozen=True)
class ProviderRef:
    """A provider pinned in the lock file. Identity is (vendor, name)."""
    vendor: str
    name: str
    pinned_version: str

    @property
    def key(self) -> Tuple[str, str]:
        return self.vendor, self.name

    @property
    def registry_url(self) -> str:
        return Constants.REGISTRY_PROVIDER_PAGE.format(vendor=self.vendor, name=self.name)

    def __str__(self) -> str:
        return f"{self.vendor}/{self.name}"


@dataclass(frozen=True)
class ResolvedProvider:
    """A provider whose upstream source repository is known."""
    ref: ProviderRef
    repo_org: str
    repo_name: str

    @property
    def vendor(self) -> str:
        return self.ref.vendor

    @property
    def name(self) -> str:
        return self.ref.name

    @property
    def pinned_version(self) -> str:
        return self.ref.pinned_version

    @property
    def repo_url(self) -> str:
        return f"{Constants.GITHUB_WEB_BASE}/{self.repo_org}/{self.repo_name}"


@dataclass(frozen=True)
class Release:
    """An upstream release as published by the hosting service."""
    tag_name: str
    version: semantic_version.Version
    created_at: Optional[datetime]
    body: str


@dataclass(frozen=True)
class HighlightedLine:
    """One release-note line, tagged relevant when it names a tracked type."""
    text: str
    relevant: bool = False


@dataclass(frozen=True)
class ApplicableRelease:
    """A release newer than the pinned version, with its annotated notes."""
    release: Release
    lines: Tuple[HighlightedLine, ...] = ()

    @property
    def relevant_count(self) -> int:
        return sum(1 for line in self.lines if line.relevant)


class SkipReason(Enum):
    """Why a provider was dropped from downstream processing."""
    REGISTRY_NOT_FOUND = "registry_not_found"
    REGISTRY_TRANSPORT_ERROR = "registry_transport_error"
    REGISTRY_MALFORMED_RESPONSE = "registry_malformed_response"
    INVALID_SOURCE_URL = "invalid_source_url"
    INVALID_PINNED_VERSION = "invalid_pinned_version"
    RELEASES_UNAVAILABLE = "releases_unavailable"


@dataclass(frozen=True)
class ResolutionResult:
    """Upstream resolution outcome: a resolved provider or a skip reason."""
    provider: ProviderRef
    resolved: Optional[ResolvedProvider] = None
    skip_reason: Optional[SkipReason] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.resolved is not None


@dataclass(frozen=True)
class ProviderReport:
    """Release diff outcome for one resolved provider."""
    provider: ResolvedProvider
    releases: Tuple[ApplicableRelease, ...] = field(default_factory=tuple)
    skip_reason: Optional[SkipReason] = None
    detail: str = ""

    @property
    def skipped(self) -> bool:
        return self.skip_reason is not None

    @property
    def up_to_date(self) -> bool:
        return not self.skipped and not self.releases

    @property
    def latest(self) -> Optional[Release]:
        if not self.releases:
            return None
        return self.releases[-1].release
