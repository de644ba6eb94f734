"""Repository URL normalization.

Turns a provider's registry ``source`` URL into an (org, repo) reference.
"""
from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit


@dataclass(frozen=True)
class RepoRef:
    """Normalized repository reference."""
    org: str
    repo: str
    host: str = "github.com"

    def __str__(self) -> str:
        return f"{self.org}/{self.repo}"


def parse_repo_source(url: str) -> RepoRef:
    """Parse an absolute repository URL into a RepoRef.

    The first two path segments are the organization and repository; a
    trailing ``.git`` is dropped.

    Raises:
        ValueError: If ``url`` is not absolute or lacks two path segments.
    """
    if not isinstance(url, str) or not url.strip():
        raise ValueError("empty source URL")
    parts = urlsplit(url.strip())
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"'{url}' is not an absolute URL")
    segments = [s for s in parts.path.split("/") if s]
    if len(segments) < 2:
        raise ValueError(f"'{url}' does not name an organization and repository")
    repo = segments[1]
    if repo.endswith(".git"):
        repo = repo[:-len(".git")]
    if not repo:
        raise ValueError(f"'{url}' has an empty repository name")
    return RepoRef(org=segments[0], repo=repo, host=parts.hostname or parts.netloc)
