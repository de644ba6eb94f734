"""GitHub API client for release listings.

Provides a lightweight REST client for fetching every release of a
repository, following ``Link`` header pagination.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Dict, Any

from requests.utils import parse_header_links

from constants import Constants
from common.http_client import get_json, TRANSPORT_FAILURE

logger = logging.getLogger(__name__)

_RATE_LIMITED = (403, 429)


class GitHubClient:
    """Lightweight REST client for GitHub API operations.

    Supports optional authentication via token; a token raises the rate
    limit but does not change results.
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None):
        """Initialize GitHub client.

        Args:
            base_url: Base URL for GitHub API (defaults to Constants.GITHUB_API_BASE)
            token: GitHub personal access token, or None for anonymous access
        """
        self.base_url = (base_url or Constants.GITHUB_API_BASE).rstrip("/")
        self.token = token or None

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def get_releases(self, owner: str, repo: str) -> Optional[List[Dict[str, Any]]]:
        """Fetch repository releases with pagination.

        Args:
            owner: Repository owner/organization
            repo: Repository name

        Returns:
            List of release dictionaries, or None if any page failed
        """
        return self._get_paginated_results(
            f"{self.base_url}/repos/{owner}/{repo}/releases?per_page={Constants.REPO_API_PER_PAGE}"
        )

    def _get_paginated_results(self, url: str) -> Optional[List[Dict[str, Any]]]:
        """Fetch all pages of a paginated endpoint.

        Args:
            url: URL of the first page

        Returns:
            List of all results across pages, or None on failure
        """
        results: List[Dict[str, Any]] = []
        current_url: Optional[str] = url

        while current_url:
            status, headers, data = get_json(current_url, headers=self._get_headers())

            if status != 200:
                self._log_failure(status, headers, current_url)
                return None
            if not isinstance(data, list):
                logger.debug("Unexpected release payload from %s", current_url)
                return None

            results.extend(data)
            current_url = self._get_next_page(headers)

        return results

    def _log_failure(self, status: int, headers: Dict[str, str], url: str) -> None:
        if status == TRANSPORT_FAILURE:
            logger.debug("GitHub request failed without a response: %s", url)
            return
        remaining = self._header(headers, "x-ratelimit-remaining")
        if status in _RATE_LIMITED and remaining == "0" and not self.token:
            logger.warning(
                "GitHub API rate limit reached; pass --github-api-token or set %s",
                Constants.ENV_GITHUB_TOKEN,
            )
        logger.debug("GitHub returned HTTP %s for %s", status, url)

    @staticmethod
    def _header(headers: Dict[str, str], name: str) -> Optional[str]:
        for key, value in headers.items():
            if key.lower() == name:
                return value
        return None

    def _get_next_page(self, headers: Dict[str, str]) -> Optional[str]:
        """Extract the rel="next" URL from the Link header.

        Args:
            headers: Response headers

        Returns:
            Next page URL or None
        """
        link = self._header(headers, "link")
        if not link:
            return None
        for entry in parse_header_links(link):
            if entry.get("rel") == "next" and entry.get("url"):
                return entry["url"]
        return None
