"""Terraform registry client: map a provider to its upstream source repository."""

from __future__ import annotations

import logging
from typing import Optional

from constants import Constants
from common.http_client import get_json, MALFORMED_JSON, TRANSPORT_FAILURE
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from repository.url_normalize import parse_repo_source
from versioning.models import ProviderRef, ResolutionResult, ResolvedProvider, SkipReason

logger = logging.getLogger(__name__)


class TerraformRegistryClient:  # pylint: disable=too-few-public-methods
    """Resolve providers through ``/v1/providers/{vendor}/{name}``.

    Every failure is classified into a ``SkipReason``; ``resolve`` never raises
    for registry or network problems.
    """

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = (base_url or Constants.REGISTRY_URL_TERRAFORM).rstrip("/")

    def provider_url(self, ref: ProviderRef) -> str:
        return f"{self.base_url}/{ref.vendor}/{ref.name}"

    def resolve(self, ref: ProviderRef) -> ResolutionResult:
        """Look up ``ref`` and return its upstream repository or a skip reason."""
        url = self.provider_url(ref)
        status, _, data = get_json(url)

        if is_debug_enabled(logger):
            logger.debug(
                "Registry lookup",
                extra=extra_context(
                    event="http_response",
                    component="registry",
                    action="resolve",
                    status_code=status,
                    target=safe_url(url),
                    provider=str(ref)
                )
            )

        if status == TRANSPORT_FAILURE:
            return self._skip(ref, SkipReason.REGISTRY_TRANSPORT_ERROR,
                              f"could not reach the Terraform registry for '{ref}'")
        if status == 404:
            return self._skip(ref, SkipReason.REGISTRY_NOT_FOUND,
                              f"provider '{ref}' was not found in the Terraform registry")
        if status != 200:
            return self._skip(ref, SkipReason.REGISTRY_TRANSPORT_ERROR,
                              f"Terraform registry returned HTTP {status} for '{ref}'")
        if data is MALFORMED_JSON or (data is not None and not isinstance(data, dict)):
            return self._skip(ref, SkipReason.REGISTRY_MALFORMED_RESPONSE,
                              f"invalid JSON response from the Terraform registry for '{ref}'")
        if not data or not data.get("source"):
            return self._skip(ref, SkipReason.REGISTRY_NOT_FOUND,
                              f"Terraform registry response had no source for '{ref}'")

        source = data.get("source")
        try:
            repo = parse_repo_source(source)
        except ValueError as exc:
            return self._skip(ref, SkipReason.INVALID_SOURCE_URL,
                              f"source URL for '{ref}' could not be parsed: {exc}")

        return ResolutionResult(
            provider=ref,
            resolved=ResolvedProvider(ref=ref, repo_org=repo.org, repo_name=repo.repo),
        )

    @staticmethod
    def _skip(ref: ProviderRef, reason: SkipReason, detail: str) -> ResolutionResult:
        return ResolutionResult(provider=ref, skip_reason=reason, detail=detail)
