"""JSON report export."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Sequence

from versioning.models import ProviderReport, ResolutionResult

logger = logging.getLogger(__name__)


def _release_entry(item) -> Dict[str, Any]:
    release = item.release
    return {
        "tag": release.tag_name,
        "version": str(release.version),
        "createdAt": release.created_at.isoformat() if release.created_at else None,
        "relevantLines": [line.text for line in item.lines if line.relevant],
    }


def build_document(
    resolutions: Sequence[ResolutionResult],
    reports: Iterable[ProviderReport],
    identifiers: Sequence[str],
) -> Dict[str, Any]:
    """Assemble the exported document."""
    providers: List[Dict[str, Any]] = []
    for res in resolutions:
        if not res.ok:
            providers.append({
                "vendor": res.provider.vendor,
                "name": res.provider.name,
                "pinnedVersion": res.provider.pinned_version,
                "status": "skipped",
                "skipReason": res.skip_reason.value if res.skip_reason else None,
                "detail": res.detail,
            })
    for report in reports:
        p = report.provider
        entry: Dict[str, Any] = {
            "vendor": p.vendor,
            "name": p.name,
            "pinnedVersion": p.pinned_version,
            "repository": f"{p.repo_org}/{p.repo_name}",
        }
        if report.skipped:
            entry.update({
                "status": "skipped",
                "skipReason": report.skip_reason.value,
                "detail": report.detail,
            })
        else:
            entry.update({
                "status": "up_to_date" if report.up_to_date else "outdated",
                "latestVersion": str(report.latest.version) if report.latest else p.pinned_version,
                "releases": [_release_entry(item) for item in report.releases],
            })
        providers.append(entry)
    return {"resourceTypes": list(identifiers), "providers": providers}


def export_json(document: Dict[str, Any], path: str) -> bool:
    """Write ``document`` to ``path``; returns False when the write failed."""
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(document, file, ensure_ascii=False, indent=4)
        logger.info("JSON file has been successfully exported at: %s", path)
        return True
    except OSError as e:
        logger.error("JSON file couldn't be written to disk: %s", e)
        return False
