"""Tests for the per-provider pipeline."""

from unittest.mock import MagicMock

from pipeline import build_report, report_all, resolve_all
from versioning.models import (
    ProviderRef,
    ResolutionResult,
    ResolvedProvider,
    SkipReason,
)


def _resolved(name, pinned="1.0.0"):
    ref = ProviderRef(vendor="hashicorp", name=name, pinned_version=pinned)
    return ResolvedProvider(ref=ref, repo_org="hashicorp", repo_name=f"terraform-provider-{name}")


class TestResolveAll:
    """Resolution fans out but keeps input order."""

    def test_order_and_skips(self):
        refs = [ProviderRef("hashicorp", n, "1.0.0") for n in ["aws", "nope", "random"]]

        def resolve(ref):
            if ref.name == "nope":
                return ResolutionResult(provider=ref, skip_reason=SkipReason.REGISTRY_NOT_FOUND, detail="missing")
            return ResolutionResult(provider=ref, resolved=ResolvedProvider(ref, "hashicorp", f"tp-{ref.name}"))

        registry = MagicMock()
        registry.resolve.side_effect = resolve

        results = resolve_all(refs, registry, max_workers=3)

        assert [r.provider.name for r in results] == ["aws", "nope", "random"]
        assert [r.ok for r in results] == [True, False, True]

    def test_empty(self):
        assert resolve_all([], MagicMock()) == []


class TestBuildReport:
    """Diff and highlight for one provider."""

    def test_applicable_releases_are_highlighted(self, resolved_azurerm):
        github = MagicMock()
        github.get_releases.return_value = [
            {"tag_name": "v4.0.0-beta.1", "body": "BREAKING: azurerm_foo removed\nother"},
            {"tag_name": "v2.9.0", "body": "old"},
            {"tag_name": "v3.1.0", "body": "* `azurerm_bar`: new field"},
            {"tag_name": "v3.0.0", "body": "pinned"},
            {"tag_name": "weekly", "body": "ignored"},
        ]

        report = build_report(resolved_azurerm, github, ["azurerm_foo"])

        github.get_releases.assert_called_once_with("hashicorp", "terraform-provider-azurerm")
        assert not report.skipped
        assert not report.up_to_date
        assert [r.release.tag_name for r in report.releases] == ["v3.1.0", "v4.0.0-beta.1"]
        assert [line.relevant for line in report.releases[1].lines] == [True, False]
        assert report.releases[0].relevant_count == 0
        assert str(report.latest.version) == "4.0.0-beta.1"

    def test_up_to_date(self, resolved_azurerm):
        github = MagicMock()
        github.get_releases.return_value = [{"tag_name": "v3.0.0", "body": ""}]

        report = build_report(resolved_azurerm, github, [])

        assert report.up_to_date
        assert report.latest is None

    def test_release_listing_failure_is_a_skip(self, resolved_azurerm):
        github = MagicMock()
        github.get_releases.return_value = None

        report = build_report(resolved_azurerm, github, [])

        assert report.skip_reason is SkipReason.RELEASES_UNAVAILABLE
        assert not report.up_to_date

    def test_invalid_pinned_version_is_a_skip(self):
        github = MagicMock()
        github.get_releases.return_value = [{"tag_name": "v1.0.0", "body": ""}]

        report = build_report(_resolved("odd", pinned="banana"), github, [])

        assert report.skip_reason is SkipReason.INVALID_PINNED_VERSION
        assert "banana" in report.detail


class TestReportAll:
    """One provider's failure never stops the others."""

    def test_reports_in_input_order(self):
        providers = [_resolved("aws", "1.0.0"), _resolved("broken", "x.y"), _resolved("random", "2.0.0")]
        github = MagicMock()
        github.get_releases.return_value = [{"tag_name": "v2.0.0", "body": "aws_instance fix"}]

        reports = list(report_all(providers, github, ["aws_instance", "aws_instance"], max_workers=2))

        assert [r.provider.name for r in reports] == ["aws", "broken", "random"]
        assert [r.releases[0].release.tag_name for r in reports[:1]] == ["v2.0.0"]
        assert reports[0].releases[0].lines[0].relevant
        assert reports[1].skip_reason is SkipReason.INVALID_PINNED_VERSION
        assert reports[2].up_to_date

    def test_empty(self):
        assert list(report_all([], MagicMock(), [])) == []
