"""Tests for permissive version parsing and the release differ."""

from datetime import datetime, timezone

import pytest

from common.errors import InvalidVersionError
from conftest import make_release
from versioning.differ import applicable_releases, is_applicable, releases_from_api, sort_releases
from versioning.parser import parse_version


class TestParseVersion:
    """parse_version accepts common tag spellings."""

    @pytest.mark.parametrize("text,expected", [
        ("1.2.3", "1.2.3"),
        ("v1.2.3", "1.2.3"),
        ("V1.2.3", "1.2.3"),
        (" v2.0.0 ", "2.0.0"),
        ("v4.0.0-beta.1", "4.0.0-beta.1"),
        ("1.2", "1.2.0"),
    ])
    def test_parses(self, text, expected):
        assert str(parse_version(text)) == expected

    @pytest.mark.parametrize("text", ["", None, "v", "latest", "nightly-build"])
    def test_rejects(self, text):
        assert parse_version(text) is None

    def test_prefix_does_not_change_version(self):
        assert parse_version("v1.2.0") == parse_version("1.2.0")


class TestIsApplicable:
    """Strictly-greater precedence checks."""

    @pytest.mark.parametrize("lower,higher", [
        ("1.0.0", "1.0.1"),
        ("1.9.0", "1.10.0"),
        ("1.0.0-alpha", "1.0.0-alpha.1"),
        ("1.0.0-alpha.1", "1.0.0-beta"),
        ("1.0.0-beta.2", "1.0.0-beta.11"),
        ("1.0.0-rc.1", "1.0.0"),
        ("3.1.0", "4.0.0-beta.1"),
    ])
    def test_ordering_is_asymmetric(self, lower, higher):
        a, b = parse_version(lower), parse_version(higher)
        assert is_applicable(b, pinned=a)
        assert not is_applicable(a, pinned=b)

    def test_equal_is_never_applicable(self):
        v = parse_version("2.5.0")
        assert not is_applicable(v, pinned=parse_version("v2.5.0"))


class TestApplicableReleases:
    """applicable_releases filters and orders upstream releases."""

    def test_upgrade_scenario(self):
        """Pinned 3.0.0 sees 3.1.0 then the 4.0.0 beta, nothing older or equal."""
        releases = [make_release(t) for t in ["v2.9.0", "v3.0.0", "v3.1.0", "v4.0.0-beta.1"]]

        result = applicable_releases("3.0.0", releases)

        assert [r.tag_name for r in result] == ["v3.1.0", "v4.0.0-beta.1"]

    def test_reversed_input_gives_same_order(self):
        tags = ["v3.4.0", "v3.0.1", "v3.10.0", "v3.2.0-rc.1", "v3.2.0", "v3.0.0"]
        releases = [make_release(t) for t in tags]

        forward = applicable_releases("v3.0.0", releases)
        backward = applicable_releases("v3.0.0", list(reversed(releases)))

        assert [r.tag_name for r in forward] == ["v3.0.1", "v3.2.0-rc.1", "v3.2.0", "v3.4.0", "v3.10.0"]
        assert [r.tag_name for r in backward] == [r.tag_name for r in forward]

    def test_up_to_date_is_empty(self):
        releases = [make_release(t) for t in ["v1.0.0", "v1.1.0"]]
        assert applicable_releases("1.1.0", releases) == []

    def test_same_version_different_spelling_excluded(self):
        releases = [make_release("v1.2.0"), make_release("1.2.0")]
        assert applicable_releases("1.2.0", releases) == []

    def test_invalid_pinned_version_raises(self):
        with pytest.raises(InvalidVersionError):
            applicable_releases("not-a-version", [make_release("v1.0.0")])

    def test_sort_is_ascending(self):
        releases = [make_release(t) for t in ["2.0.0", "1.0.0", "1.5.0"]]
        assert [r.tag_name for r in sort_releases(releases)] == ["1.0.0", "1.5.0", "2.0.0"]


class TestReleasesFromApi:
    """Conversion of hosting API payloads."""

    def test_unparseable_tags_and_drafts_are_dropped(self):
        items = [
            {"tag_name": "v1.0.0", "body": "first", "created_at": "2023-03-01T10:00:00Z"},
            {"tag_name": "nightly", "body": "skip me", "created_at": "2023-03-02T10:00:00Z"},
            {"tag_name": "v1.1.0", "body": "draft", "draft": True},
            {"tag_name": "v1.2.0", "body": None, "created_at": None},
        ]

        releases = releases_from_api(items)

        assert [r.tag_name for r in releases] == ["v1.0.0", "v1.2.0"]
        assert releases[0].created_at == datetime(2023, 3, 1, 10, 0, tzinfo=timezone.utc)
        assert releases[0].body == "first"
        assert releases[1].body == ""
        assert releases[1].created_at is None
