"""Tests for the regex and substring containment checks."""

from __future__ import annotations

import pytest

from version_sync.checks.contains_regex import (
    VERSION_TOKEN_RE,
    check_contains_regex,
    check_only_contains_regex,
    expand_template,
)
from version_sync.checks.contains_substring import check_contains_substring
from version_sync.errors import InputError
from version_sync.report import Location, Match


class TestExpandTemplate:
    def test_placeholders_are_escaped(self):
        pattern = expand_template("{name}-{version}", "foo*bar", "1.2.3")
        assert pattern == r"foo\*bar-1\.2\.3"

    def test_template_without_placeholders(self):
        assert expand_template("^version", "foo", "1.2.3") == "^version"


class TestCheckContainsRegex:
    def test_found(self):
        report = check_contains_regex('version = "{version}"', "foo", "0.3.0", 'version = "0.3.0"\n', path="f")
        assert report.ok
        assert report.outcomes == [Match(Location("f", 1))]

    def test_not_found(self):
        report = check_contains_regex('version = "{version}"', "foo", "0.3.0", "nothing here\n", path="f")
        assert not report.ok
        assert report.render() == 'f ... no matching line found for "version = "0\\.3\\.0""'

    def test_reports_line_of_first_match(self):
        text = "a\nb\n### Version 1.2.3\n### Version 1.2.3\n"
        report = check_contains_regex("^### Version {version}$", "foo", "1.2.3", text)
        assert report.outcomes[0].location.line == 3

    def test_escaping_prevents_wildcards(self):
        text = "escaped: fooxbar-1a2b3\n"
        report = check_contains_regex("{name}-{version}", "foo.bar", "1.2.3", text)
        assert not report.ok

    def test_line_boundaries_with_crlf(self):
        text = "first line\r\nsecond line\r\nthird line\r\n"
        assert check_contains_regex("^second line$", "", "", text).ok

    def test_bad_template(self):
        with pytest.raises(InputError, match="could not parse template"):
            check_contains_regex("Version {version} [ups", "foo", "1.2.3", "")


class TestCheckOnlyContainsRegex:
    TEMPLATE = "docs.rs/{name}/{version}/"

    def test_all_lines_match(self):
        text = "first:  docs.rs/foo/1.2.3/foo/fn.bar.html\nsecond: docs.rs/foo/1.2.3/foo/fn.baz.html\n"
        report = check_only_contains_regex(self.TEMPLATE, "foo", "1.2.3", text)
        assert report.ok
        assert len(report.outcomes) == 2

    def test_stray_version_is_reported(self):
        text = "intro\ndocs.rs/foo/1.2.3/\nold link: docs.rs/foo/1.0.0/\n"
        report = check_only_contains_regex(self.TEMPLATE, "foo", "1.2.3", text, path="README.md")
        assert not report.ok
        (mismatch,) = report.mismatches
        assert mismatch.location == Location("README.md", 3)
        assert mismatch.text == "old link: docs.rs/foo/1.0.0/"
        assert mismatch.reason.startswith('found "1.0.0"')

    def test_contains_regex_passes_on_same_file(self):
        text = "docs.rs/foo/1.2.3/\nversion 0.9.1 is old\n"
        assert check_contains_regex(self.TEMPLATE, "foo", "1.2.3", text).ok
        assert not check_only_contains_regex(self.TEMPLATE, "foo", "1.2.3", text).ok

    def test_lines_without_versions_are_ignored(self):
        text = "no numbers\ndocs.rs/foo/1.2.3/\nstep 1 of 2\n"
        assert check_only_contains_regex(self.TEMPLATE, "foo", "1.2.3", text).ok

    def test_fails_without_any_match(self):
        report = check_only_contains_regex(self.TEMPLATE, "foo", "1.2.3", "not a match\n", path="f")
        assert not report.ok
        assert report.mismatches[-1].location == Location("f")
        assert "no matching line found" in report.mismatches[-1].reason


class TestVersionToken:
    @pytest.mark.parametrize("text", ["1.2.3", "v1.2", "1.2.3-rc.1+build.5", "foo/0.3.0/"])
    def test_version_shaped(self, text):
        assert VERSION_TOKEN_RE.search(text)

    @pytest.mark.parametrize("text", ["1", "step 1 of 2", "1.2.3.4"])
    def test_not_version_shaped(self, text):
        assert VERSION_TOKEN_RE.search(text) is None


class TestCheckContainsSubstring:
    def test_found(self):
        text = 'first\n__version__ = "0.1.0"\n'
        report = check_contains_substring('__version__ = "{version}"', "pkg", "0.1.0", text, path="f")
        assert report.outcomes == [Match(Location("f", 2))]

    def test_not_found(self):
        report = check_contains_substring("should not be found", "pkg", "0.1.0", "text", path="f")
        assert report.render() == 'f ... could not find "should not be found"'

    def test_no_regex_meaning(self):
        assert check_contains_substring("{name}*", "a.b", "1.0.0", "a.b*").ok
        assert not check_contains_substring("{name}*", "a.b", "1.0.0", "axb").ok
