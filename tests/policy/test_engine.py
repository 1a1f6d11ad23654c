"""Tests for policy engine."""

import pytest
from depgate.contracts.run_result import ViolationReport
from depgate.ingest.models import ManifestRecord, PackageRef
from depgate.policy.engine import (
    versions_equal,
    find_match,
    evaluate_packages,
    evaluate_manifest,
    aggregate_results,
)
from depgate.policy.models import PolicyMode, PolicyTable
from depgate.utils.errors import ConfigError


def _table(**entries):
    return PolicyTable(entries=[PackageRef(name=n.replace("_", "-"), version=v) for n, v in entries.items()])


def _refs(*pairs):
    return [PackageRef(name=n, version=v) for n, v in pairs]


class TestVersionsEqual:
    """Test version comparison."""
    
    @pytest.mark.parametrize("left, right", [
        ("1.0.0", "1.0.0"),
        ("1.0", "1.0.0"),
        ("v2.1.0", "2.1.0"),
        ("latest", "latest"),
        ("1.0.0", "1.0.0+build.7"),
        ("1.0.0-rc.1+sha.5114f85", "1.0.0-rc.1"),
    ])
    def test_equal(self, left, right):
        assert versions_equal(left, right)
    
    @pytest.mark.parametrize("left, right", [
        ("1.0.0", "1.0.1"),
        ("latest", "1.0.0"),
        (">=1.0.0 <2.0.0", "1.0.0"),
        ("", "1.0.0"),
        ("1.0.0-alpha", "1.0.0"),
        ("1.0.0-alpha", "1.0.0-a"),
        ("1.0.0-rc.1", "1.0.0-rc1"),
        ("1.0.0-1", "1.0.0-post1"),
    ])
    def test_not_equal(self, left, right):
        assert not versions_equal(left, right)


class TestFindMatch:
    """Test policy entry matching."""
    
    def test_wildcard_matches_any_version(self):
        table = _table(left_pad="*")
        assert find_match(PackageRef(name="left-pad", version="1.0.0"), table) is not None
        assert find_match(PackageRef(name="left-pad", version="anything"), table) is not None
    
    def test_name_is_case_sensitive(self):
        table = _table(lodash="4.17.21")
        assert find_match(PackageRef(name="Lodash", version="4.17.21"), table) is None
    
    def test_first_matching_entry_wins(self):
        table = PolicyTable(entries=_refs(("react", "17.0.0"), ("react", "*"), ("react", "18.2.0")))
        match = find_match(PackageRef(name="react", version="18.2.0"), table)
        assert match.version == "*"


class TestEvaluatePackages:
    """Test allow and prohibit modes."""
    
    def test_allow_listed_version_passes(self):
        """Allowed package with a caret range normalized to the listed version."""
        referenced = _refs(("lodash", "4.17.21"))
        assert evaluate_packages(referenced, _table(lodash="4.17.21"), PolicyMode.ALLOW) == []
    
    def test_allow_empty_table_flags_everything(self):
        referenced = _refs(("axios", "1.0.0"))
        assert evaluate_packages(referenced, PolicyTable(), PolicyMode.ALLOW) == referenced
    
    def test_allow_wrong_version_is_violation(self):
        referenced = _refs(("lodash", "4.17.20"))
        assert evaluate_packages(referenced, _table(lodash="4.17.21"), PolicyMode.ALLOW) == referenced
    
    def test_prohibit_wildcard(self):
        referenced = _refs(("left-pad", "1.0.0"), ("lodash", "4.17.21"))
        violations = evaluate_packages(referenced, _table(left_pad="*"), PolicyMode.PROHIBIT)
        assert violations == _refs(("left-pad", "1.0.0"))
    
    def test_prohibit_ignores_build_metadata(self):
        referenced = _refs(("evil", "1.0.0+build.7"))
        assert evaluate_packages(referenced, _table(evil="1.0.0"), PolicyMode.PROHIBIT) == referenced
    
    def test_allow_distinguishes_prerelease_identifiers(self):
        referenced = _refs(("react", "19.0.0-rc1"))
        assert evaluate_packages(referenced, _table(react="19.0.0-rc.1"), PolicyMode.ALLOW) == referenced
    
    def test_wildcard_matches_under_both_modes(self):
        referenced = _refs(("left-pad", "0.0.1"), ("left-pad", "9.9.9"))
        table = _table(left_pad="*")
        assert evaluate_packages(referenced, table, PolicyMode.ALLOW) == []
        assert evaluate_packages(referenced, table, PolicyMode.PROHIBIT) == referenced
    
    def test_modes_are_complementary(self):
        referenced = _refs(
            ("lodash", "4.17.21"),
            ("axios", "1.0"),
            ("react", "18.2.0"),
            ("left-pad", "1.3.0"),
            ("chalk", "not-a-version"),
        )
        table = _table(lodash="4.17.21", axios="1.0.0", left_pad="1.0.0", chalk="not-a-version")
        allowed = evaluate_packages(referenced, table, PolicyMode.ALLOW)
        prohibited = evaluate_packages(referenced, table, PolicyMode.PROHIBIT)
        
        for package in referenced:
            assert (package in allowed) != (package in prohibited)
    
    def test_preserves_reference_order(self):
        referenced = _refs(("c", "1"), ("a", "1"), ("b", "1"))
        assert evaluate_packages(referenced, PolicyTable(), PolicyMode.ALLOW) == referenced
    
    def test_accepts_mode_string(self):
        referenced = _refs(("axios", "1.0.0"))
        assert evaluate_packages(referenced, PolicyTable(), "allow") == referenced
    
    def test_invalid_mode_raises_before_evaluation(self):
        with pytest.raises(ConfigError, match="'allow' or 'prohibit'"):
            evaluate_packages([], PolicyTable(), "deny")


class TestEvaluateManifest:
    """Test per-manifest evaluation."""
    
    def test_clean_manifest_returns_none(self):
        manifest = ManifestRecord(file_path="package.json", source_path="package.json", packages=_refs(("a", "1.0.0")))
        assert evaluate_manifest(manifest, _table(a="1.0.0"), PolicyMode.ALLOW) is None
    
    def test_violating_manifest(self):
        manifest = ManifestRecord(file_path="web/package.json", source_path="Web/package.json", packages=_refs(("a", "1.0.0")))
        report = evaluate_manifest(manifest, PolicyTable(), PolicyMode.ALLOW)
        assert report.file_path == "web/package.json"
        assert report.packages == _refs(("a", "1.0.0"))


class TestAggregateResults:
    """Test run result aggregation."""
    
    def _report(self, path="package.json"):
        return ViolationReport(file_path=path, packages=_refs(("axios", "1.0.0")))
    
    def test_violations_without_fail_flag_do_not_fail(self):
        result = aggregate_results([self._report()], fail_if_violations=False)
        assert result.should_fail is False
        assert len(result.violations) == 1
    
    def test_violations_with_fail_flag_fail(self):
        result = aggregate_results([self._report()], fail_if_violations=True)
        assert result.should_fail is True
    
    def test_parse_failure_always_fails(self):
        result = aggregate_results([None], fail_if_violations=False, parse_failures=["package.json"])
        assert result.should_fail is True
        assert result.violations == []
    
    def test_clean_manifests_are_not_recorded(self):
        result = aggregate_results([None, self._report("b/package.json"), None], fail_if_violations=True)
        assert [r.file_path for r in result.violations] == ["b/package.json"]
    
    def test_no_manifests(self):
        result = aggregate_results([], fail_if_violations=True)
        assert result.should_fail is False
        assert result.violations == []
