"""Tests for markdown report generation."""

import json
from pathlib import Path
import pytest
from depgate.contracts.run_result import RunResult
from depgate.policy.models import PolicyMode
from depgate.report.markdown import generate_markdown, render_markdown


@pytest.fixture
def sample_result():
    """Load sample RunResult from fixture."""
    fixture_path = Path(__file__).parent / "fixtures" / "run_result.sample.json"
    with open(fixture_path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return RunResult(**data)


class TestMarkdownReport:
    """Test markdown rendering."""
    
    def test_violation_tables(self, sample_result):
        markdown = render_markdown(sample_result, PolicyMode.PROHIBIT)
        
        assert "# Dependency Policy Report" in markdown
        assert "- **Policy Mode:** prohibit" in markdown
        assert "### `apps/web/package.json`" in markdown
        assert "| `left-pad` | `1.3.0` |" in markdown
        assert "- **Result:** FAILED" in markdown
    
    def test_no_manifests(self):
        markdown = render_markdown(RunResult())
        assert "No package updates detected." in markdown
        assert "## Violations" not in markdown
    
    def test_parse_failures_listed(self):
        result = RunResult(evaluated_manifests=["package.json"], parse_failures=["package.json"], should_fail=True)
        markdown = render_markdown(result)
        assert "## Unparseable Manifests" in markdown
        assert "None detected." in markdown
    
    def test_writes_file(self, sample_result, tmp_path):
        output_path = tmp_path / "reports" / "depgate.md"
        generate_markdown(sample_result, output_path)
        assert output_path.read_text(encoding="utf-8") == render_markdown(sample_result)
    
    def test_clean_run_has_no_violation_tables(self):
        result = RunResult(evaluated_manifests=["package.json"])
        markdown = render_markdown(result, PolicyMode.ALLOW)
        
        assert not result.has_violations
        assert "None detected." in markdown
        assert "| Package | Version |" not in markdown
    
    def test_sample_has_violations(self, sample_result):
        assert sample_result.has_violations
