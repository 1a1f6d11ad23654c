"""Tests for policy loader."""

import json
from unittest.mock import Mock, patch
import pytest
import requests
from depgate.policy.loader import load_policy, parse_policy_document, validate_policy_file
from depgate.utils.errors import PolicyFetchError, PolicyParseError

POLICY_URL = "https://policies.example.com/npm.json"


class TestParsePolicyDocument:
    """Test policy document parsing."""
    
    def test_normalizes_versions_in_order(self):
        table = parse_policy_document({"lodash": "^4.17.21", "axios": "~1.6.0", "react": "18.2.0"})
        assert [(e.name, e.version) for e in table.entries] == [
            ("lodash", "4.17.21"),
            ("axios", "1.6.0"),
            ("react", "18.2.0"),
        ]
    
    def test_wildcard_preserved(self):
        table = parse_policy_document({"left-pad": "*"})
        assert table.entries[0].version == "*"
        assert table.wildcard_names() == ["left-pad"]
    
    def test_empty_document(self):
        assert len(parse_policy_document({})) == 0
    
    def test_non_object_document(self):
        with pytest.raises(PolicyParseError, match="object"):
            parse_policy_document(["lodash"])
    
    def test_non_string_version_rejects_whole_document(self):
        with pytest.raises(PolicyParseError, match="axios"):
            parse_policy_document({"lodash": "4.17.21", "axios": 1})


class TestLoadPolicy:
    """Test remote policy fetch (mocked)."""
    
    @patch('depgate.policy.loader.requests.get')
    def test_single_get(self, mock_get, policy_response):
        mock_get.return_value = policy_response({"lodash": "4.17.21"})
        
        table = load_policy(POLICY_URL, timeout=5)
        
        mock_get.assert_called_once_with(POLICY_URL, timeout=5)
        assert table.source == POLICY_URL
        assert table.entries[0].name == "lodash"
    
    def test_uses_session_when_given(self, policy_response):
        session = Mock()
        session.get.return_value = policy_response({"a": "1.0.0"})
        
        table = load_policy(POLICY_URL, session=session)
        
        assert session.get.called
        assert len(table) == 1
    
    @patch('depgate.policy.loader.requests.get')
    def test_http_error(self, mock_get):
        response = Mock(status_code=404)
        response.raise_for_status = Mock(side_effect=requests.exceptions.HTTPError(response=response))
        mock_get.return_value = response
        
        with pytest.raises(PolicyFetchError, match="404"):
            load_policy(POLICY_URL)
    
    @patch('depgate.policy.loader.requests.get')
    def test_connection_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("refused")
        
        with pytest.raises(PolicyFetchError, match="Unable to fetch"):
            load_policy(POLICY_URL)
    
    @patch('depgate.policy.loader.requests.get')
    def test_invalid_json_body(self, mock_get):
        response = Mock(status_code=200)
        response.raise_for_status = Mock()
        response.json = Mock(side_effect=ValueError("Expecting value"))
        mock_get.return_value = response
        
        with pytest.raises(PolicyParseError, match="not valid JSON"):
            load_policy(POLICY_URL)


class TestValidatePolicyFile:
    """Test local policy validation."""
    
    def test_json_file(self, tmp_path):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps({"lodash": "^4.17.21"}), encoding="utf-8")
        table = validate_policy_file(str(path))
        assert table.entries[0].version == "4.17.21"
    
    def test_yaml_file(self, tmp_path):
        path = tmp_path / "policy.yaml"
        path.write_text('left-pad: "*"\nlodash: "4.17.21"\n', encoding="utf-8")
        table = validate_policy_file(str(path))
        assert [e.name for e in table.entries] == ["left-pad", "lodash"]
    
    def test_missing_file(self, tmp_path):
        with pytest.raises(PolicyFetchError, match="not found"):
            validate_policy_file(str(tmp_path / "nope.json"))
    
    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / "policy.json"
        path.write_text("{ invalid", encoding="utf-8")
        with pytest.raises(PolicyParseError):
            validate_policy_file(str(path))
