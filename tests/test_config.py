"""Tests for risk list loading."""

import json

import pytest

from string_check.config import (
    CONFIG_ENV_VAR,
    load_risk_list,
    normalize_urls,
    resolve_risk_list,
)
from string_check.errors import ConfigError


class TestNormalizeUrls:
    """Test config shape normalization."""

    def test_plain_list(self):
        assert normalize_urls(["http://a", "http://b"]) == ["http://a", "http://b"]

    def test_urls_object(self):
        assert normalize_urls({"urls": ["http://a"]}) == ["http://a"]

    def test_items_are_stringified_and_empties_dropped(self):
        assert normalize_urls(["http://a", "", 42, None]) == ["http://a", "42"]

    def test_order_and_duplicates_kept(self):
        assert normalize_urls(["b", "a", "b"]) == ["b", "a", "b"]

    @pytest.mark.parametrize(
        "source",
        [
            [],
            {"urls": []},
            {"links": ["http://a"]},
            {"urls": "http://a"},
            "http://a",
            None,
            42,
        ],
    )
    def test_invalid_shapes(self, source):
        with pytest.raises(ConfigError, match="list of strings"):
            normalize_urls(source)

    def test_only_empty_strings(self):
        with pytest.raises(ConfigError, match="no non-empty"):
            normalize_urls(["", ""])


class TestLoadRiskList:
    """Test loading config files."""

    def test_json_list(self, tmp_path):
        config = tmp_path / "risk-urls.json"
        config.write_text(json.dumps(["http://bad.example/x"]))
        assert load_risk_list(config) == ["http://bad.example/x"]

    def test_json_object(self, tmp_path):
        config = tmp_path / "risk.json"
        config.write_text(json.dumps({"urls": ["http://a", "http://b"]}))
        assert load_risk_list(config) == ["http://a", "http://b"]

    def test_json_nulls_are_dropped(self, tmp_path):
        config = tmp_path / "risk.json"
        config.write_text('[null, "http://a", ""]')
        assert load_risk_list(config) == ["http://a"]

    def test_python_module(self, tmp_path):
        config = tmp_path / "risk-urls.py"
        config.write_text('urls = ["http://a", "http://" + "b"]\n')
        assert load_risk_list(config) == ["http://a", "http://b"]

    def test_python_module_upper_case_name(self, tmp_path):
        config = tmp_path / "risk_config.py"
        config.write_text('URLS = {"urls": ["http://a"]}\n')
        assert load_risk_list(config) == ["http://a"]

    def test_python_module_without_urls(self, tmp_path):
        config = tmp_path / "empty.py"
        config.write_text("OTHER = 1\n")
        with pytest.raises(ConfigError, match="list of strings"):
            load_risk_list(config)

    def test_python_module_that_raises(self, tmp_path):
        config = tmp_path / "broken.py"
        config.write_text("raise RuntimeError('boom')\n")
        with pytest.raises(ConfigError, match="Failed to load config module: boom"):
            load_risk_list(config)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_risk_list(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        config = tmp_path / "bad.json"
        config.write_text("{not json")
        with pytest.raises(ConfigError, match="Failed to read config"):
            load_risk_list(config)

    def test_empty_list(self, tmp_path):
        config = tmp_path / "empty.json"
        config.write_text("[]")
        with pytest.raises(ConfigError):
            load_risk_list(config)


class TestResolveRiskList:
    """Test resolving inline lists, paths and the environment default."""

    def test_inline_list(self):
        assert resolve_risk_list(["http://a", ""]) == ["http://a"]

    def test_path_string(self, tmp_path):
        config = tmp_path / "risk.json"
        config.write_text('["http://a"]')
        assert resolve_risk_list(str(config)) == ["http://a"]

    def test_env_default(self, tmp_path, monkeypatch):
        config = tmp_path / "risk.json"
        config.write_text('["http://env"]')
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config))
        assert resolve_risk_list(None) == ["http://env"]

    def test_nothing_configured(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        with pytest.raises(ConfigError, match="No risk list"):
            resolve_risk_list(None)
