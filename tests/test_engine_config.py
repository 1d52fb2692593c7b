"""
Tests for engine configuration (env parsing + validation).

Usage:
    pytest tests/test_engine_config.py -v
"""

import dataclasses

import pytest
from src.insights.engine_config import EngineConfig, get_env, get_env_float, get_env_int


ENV_KEYS = [
    "INSIGHTS_QUALIFICATION_THRESHOLD", "INSIGHTS_SCORE_CAP", "INSIGHTS_TOP_CATEGORIES",
    "INSIGHTS_SUMMARY_CATEGORIES", "INSIGHTS_SUMMARY_TERMS", "INSIGHTS_TOP_TERMS",
    "INSIGHTS_REPRESENTATIVE_ITEMS", "INSIGHTS_MOST_ENGAGED", "INSIGHTS_TOP_ASPECTS",
    "INSIGHTS_MAX_WORKERS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestEngineConfig:

    def test_defaults(self):
        config = EngineConfig()
        assert config.qualification_threshold == 0.7
        assert config.score_cap == 1.0
        assert config.top_categories_limit == 5
        assert config.summary_categories_limit == 3
        assert config.summary_terms_limit == 10
        assert config.top_terms_limit == 20
        assert config.representative_items == 3
        assert config.most_engaged_limit == 5
        assert config.top_aspects_limit == 10
        assert config.max_workers == 4

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("INSIGHTS_QUALIFICATION_THRESHOLD", "0.5")
        monkeypatch.setenv("INSIGHTS_TOP_TERMS", "7")
        config = EngineConfig()
        assert config.qualification_threshold == 0.5
        assert config.top_terms_limit == 7

    def test_bad_env_value_names_variable(self, monkeypatch):
        monkeypatch.setenv("INSIGHTS_MAX_WORKERS", "many")
        with pytest.raises(ValueError, match="INSIGHTS_MAX_WORKERS"):
            EngineConfig()

    @pytest.mark.parametrize("kwargs", [
        {"qualification_threshold": 1.0},
        {"qualification_threshold": -0.1},
        {"score_cap": 0.0},
        {"score_cap": 1.5},
        {"top_terms_limit": 0},
        {"representative_items": -1},
        {"max_workers": 0},
    ])
    def test_validation(self, kwargs):
        with pytest.raises(ValueError):
            EngineConfig(**kwargs)

    def test_frozen(self):
        config = EngineConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.score_cap = 0.5


class TestEnvHelpers:

    def test_get_env_required(self, monkeypatch):
        monkeypatch.delenv("INSIGHTS_UNSET_KEY", raising=False)
        with pytest.raises(ValueError, match="INSIGHTS_UNSET_KEY"):
            get_env("INSIGHTS_UNSET_KEY", required=True)
        assert get_env("INSIGHTS_UNSET_KEY", "fallback") == "fallback"

    def test_numeric_helpers(self, monkeypatch):
        monkeypatch.setenv("INSIGHTS_TEST_NUMBER", "3")
        assert get_env_int("INSIGHTS_TEST_NUMBER", 1) == 3
        assert get_env_float("INSIGHTS_TEST_NUMBER", 1.0) == 3.0
        monkeypatch.setenv("INSIGHTS_TEST_NUMBER", "x")
        with pytest.raises(ValueError):
            get_env_float("INSIGHTS_TEST_NUMBER", 1.0)
