"""
Tests for the signal catalog: table validation, category order,
vocabularies and domain inference.

Usage:
    pytest tests/test_signal_catalog.py -v
"""

import pytest
from src.insights.signal_catalog import (
    DEFAULT_CATALOG, CategoryRule, Domain, Indicator, SignalCatalog, SignalKind,
    resolve_domain,
)


class TestCatalogTables:

    def test_pain_point_category_order(self):
        assert DEFAULT_CATALOG.category_names(SignalKind.PAIN_POINT) == (
            "price", "quality", "usability", "effectiveness",
            "reliability", "time", "service", "availability",
        )

    def test_desire_category_order(self):
        assert DEFAULT_CATALOG.category_names(SignalKind.DESIRE) == (
            "convenience", "time", "durability", "quality", "price",
            "effectiveness", "sustainability", "status", "innovation",
        )

    def test_all_weights_in_range(self):
        for kind in SignalKind:
            for indicator in DEFAULT_CATALOG.indicators(kind):
                assert 0.0 < indicator.weight <= 1.0

    def test_labels_are_unique(self):
        for kind in SignalKind:
            labels = [i.label for i in DEFAULT_CATALOG.indicators(kind)]
            assert len(labels) == len(set(labels))


class TestCatalogValidation:

    @pytest.mark.parametrize("weight", [0.0, -0.1, 1.5])
    def test_indicator_weight_out_of_range(self, weight):
        with pytest.raises(ValueError):
            Indicator("x", weight)

    def test_rule_needs_patterns(self):
        with pytest.raises(ValueError):
            CategoryRule("empty", ())

    def test_empty_indicator_table_rejected(self):
        with pytest.raises(ValueError):
            SignalCatalog(pain_point_indicators=())

    def test_empty_category_table_rejected(self):
        with pytest.raises(ValueError):
            SignalCatalog(desire_categories=())

    def test_duplicate_category_names_rejected(self):
        rules = (CategoryRule("price", ("a",)), CategoryRule("price", ("b",)))
        with pytest.raises(ValueError, match="Duplicate"):
            SignalCatalog(pain_point_categories=rules)


class TestDomains:

    def test_resolve_domain(self):
        assert resolve_domain("TECH") == Domain.TECH
        assert resolve_domain(Domain.FOOD) == Domain.FOOD
        assert resolve_domain("astrology") == Domain.GENERAL
        assert resolve_domain(None) == Domain.GENERAL
        assert resolve_domain(7) == Domain.GENERAL

    def test_general_has_no_vocabulary(self):
        assert DEFAULT_CATALOG.vocabulary("general") is None
        assert DEFAULT_CATALOG.vocabulary("astrology") is None
        assert "battery" in DEFAULT_CATALOG.vocabulary(Domain.ECOMMERCE)

    @pytest.mark.parametrize("query,expected", [
        ("best skincare for dry skin", Domain.BEAUTY),
        ("cheap laptop deals", Domain.TECH),
        ("apple pie recipe", Domain.FOOD),
        ("online shop for shoes", Domain.ECOMMERCE),
        ("random thoughts", Domain.GENERAL),
    ])
    def test_infer_domain(self, query, expected):
        assert DEFAULT_CATALOG.infer_domain(query) == expected

    def test_infer_domain_follows_table_order(self):
        # ecommerce keywords are checked before beauty keywords
        assert DEFAULT_CATALOG.infer_domain("hair product") == Domain.ECOMMERCE

    def test_infer_domain_matches_whole_words(self):
        # "app" inside "happy" is not a tech keyword
        assert DEFAULT_CATALOG.infer_domain("happy days") == Domain.GENERAL

    @pytest.mark.parametrize("query", [None, "", 12])
    def test_infer_domain_without_query(self, query):
        assert DEFAULT_CATALOG.infer_domain(query) == Domain.GENERAL

    def test_feature_terms(self):
        assert DEFAULT_CATALOG.is_feature_term("battery life")
        assert DEFAULT_CATALOG.is_feature_term("build quality")
        assert not DEFAULT_CATALOG.is_feature_term("night mode")
