"""
Tests for the colour classifier.

Uses the default temperature rules (<10 red, >=10 blue, >=25 green) and a
partition of the same range (<10 red, <25 blue, >=25 green).
"""

import itertools

import pytest  # type: ignore

from src.polygon_dashboard.core import constants
from src.polygon_dashboard.models import Rule
from src.polygon_dashboard.processing import ColorClassifier, classify, evaluate_rule
from src.polygon_dashboard.store import default_data_sources

RED = "#ff4444"
BLUE = "#4444ff"
GREEN = "#44ff44"


@pytest.fixture
def temperature_rules():
    """Rules of the default Temperature data source."""
    return default_data_sources()[0].rules


@pytest.fixture
def banded_rules():
    """Non-overlapping bands: <10 red, <25 blue, >=25 green."""
    return [
        Rule(id="cold", operator="<", threshold=10.0, color=RED, label="cold"),
        Rule(id="mild", operator="<", threshold=25.0, color=BLUE, label="mild"),
        Rule(id="hot", operator=">=", threshold=25.0, color=GREEN, label="hot"),
    ]


class TestEvaluateRule:
    """Test single-rule predicates."""

    @pytest.mark.parametrize("operator,value,expected", [
        ("<", 9.9, True),
        ("<", 10.0, False),
        ("<=", 10.0, True),
        (">", 10.0, False),
        (">", 10.1, True),
        (">=", 10.0, True),
        ("=", 10.0, True),
        ("=", 10.000001, False),
    ])
    def test_operators(self, operator, value, expected):
        rule = Rule(id="r", operator=operator, threshold=10.0, color=RED)
        assert evaluate_rule(value, rule) is expected

    def test_equality_has_no_tolerance(self):
        rule = Rule(id="r", operator="=", threshold=0.3, color=RED)
        assert not evaluate_rule(0.1 + 0.2, rule)

    def test_unknown_operator_never_matches(self):
        rule = Rule(id="r", operator="!=", threshold=10.0, color=RED)
        assert not evaluate_rule(5.0, rule)


class TestColorClassifier:
    """Test cases for ColorClassifier."""

    def test_step_function(self, banded_rules):
        assert classify(5, banded_rules) == RED
        assert classify(15, banded_rules) == BLUE
        assert classify(30, banded_rules) == GREEN

    def test_band_edges(self, banded_rules):
        assert classify(9.9, banded_rules) == RED
        assert classify(10, banded_rules) == BLUE
        assert classify(24.9, banded_rules) == BLUE
        assert classify(25, banded_rules) == GREEN

    def test_default_rules_never_reach_upper_band(self, temperature_rules):
        # ">= 10" sorts before ">= 25" and matches every value above 10
        assert classify(30, temperature_rules) == BLUE
        assert classify(100, temperature_rules) == BLUE

    def test_first_match_in_threshold_order_wins(self, temperature_rules):
        # 25 satisfies both ">= 10" and ">= 25"; the lower threshold comes first
        assert classify(25, temperature_rules) == BLUE

    def test_boundary_values(self, temperature_rules):
        assert classify(9.9, temperature_rules) == RED
        assert classify(10, temperature_rules) == BLUE

    def test_end_to_end_value(self, temperature_rules):
        assert classify(22.3, temperature_rules) == "#4444ff"

    def test_no_rules_returns_fallback(self):
        assert classify(12.0, []) == "#cccccc"
        assert constants.FALLBACK_COLOR == "#cccccc"

    def test_no_matching_rule_returns_fallback(self):
        rules = [
            Rule(id="a", operator=">", threshold=100.0, color=RED),
            Rule(id="b", operator="=", threshold=50.0, color=BLUE),
        ]
        assert classify(49.9, rules) == "#cccccc"

    @pytest.mark.parametrize("rules_fixture", ["temperature_rules", "banded_rules"])
    def test_permutation_invariance(self, rules_fixture, request):
        rules = request.getfixturevalue(rules_fixture)
        values = [-20, 0, 9.99, 10, 17.5, 24.9, 25, 40]
        expected = [classify(v, rules) for v in values]

        for permutation in itertools.permutations(rules):
            assert [classify(v, list(permutation)) for v in values] == expected

    def test_rules_are_not_reordered(self):
        rules = [
            Rule(id="high", operator=">=", threshold=25.0, color=GREEN),
            Rule(id="low", operator="<", threshold=10.0, color=RED),
        ]
        original = list(rules)
        classify(5.0, rules)
        assert rules == original

    def test_match_returns_winning_rule(self, temperature_rules):
        classifier = ColorClassifier()
        assert classifier.match(15.0, temperature_rules).label == "10-25°C"
        assert classifier.match(15.0, []) is None

    def test_custom_fallback_color(self):
        classifier = ColorClassifier(fallback_color="#000000")
        assert classifier.classify(1.0, []) == "#000000"
