"""
Tests for rule and data source validation.
"""

import pytest  # type: ignore

from src.polygon_dashboard.errors import InvalidRuleError
from src.polygon_dashboard.models import DataSource, Rule
from src.polygon_dashboard.processing import RuleValidator


@pytest.fixture
def validator():
    """Create validator instance."""
    return RuleValidator()


class TestRuleValidator:
    """Test cases for RuleValidator."""

    def test_valid_rule(self, validator):
        rule = Rule(id="1", operator="<=", threshold=3, color="#A0b1C2", label="low")
        assert validator.validate_rule(rule) == (True, [])

    @pytest.mark.parametrize("threshold", ["10", None, float("nan"), float("inf"), True])
    def test_non_numeric_threshold_is_rejected(self, validator, threshold):
        rule = Rule(id="1", operator="<", threshold=threshold, color="#ff4444")
        is_valid, errors = validator.validate_rule(rule)
        assert not is_valid
        assert any("threshold" in error for error in errors)

    @pytest.mark.parametrize("color", ["ff4444", "#ff444", "#ff44444", "#gg4444", "red", None])
    def test_malformed_color_is_rejected(self, validator, color):
        rule = Rule(id="1", operator="<", threshold=1.0, color=color)
        is_valid, errors = validator.validate_rule(rule)
        assert not is_valid
        assert any("color" in error for error in errors)

    def test_unknown_operator_is_rejected(self, validator):
        rule = Rule(id="1", operator="!=", threshold=1.0, color="#ff4444")
        is_valid, errors = validator.validate_rule(rule)
        assert not is_valid
        assert "operator" in errors[0]

    def test_all_problems_are_reported(self, validator):
        rule = Rule(id="1", operator="~", threshold="x", color="blue")
        _, errors = validator.validate_rule(rule)
        assert len(errors) == 3

    def test_ensure_valid_rule_raises(self, validator):
        rule = Rule(id="1", operator="<", threshold=1.0, color="#zzzzzz")
        with pytest.raises(InvalidRuleError) as exc_info:
            validator.ensure_valid_rule(rule)
        assert exc_info.value.errors
        assert isinstance(exc_info.value, ValueError)

    def test_data_source_requires_name_and_field(self, validator):
        is_valid, errors = validator.validate_data_source(DataSource(id="x", name=" ", field=""))
        assert not is_valid
        assert len(errors) == 2

    def test_data_source_reports_rule_errors(self, validator):
        data_source = DataSource(
            id="x",
            name="Wind",
            field="wind_speed_10m",
            rules=[Rule(id="bad", operator="<", threshold="fast", color="#ffffff")],
        )
        with pytest.raises(InvalidRuleError, match="Rule bad"):
            validator.ensure_valid_data_source(data_source)
