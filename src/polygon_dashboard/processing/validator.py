"""
Rule validation module.

Validates colour rules and data sources before they enter the store.
"""

import logging
import math
import numbers
import re
from typing import List, Optional, Tuple

from ..core import constants
from ..errors import InvalidRuleError
from ..models import DataSource, Rule

HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


class RuleValidator:
    """Validate colour rules and data sources."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize rule validator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_rule(self, rule: Rule) -> Tuple[bool, List[str]]:
        """
        Validate a single colour rule.

        Args:
            rule: Rule to check

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        if rule.operator not in constants.RULE_OPERATORS:
            errors.append(
                f"Invalid operator: {rule.operator!r} "
                f"(expected one of {', '.join(constants.RULE_OPERATORS)})"
            )

        threshold = rule.threshold
        if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real):
            errors.append(f"Invalid threshold: {threshold!r} (must be a number)")
        elif not math.isfinite(threshold):
            errors.append(f"Invalid threshold: {threshold!r} (must be finite)")

        if not isinstance(rule.color, str) or not HEX_COLOR_PATTERN.match(rule.color):
            errors.append(f"Invalid color: {rule.color!r} (expected #RRGGBB)")

        if not isinstance(rule.label, str):
            errors.append(f"Invalid label: {rule.label!r} (must be a string)")

        is_valid = len(errors) == 0
        return is_valid, errors

    def validate_data_source(self, data_source: DataSource) -> Tuple[bool, List[str]]:
        """
        Validate a data source and all of its rules.

        Args:
            data_source: Data source to check

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        if not data_source.name or not str(data_source.name).strip():
            errors.append("Data source name must not be empty")

        if not data_source.field or not str(data_source.field).strip():
            errors.append("Data source field must not be empty")

        for rule in data_source.rules:
            _, rule_errors = self.validate_rule(rule)
            errors.extend(f"Rule {rule.id}: {error}" for error in rule_errors)

        is_valid = len(errors) == 0
        return is_valid, errors

    def ensure_valid_rule(self, rule: Rule) -> None:
        """
        Raise if a rule is not valid.

        Raises:
            InvalidRuleError: With every problem found
        """
        is_valid, errors = self.validate_rule(rule)
        if not is_valid:
            self.logger.warning(f"Rejected rule {rule.id}: {errors}")
            raise InvalidRuleError(errors)

    def ensure_valid_data_source(self, data_source: DataSource) -> None:
        """
        Raise if a data source or any of its rules is not valid.

        Raises:
            InvalidRuleError: With every problem found
        """
        is_valid, errors = self.validate_data_source(data_source)
        if not is_valid:
            self.logger.warning(f"Rejected data source {data_source.id}: {errors}")
            raise InvalidRuleError(errors)
