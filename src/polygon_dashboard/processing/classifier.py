"""
Colour classification module.

Maps an aggregated value to a display colour using threshold rules.

Rules are tried in ascending threshold order and the first satisfied rule
wins. Comparisons are exact: an "=" rule only matches a value that is
exactly equal to its threshold, with no tolerance.
"""

import logging
import operator
from typing import Callable, Dict, Iterable, List, Optional

from ..core import constants
from ..models import Rule

COMPARATORS: Dict[str, Callable[[float, float], bool]] = {
    "=": operator.eq,
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
}


def evaluate_rule(value: float, rule: Rule) -> bool:
    """Check one rule against a value. Unknown operators never match."""
    comparator = COMPARATORS.get(rule.operator)
    if comparator is None:
        return False
    return comparator(value, rule.threshold)


def sort_rules(rules: Iterable[Rule]) -> List[Rule]:
    """Return a new list of rules ordered by ascending threshold."""
    return sorted(rules, key=lambda rule: rule.threshold)


class ColorClassifier:
    """Pick a colour for a value from an unordered rule set."""

    def __init__(
        self,
        fallback_color: str = constants.FALLBACK_COLOR,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize colour classifier.

        Args:
            fallback_color: Colour returned when no rule matches
            logger: Logger instance
        """
        self.fallback_color = fallback_color
        self.logger = logger or logging.getLogger(__name__)

    def match(self, value: float, rules: Iterable[Rule]) -> Optional[Rule]:
        """
        Find the winning rule for a value.

        Args:
            value: Aggregated metric value
            rules: Rules in any order; the caller's collection is not modified

        Returns:
            First satisfied rule in ascending threshold order, or None
        """
        for rule in sort_rules(rules):
            if evaluate_rule(value, rule):
                return rule
        return None

    def classify(self, value: float, rules: Iterable[Rule]) -> str:
        """
        Get the display colour for a value.

        Args:
            value: Aggregated metric value
            rules: Rules in any order

        Returns:
            Colour of the winning rule, or the fallback colour
        """
        rule = self.match(value, rules)
        if rule is None:
            self.logger.debug(f"No rule matched {value}, using {self.fallback_color}")
            return self.fallback_color
        return rule.color


def classify(value: float, rules: Iterable[Rule]) -> str:
    """Module-level shortcut for ColorClassifier().classify()."""
    return ColorClassifier().classify(value, rules)
