"""
Colour rule data models.

A DataSource is a named weather metric together with the threshold rules
that map its values to display colours.
"""

from dataclasses import dataclass, field as dc_field
from typing import Any, Dict, List


@dataclass(frozen=True)
class Rule:
    """One threshold comparison mapping a value range to a colour."""

    id: str
    operator: str  # one of "=", "<", ">", "<=", ">="
    threshold: float
    color: str  # "#RRGGBB"
    label: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "operator": self.operator,
            "threshold": self.threshold,
            "color": self.color,
            "label": self.label,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rule":
        return cls(
            id=str(data["id"]),
            operator=data["operator"],
            threshold=data["threshold"],
            color=data["color"],
            label=data.get("label", ""),
        )


@dataclass
class DataSource:
    """Weather metric plus its colour classification rules."""

    id: str
    name: str
    field: str  # hourly field requested from the archive, e.g. temperature_2m
    rules: List[Rule] = dc_field(default_factory=list)

    def get_rule(self, rule_id: str) -> Rule:
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        raise KeyError(f"Rule {rule_id} not found in data source {self.id}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "field": self.field,
            "rules": [rule.to_dict() for rule in self.rules],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataSource":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            field=data["field"],
            rules=[Rule.from_dict(rule) for rule in data.get("rules", [])],
        )
