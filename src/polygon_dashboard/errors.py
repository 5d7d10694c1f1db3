"""Dashboard-specific exceptions."""

from typing import List


class InvalidRuleError(ValueError):
    """Raised when a colour rule or data source fails validation.

    Rules are checked when they are created or edited; the classifier
    assumes every rule it receives is well-formed.
    """

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class PersistenceError(Exception):
    """Raised when the persisted dashboard state cannot be read."""


class SampleFetchError(Exception):
    """Raised when the archive returns no usable samples for a query."""
