"""Base classes for convention rule plugins."""

from abc import ABC, abstractmethod
from typing import List

from ..models import ModuleSnapshot, Violation


class Rule(ABC):
    """Contract for stateless rules evaluated over a module snapshot."""

    name: str = ""
    description: str = ""

    @abstractmethod
    def evaluate(self, snapshot: ModuleSnapshot) -> List[Violation]:
        """Return every violation found in the snapshot."""

    def violation(self, identity: str, reason: str) -> Violation:
        return Violation(identity=identity, reason=reason, rule=self.name)
