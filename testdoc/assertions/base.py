"""Base classes for assertion detector plugins."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import AssertionFragment


class AssertionDetector(ABC):
    """Contract for strategies that recognise an assertion in one source line."""

    @abstractmethod
    def detect(self, line: str) -> Optional[AssertionFragment]:
        """Return a fragment for ``line`` or None when it is not recognised."""
