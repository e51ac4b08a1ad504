"""Record Source Port Interface."""

from abc import ABC, abstractmethod
from typing import Any


class RecordSourcePort(ABC):
    """Abstract interface for anything that supplies records to search."""

    @abstractmethod
    def load(self) -> list[dict[str, Any]]:
        """Return all records as plain dictionaries."""
        ...
