"""
Record storage abstract base class
Records are plain JSON-compatible dicts grouped into named collections
"""
from abc import ABC, abstractmethod
from typing import Callable, List, Optional


class Repository(ABC):
    """Key/value record store"""

    @abstractmethod
    def save(self, collection: str, record_id: str, data: dict) -> None:
        """Insert or replace a record"""
        ...

    @abstractmethod
    def get(self, collection: str, record_id: str) -> Optional[dict]:
        """Return the record, or None if it does not exist"""
        ...

    @abstractmethod
    def list(self, collection: str) -> List[dict]:
        """Return every record of the collection"""
        ...

    @abstractmethod
    def delete(self, collection: str, record_id: str) -> bool:
        """Delete a record; return whether it existed"""
        ...

    def find(self, collection: str, predicate: Callable[[dict], bool]) -> List[dict]:
        """Records of the collection matching ``predicate``"""
        return [record for record in self.list(collection) if predicate(record)]
