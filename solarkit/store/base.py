"""
Document Store Interface
========================

Abstract interface for the document database the storefront runs on.
Collections hold JSON-like documents keyed by opaque string ids.
Writes are last-write-wins; there are no transactions.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple


class StoreError(Exception):
    """Backend failure (connectivity, permissions, quota)."""


class DocumentNotFound(StoreError, KeyError):
    """The addressed document does not exist."""

    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"{collection}/{doc_id}")


@dataclass(frozen=True)
class Document:
    """A stored document and its id."""
    id: str
    data: Dict[str, Any]

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


Filter = Tuple[str, Any]
Snapshot = List[Document]
Listener = Callable[[Snapshot], None]
Unsubscribe = Callable[[], None]


class DocumentStore(ABC):
    """
    Abstract base class for document store backends.

    Each backend must implement:
    - Point reads and writes by id
    - Equality-filtered queries with ordering and limit
    - Change subscriptions on a collection
    """

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Fetch one document, or None if it does not exist."""

    @abstractmethod
    def add(self, collection: str, data: Dict[str, Any]) -> str:
        """Create a document with a generated id and return the id."""

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        """Create or overwrite a document under a known id."""

    @abstractmethod
    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        """Merge fields into an existing document. Raises DocumentNotFound."""

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        """Remove a document. Deleting a missing document is a no-op."""

    @abstractmethod
    def query(
        self,
        collection: str,
        where: Sequence[Filter] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> Snapshot:
        """
        Query a collection.

        Args:
            collection: Collection name
            where: (field, value) equality filters, all of which must match
            order_by: Field to sort by; documents missing it rank lowest
            descending: Reverse the ordering
            limit: Maximum number of documents returned

        Returns:
            Matching documents
        """

    @abstractmethod
    def subscribe(
        self,
        collection: str,
        listener: Listener,
        where: Sequence[Filter] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Unsubscribe:
        """
        Watch a query for changes.

        The listener receives the current snapshot immediately and again
        after every write that touches the collection. Returns a callable
        that stops delivery.
        """

    def require(self, collection: str, doc_id: str) -> Document:
        """Fetch one document or raise DocumentNotFound."""
        doc = self.get(collection, doc_id)
        if doc is None:
            raise DocumentNotFound(collection, doc_id)
        return doc
