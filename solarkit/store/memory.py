from __future__ import annotations

import copy
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .base import Document, DocumentNotFound, DocumentStore, Filter, Listener, Snapshot, Unsubscribe

logger = logging.getLogger(__name__)


@dataclass
class _Subscription:
    collection: str
    listener: Listener
    where: Sequence[Filter]
    order_by: Optional[str]
    descending: bool
    active: bool = True


def _sort_key(field: str):
    def key(doc: Document):
        value = doc.data.get(field)
        return (value is not None, value if value is not None else 0)
    return key


class InMemoryDocumentStore(DocumentStore):
    """
    Process-local document store.

    Documents are deep-copied on the way in and out so callers never share
    mutable state with the store. Listeners run synchronously after writes.
    """

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._subscriptions: List[_Subscription] = []

    def _coll(self, collection: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        data = self._coll(collection).get(doc_id)
        if data is None:
            return None
        return Document(id=doc_id, data=copy.deepcopy(data))

    def add(self, collection: str, data: Dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex[:20]
        self._coll(collection)[doc_id] = copy.deepcopy(data)
        self._notify(collection)
        return doc_id

    def set(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        self._coll(collection)[doc_id] = copy.deepcopy(data)
        self._notify(collection)

    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        coll = self._coll(collection)
        if doc_id not in coll:
            raise DocumentNotFound(collection, doc_id)
        coll[doc_id].update(copy.deepcopy(fields))
        self._notify(collection)

    def delete(self, collection: str, doc_id: str) -> None:
        if self._coll(collection).pop(doc_id, None) is not None:
            self._notify(collection)

    def query(
        self,
        collection: str,
        where: Sequence[Filter] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> Snapshot:
        docs = [
            Document(id=doc_id, data=copy.deepcopy(data))
            for doc_id, data in self._coll(collection).items()
            if all(data.get(field) == value for field, value in where)
        ]
        if order_by:
            docs.sort(key=_sort_key(order_by), reverse=descending)
        if limit is not None:
            docs = docs[: max(0, limit)]
        return docs

    def subscribe(
        self,
        collection: str,
        listener: Listener,
        where: Sequence[Filter] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Unsubscribe:
        sub = _Subscription(collection, listener, tuple(where), order_by, descending)
        self._subscriptions.append(sub)
        listener(self.query(collection, sub.where, order_by, descending))

        def unsubscribe() -> None:
            sub.active = False
            if sub in self._subscriptions:
                self._subscriptions.remove(sub)

        return unsubscribe

    def _notify(self, collection: str) -> None:
        for sub in list(self._subscriptions):
            if sub.active and sub.collection == collection:
                logger.debug("Notifying listener on %s", collection)
                sub.listener(self.query(collection, sub.where, sub.order_by, sub.descending))
