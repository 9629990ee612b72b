"""
Document Store
==============

Collection store interface consumed by the storefront services,
with an in-memory backend for development and tests.
"""

from .base import Document, DocumentNotFound, DocumentStore, StoreError
from .memory import InMemoryDocumentStore

__all__ = ["Document", "DocumentNotFound", "DocumentStore", "InMemoryDocumentStore", "StoreError"]
