"""Core module for the rasoisetu application."""

from .store import DocumentStore, FirestoreDocumentStore, field_path, get_store
from .types import FirestoreDocument

__all__ = [
    "DocumentStore",
    "FirestoreDocument",
    "FirestoreDocumentStore",
    "field_path",
    "get_store",
]
