"""Document store access used by the service layer."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Protocol

from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1.field_path import FieldPath

from rasoisetu.errors import NotFoundError, StorageError

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Keyed document storage with equality queries.

    Documents are plain dicts. Every document returned carries its id under
    the ``"id"`` key. Dotted keys passed to ``update`` address fields nested
    inside map fields and are merged atomically; build them with
    ``field_path`` when a key comes from user input.
    """

    def insert(self, collection: str, document: dict[str, Any]) -> str: ...

    def set(self, collection: str, doc_id: str, document: dict[str, Any]) -> None: ...

    def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None: ...

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None: ...

    def delete(self, collection: str, doc_id: str) -> None: ...

    def query_by_equality(
        self,
        collection: str,
        field: str,
        value: Any,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]: ...

    def list_all(
        self, collection: str, order_by: str | None = None
    ) -> list[dict[str, Any]]: ...


def field_path(*keys: str) -> str:
    """Join map keys into an ``update`` field path.

    Keys that are not plain identifiers (``vendor.one``, ``a@b.com``) are
    backtick-quoted so they stay a single map key.
    """
    return FieldPath(*keys).to_api_repr()


def _to_document(snapshot: DocumentSnapshot) -> dict[str, Any]:
    """Flatten a snapshot into a dict that includes its id."""
    data = snapshot.to_dict() or {}
    data["id"] = snapshot.id
    return data


@contextmanager
def _storage_errors(action: str) -> Iterator[None]:
    """Translate Google API failures into application errors."""
    try:
        yield
    except google_exceptions.NotFound as e:
        raise NotFoundError(f"Document not found while {action}.") from e
    except (google_exceptions.GoogleAPICallError, google_exceptions.RetryError) as e:
        logger.error(f"Firestore error while {action}: {e}")
        raise StorageError() from e


class FirestoreDocumentStore:
    """DocumentStore backed by a Firestore client."""

    def __init__(self, db: Client) -> None:
        """Wrap an existing Firestore client."""
        self.db = db

    def insert(self, collection: str, document: dict[str, Any]) -> str:
        """Add a document with a store-assigned id and return the id."""
        with _storage_errors(f"adding to {collection}"):
            _, doc_ref = self.db.collection(collection).add(document)
        return doc_ref.id

    def set(self, collection: str, doc_id: str, document: dict[str, Any]) -> None:
        """Create or overwrite the document with a known id."""
        with _storage_errors(f"writing {collection}/{doc_id}"):
            self.db.collection(collection).document(doc_id).set(document)

    def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        """Apply a partial update to an existing document."""
        with _storage_errors(f"updating {collection}/{doc_id}"):
            self.db.collection(collection).document(doc_id).update(fields)

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Fetch one document, or None if it does not exist."""
        with _storage_errors(f"reading {collection}/{doc_id}"):
            snapshot = self.db.collection(collection).document(doc_id).get()
        if not snapshot.exists:
            return None
        return _to_document(snapshot)

    def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document."""
        with _storage_errors(f"deleting {collection}/{doc_id}"):
            self.db.collection(collection).document(doc_id).delete()

    def query_by_equality(
        self,
        collection: str,
        field: str,
        value: Any,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """Return documents whose ``field`` equals ``value``."""
        query = self.db.collection(collection).where(
            filter=firestore.FieldFilter(field, "==", value)
        )
        if order_by:
            direction = (
                firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            )
            query = query.order_by(order_by, direction=direction)
        with _storage_errors(f"querying {collection}"):
            return [_to_document(doc) for doc in query.stream()]

    def list_all(
        self, collection: str, order_by: str | None = None
    ) -> list[dict[str, Any]]:
        """Return every document in a collection."""
        query: Any = self.db.collection(collection)
        if order_by:
            query = query.order_by(order_by, direction=firestore.Query.ASCENDING)
        with _storage_errors(f"listing {collection}"):
            return [_to_document(doc) for doc in query.stream()]


def get_store() -> FirestoreDocumentStore:
    """Return a store bound to the default Firebase app."""
    return FirestoreDocumentStore(firestore.client())
