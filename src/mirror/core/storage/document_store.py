"""Document store interface and implementations.

Provides a unified interface over a MongoDB-like collection with a motor
backed implementation for production and an in-memory fallback used by
tests and the ``memory`` backend.
"""

from __future__ import annotations

import copy
import uuid
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from loguru import logger

from src.mirror.core.errors import UpstreamFailure

Document = dict[str, Any]
Filter = Mapping[str, Any]
SortSpec = Sequence[tuple[str, int]]

# Storage-native identity; stripped from every document handed back to callers.
STORAGE_ID = "_id"


class DocumentStore(ABC):
    """Abstract interface for a single document collection."""

    @abstractmethod
    async def find_one(self, query: Filter) -> Document | None:
        """Return the first document matching ``query`` or None."""
        pass

    @abstractmethod
    async def find(self, query: Filter, sort: SortSpec | None = None) -> list[Document]:
        """Return every document matching ``query``.

        Args:
            query: Equality / ``$in`` filter
            sort: Optional list of (field, direction) pairs, 1 ascending, -1 descending
        """
        pass

    @abstractmethod
    async def insert_one(self, document: Document) -> None:
        pass

    @abstractmethod
    async def insert_many(self, documents: Sequence[Document]) -> None:
        pass

    @abstractmethod
    async def delete_one(self, query: Filter) -> int:
        """Delete the first matching document.

        Returns:
            Number of documents deleted (0 or 1)
        """
        pass

    @abstractmethod
    async def delete_many(self, query: Filter) -> int:
        """Delete every matching document.

        Returns:
            Number of documents deleted
        """
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the backend is reachable."""
        pass


def _matches(document: Document, query: Filter) -> bool:
    for field, condition in query.items():
        value = document.get(field)
        if isinstance(condition, Mapping):
            for operator, operand in condition.items():
                if operator == "$in":
                    if value not in list(operand):
                        return False
                elif operator == "$eq":
                    if value != operand:
                        return False
                else:
                    raise ValueError(f"Unsupported query operator: {operator}")
        elif value != condition:
            return False
    return True


def _public(document: Document) -> Document:
    result = copy.deepcopy(document)
    result.pop(STORAGE_ID, None)
    return result


class InMemoryDocumentStore(DocumentStore):
    """In-memory collection supporting equality and ``$in`` filters."""

    def __init__(self, name: str = "collection"):
        self.name = name
        self._documents: list[Document] = []

    async def find_one(self, query: Filter) -> Document | None:
        for document in self._documents:
            if _matches(document, query):
                return _public(document)
        return None

    async def find(self, query: Filter, sort: SortSpec | None = None) -> list[Document]:
        found = [_public(doc) for doc in self._documents if _matches(doc, query)]
        # Stable sorts applied last-key-first give a multi-key ordering
        for field, direction in reversed(list(sort or [])):
            found.sort(key=lambda doc: doc.get(field), reverse=direction < 0)
        return found

    async def insert_one(self, document: Document) -> None:
        stored = copy.deepcopy(document)
        stored.setdefault(STORAGE_ID, uuid.uuid4().hex)
        self._documents.append(stored)

    async def insert_many(self, documents: Sequence[Document]) -> None:
        for document in documents:
            await self.insert_one(document)

    async def delete_one(self, query: Filter) -> int:
        for index, document in enumerate(self._documents):
            if _matches(document, query):
                del self._documents[index]
                return 1
        return 0

    async def delete_many(self, query: Filter) -> int:
        kept = [doc for doc in self._documents if not _matches(doc, query)]
        deleted = len(self._documents) - len(kept)
        self._documents = kept
        return deleted

    async def ping(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._documents)


@contextmanager
def _translate_errors(operation: str, collection: str) -> Iterator[None]:
    from pymongo.errors import PyMongoError

    try:
        yield
    except PyMongoError as exc:
        logger.bind(collection=collection, error_type=type(exc).__name__).error(
            "store.{} failed: {}", operation, exc
        )
        raise UpstreamFailure(f"Document store {operation} failed") from exc


class MongoDocumentStore(DocumentStore):
    """Document store backed by a motor collection."""

    _PROJECTION = {STORAGE_ID: 0}

    def __init__(self, collection):
        """
        Args:
            collection: ``AsyncIOMotorCollection`` to operate on
        """
        self._collection = collection
        self.name = collection.name

    async def find_one(self, query: Filter) -> Document | None:
        with _translate_errors("find_one", self.name):
            return await self._collection.find_one(dict(query), self._PROJECTION)

    async def find(self, query: Filter, sort: SortSpec | None = None) -> list[Document]:
        with _translate_errors("find", self.name):
            cursor = self._collection.find(dict(query), self._PROJECTION)
            if sort:
                cursor = cursor.sort(list(sort))
            return await cursor.to_list(length=None)

    async def insert_one(self, document: Document) -> None:
        # insert_one mutates its argument by adding _id
        with _translate_errors("insert_one", self.name):
            await self._collection.insert_one(dict(document))

    async def insert_many(self, documents: Sequence[Document]) -> None:
        if not documents:
            return
        with _translate_errors("insert_many", self.name):
            await self._collection.insert_many([dict(doc) for doc in documents])

    async def delete_one(self, query: Filter) -> int:
        with _translate_errors("delete_one", self.name):
            result = await self._collection.delete_one(dict(query))
            return result.deleted_count

    async def delete_many(self, query: Filter) -> int:
        with _translate_errors("delete_many", self.name):
            result = await self._collection.delete_many(dict(query))
            return result.deleted_count

    async def ping(self) -> bool:
        try:
            await self._collection.database.command("ping")
            return True
        except Exception as e:
            logger.error(
                "Document store health check failed",
                extra={
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            return False
