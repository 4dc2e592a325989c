"""
Base repository with common CRUD operations.
Follows Single Responsibility Principle - only handles data access.
"""

from abc import ABC
from typing import Any, Dict, List, Mapping, Optional, Type

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from weekplanner.core.database import MongoStore
from weekplanner.core.errors import NotFoundError, StoreError
from weekplanner.core.logger import logger


class BaseRepository(ABC):
    """
    Base repository providing common CRUD operations.
    All repositories should inherit from this class.

    Every method talks to the store directly; there is no caching and no
    locking, so concurrent writes to one document are last-write-wins.
    """

    entity_name = "Record"
    model: Type[BaseModel]

    def __init__(self, store: MongoStore, collection_name: str):
        """
        Initialize repository.

        Args:
            store: Connected store handle
            collection_name: Name of MongoDB collection
        """
        self.store = store
        self.collection_name = collection_name
        logger.debug(f"{type(self).__name__} initialized for collection: {collection_name}")

    @property
    def collection(self) -> AsyncIOMotorCollection:
        """Get MongoDB collection."""
        return self.store.get_collection(self.collection_name)

    def object_id(self, record_id: str) -> ObjectId:
        """
        Convert a caller-supplied identifier to an ObjectId.

        Raises:
            NotFoundError: If the identifier is malformed; such an id can
                never resolve to a stored record.
        """
        try:
            return ObjectId(record_id)
        except (InvalidId, TypeError):
            logger.warning(f"⚠️ Malformed {self.entity_name} id: {record_id!r}")
            raise NotFoundError(f"{self.entity_name} not found: {record_id}")

    def _not_found(self, record_id: str) -> NotFoundError:
        logger.warning(f"⚠️ {self.entity_name} not found: id={record_id}")
        return NotFoundError(f"{self.entity_name} not found: {record_id}")

    def _store_error(self, action: str, error: PyMongoError) -> StoreError:
        logger.error(f"❌ Failed to {action} in {self.collection_name}: {error}")
        logger.exception(f"{self.entity_name} {action} error details:")
        return StoreError(f"Failed to {action}: {error}", cause=error)

    def _to_model(self, document: Mapping[str, Any]):
        """Build the entity model; a stored document that does not fit is a StoreError."""
        try:
            return self.model.from_document(document)
        except PydanticValidationError as e:
            logger.error(f"❌ Malformed {self.entity_name} document {document.get('_id')}: {e}")
            raise StoreError(
                f"Malformed {self.entity_name} document: {document.get('_id')}", cause=e
            ) from e

    async def find_all(self) -> List[Dict[str, Any]]:
        """Return every document in store order."""
        try:
            cursor = self.collection.find({})
            documents = [document async for document in cursor]
        except PyMongoError as e:
            raise self._store_error("list documents", e) from e

        logger.debug(f"🔍 Found {len(documents)} documents in {self.collection_name}")
        return documents

    async def find_by_id(self, record_id: str) -> Dict[str, Any]:
        """
        Find document by ID.

        Raises:
            NotFoundError: If no document has this id
            StoreError: If the query fails
        """
        oid = self.object_id(record_id)
        try:
            document = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise self._store_error("find document", e) from e

        if document is None:
            raise self._not_found(record_id)
        return document

    async def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a document and return it with its new `_id`.

        Raises:
            StoreError: If the insert fails
        """
        document = dict(document)
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            raise self._store_error("create document", e) from e

        document["_id"] = result.inserted_id
        logger.debug(f"Created document in {self.collection_name}: {result.inserted_id}")
        return document

    async def replace_by_id(
        self, record_id: str, document: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Overwrite a whole document. Keys missing from `document` are gone afterwards.

        Raises:
            NotFoundError: If no document has this id
            StoreError: If the write fails
        """
        oid = self.object_id(record_id)
        try:
            updated = await self.collection.find_one_and_replace(
                {"_id": oid}, document, return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            raise self._store_error("replace document", e) from e

        if updated is None:
            raise self._not_found(record_id)
        logger.debug(f"Replaced document in {self.collection_name}: {record_id}")
        return updated

    async def update_by_id(
        self, record_id: str, update_data: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        $set the given keys on one document and return the result.
        An empty update is a plain read.

        Raises:
            NotFoundError: If no document has this id
            StoreError: If the write fails
        """
        if not update_data:
            return await self.find_by_id(record_id)

        oid = self.object_id(record_id)
        try:
            updated = await self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": update_data},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise self._store_error("update document", e) from e

        if updated is None:
            raise self._not_found(record_id)
        logger.debug(f"Updated document in {self.collection_name}: {record_id}")
        return updated

    async def delete_by_id(self, record_id: str) -> Dict[str, Any]:
        """
        Delete a document and return its state before deletion.

        Raises:
            NotFoundError: If no document has this id
            StoreError: If the delete fails
        """
        oid = self.object_id(record_id)
        try:
            deleted: Optional[Dict[str, Any]] = await self.collection.find_one_and_delete(
                {"_id": oid}
            )
        except PyMongoError as e:
            raise self._store_error("delete document", e) from e

        if deleted is None:
            raise self._not_found(record_id)
        logger.debug(f"Deleted document in {self.collection_name}: {record_id}")
        return deleted
