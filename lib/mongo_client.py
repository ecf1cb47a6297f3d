# =============================================================================
# lib/mongo_client.py - MongoDB Store Wrapper
# =============================================================================
# This module provides a thin wrapper over a pymongo Database with the small
# set of document operations the services need:
# - find_by_id / find_one / find
# - create / save
# - find_one_and_update (optionally as an upsert)
# - find_one_and_remove / delete_many
#
# Driver exceptions are converted to MongoStoreError so callers never have to
# import pymongo. Unique index violations surface as DuplicateDocumentError.
#
# The store is built once at startup from the application settings and then
# handed to request handlers through FastAPI dependencies.
#
# Usage:
#   store = MongoStore.from_settings(settings)
#   store.ensure_indexes()
#   user = store.find_one(USERS, {"email": "jane@example.com"})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from bson import ObjectId
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from lib.utils import ApplicationError, to_object_id

# Set up logging for this module
logger = logging.getLogger(__name__)

# Collection names
USERS = "users"
PROFILES = "profiles"
POSTS = "posts"

Document = dict[str, Any]


class MongoStoreError(ApplicationError):
    """
    Error during MongoDB operations.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "MONGO_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class DuplicateDocumentError(MongoStoreError):
    """Raised when a write violates a unique index."""

    def __init__(self, collection: str, error: str):
        super().__init__(
            message=f"Duplicate document in {collection}: {error}",
            code="DUPLICATE_DOCUMENT",
            details={"collection": collection},
        )
        self.collection = collection


class MongoStore:
    """
    Document store over a single MongoDB database.

    Example:
        store = MongoStore(MongoClient(uri)["devnet"])

        # Fetch a post by id (None for unknown or malformed ids)
        post = store.find_by_id(POSTS, post_id)

        # Replace it after editing its likes
        post["likes"] = new_likes
        store.save(POSTS, post)
    """

    def __init__(self, database: Database, client: MongoClient | None = None):
        self.database = database
        self._client = client

    @classmethod
    def from_settings(cls, settings) -> MongoStore:
        """
        Create a store from application settings.

        pymongo connects lazily, so this never blocks; the first query (or
        ping()) is what actually reaches the server.

        Raises:
            MongoStoreError: If the client cannot be created (bad URI)
        """
        try:
            client = MongoClient(
                settings.MONGO_URI,
                serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS,
                tz_aware=True,
            )
        except (PyMongoError, ValueError) as e:
            raise MongoStoreError(
                message=f"Failed to create MongoDB client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check MONGO_URI in your .env file",
            )
        logger.info(f"MongoDB client initialized for database '{settings.MONGO_DB_NAME}'")
        return cls(client[settings.MONGO_DB_NAME], client=client)

    def close(self) -> None:
        """Close the underlying client if this store owns one."""
        if self._client is not None:
            self._client.close()

    # -------------------------------------------------------------------------
    # Setup & Health
    # -------------------------------------------------------------------------

    def ensure_indexes(self) -> None:
        """
        Create the unique indexes the data model relies on.

        - users.email: one account per email
        - profiles.user: at most one profile per user
        """
        try:
            self.database[USERS].create_index([("email", ASCENDING)], unique=True)
            self.database[PROFILES].create_index([("user", ASCENDING)], unique=True)
            self.database[POSTS].create_index([("date", ASCENDING)])
            logger.info("MongoDB indexes ensured")
        except PyMongoError as e:
            raise MongoStoreError(
                message=f"Failed to create indexes: {e}",
                code="INDEX_FAILED",
                suggestion="Check for existing duplicate emails or profiles",
            )

    def ping(self) -> bool:
        """Round-trip to the server. Raises MongoStoreError when unreachable."""
        try:
            self.database.command("ping")
            return True
        except PyMongoError as e:
            raise MongoStoreError(
                message=f"MongoDB ping failed: {e}",
                code="PING_FAILED",
                suggestion="Check that MongoDB is running and MONGO_URI is correct",
            )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find_by_id(
        self,
        collection: str,
        document_id: str | ObjectId,
        projection: dict[str, Any] | None = None,
    ) -> Document | None:
        """
        Fetch a document by its _id.

        Returns None both when nothing matches and when `document_id` is not
        a valid ObjectId.
        """
        object_id = to_object_id(document_id)
        if object_id is None:
            return None
        return self.find_one(collection, {"_id": object_id}, projection)

    def find_one(
        self,
        collection: str,
        filter: dict[str, Any],
        projection: dict[str, Any] | None = None,
    ) -> Document | None:
        """Fetch the first document matching `filter`, or None."""
        try:
            return self.database[collection].find_one(filter, projection)
        except PyMongoError as e:
            raise MongoStoreError(
                message=f"Failed to query {collection}: {e}",
                code="FIND_FAILED",
                details={"collection": collection},
            )

    def find(
        self,
        collection: str,
        filter: dict[str, Any] | None = None,
        projection: dict[str, Any] | None = None,
        sort: list[tuple[str, int]] | None = None,
    ) -> list[Document]:
        """Fetch all documents matching `filter`, optionally sorted."""
        try:
            cursor = self.database[collection].find(filter or {}, projection)
            if sort:
                cursor = cursor.sort(sort)
            return list(cursor)
        except PyMongoError as e:
            raise MongoStoreError(
                message=f"Failed to list {collection}: {e}",
                code="FIND_FAILED",
                details={"collection": collection},
            )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, collection: str, document: Document) -> Document:
        """
        Insert a new document.

        Returns:
            The inserted document including its generated _id

        Raises:
            DuplicateDocumentError: If a unique index is violated
        """
        document = dict(document)
        try:
            result = self.database[collection].insert_one(document)
        except DuplicateKeyError as e:
            raise DuplicateDocumentError(collection, str(e))
        except PyMongoError as e:
            raise MongoStoreError(
                message=f"Failed to insert into {collection}: {e}",
                code="INSERT_FAILED",
                details={"collection": collection},
            )
        document["_id"] = result.inserted_id
        logger.debug(f"Inserted {collection} document {result.inserted_id}")
        return document

    def save(self, collection: str, document: Document) -> Document:
        """
        Replace an existing document (matched on _id) with `document`.

        Raises:
            MongoStoreError: If the document has no _id or the write fails
        """
        if "_id" not in document:
            raise MongoStoreError(
                message=f"Cannot save a {collection} document without an _id",
                code="SAVE_WITHOUT_ID",
                suggestion="Use create() for new documents",
            )
        try:
            self.database[collection].replace_one({"_id": document["_id"]}, document)
        except DuplicateKeyError as e:
            raise DuplicateDocumentError(collection, str(e))
        except PyMongoError as e:
            raise MongoStoreError(
                message=f"Failed to save {collection} document: {e}",
                code="SAVE_FAILED",
                details={"collection": collection, "id": str(document["_id"])},
            )
        return document

    def find_one_and_update(
        self,
        collection: str,
        filter: dict[str, Any],
        update: dict[str, Any],
        upsert: bool = False,
    ) -> Document | None:
        """
        Apply `update` to the first match and return the updated document.

        With upsert=True a missing document is created from the filter and
        the update in the same server-side operation.

        Raises:
            DuplicateDocumentError: If the write violates a unique index
                (e.g. two concurrent upserts for the same profile owner)
        """
        try:
            return self.database[collection].find_one_and_update(
                filter,
                update,
                upsert=upsert,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise DuplicateDocumentError(collection, str(e))
        except PyMongoError as e:
            raise MongoStoreError(
                message=f"Failed to update {collection}: {e}",
                code="UPDATE_FAILED",
                details={"collection": collection},
            )

    def find_one_and_remove(self, collection: str, filter: dict[str, Any]) -> Document | None:
        """Delete the first match and return it, or None if nothing matched."""
        try:
            return self.database[collection].find_one_and_delete(filter)
        except PyMongoError as e:
            raise MongoStoreError(
                message=f"Failed to delete from {collection}: {e}",
                code="DELETE_FAILED",
                details={"collection": collection},
            )

    def delete_many(self, collection: str, filter: dict[str, Any]) -> int:
        """Delete every match. Returns the number of deleted documents."""
        try:
            result = self.database[collection].delete_many(filter)
            return result.deleted_count
        except PyMongoError as e:
            raise MongoStoreError(
                message=f"Failed to delete from {collection}: {e}",
                code="DELETE_FAILED",
                details={"collection": collection},
            )
