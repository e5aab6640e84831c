"""
MongoDB access for the version history.

``MongoStore`` owns the client and is opened/closed by the app lifespan.
``VersionRepository`` holds every query against the versions collection and
converts driver failures into ``StoreUnavailable``. Every pymongo call runs in
the threadpool so a slow or unreachable server never blocks the event loop.
"""

import logging
from functools import wraps
from typing import List, Optional

from pydantic import ValidationError
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from starlette.concurrency import run_in_threadpool

from wordtrail.config import Settings
from wordtrail.errors import StoreUnavailable
from wordtrail.models.schemas import Version

logger = logging.getLogger(__name__)

# newest first; _id breaks timestamp ties by insertion order
HISTORY_SORT = [("timestamp", DESCENDING), ("_id", DESCENDING)]


class MongoStore:
    """
    Explicit handle on the versions collection.

    Usage:
        store = MongoStore.from_settings(settings)
        store.connect()
        repo = VersionRepository(store.collection)
        ...
        store.close()
    """

    def __init__(
        self,
        uri: str,
        db_name: str,
        collection_name: str = "versions",
        timeout_ms: int = 5000,
        client: Optional[MongoClient] = None,
    ):
        self.uri = uri
        self.db_name = db_name
        self.collection_name = collection_name
        self.timeout_ms = timeout_ms
        self._client = client
        self._owns_client = client is None
        self._collection: Optional[Collection] = None

    @classmethod
    def from_settings(cls, settings: Settings, client: Optional[MongoClient] = None) -> "MongoStore":
        return cls(
            uri=settings.MONGODB_URI,
            db_name=settings.MONGODB_DB,
            collection_name=settings.MONGODB_COLLECTION,
            timeout_ms=settings.MONGODB_TIMEOUT_MS,
            client=client,
        )

    @property
    def connected(self) -> bool:
        return self._collection is not None

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            raise StoreUnavailable("Version store is not connected")
        return self._collection

    def connect(self) -> None:
        if self._collection is not None:
            logger.warning("MongoStore already connected")
            return

        if self._client is None:
            self._client = MongoClient(self.uri, serverSelectionTimeoutMS=self.timeout_ms)
            self._owns_client = True

        collection = self._client[self.db_name][self.collection_name]
        try:
            collection.create_index([("id", ASCENDING)], unique=True)
            collection.create_index(HISTORY_SORT)
        except PyMongoError as e:
            # app still starts; requests answer 500 until the server is reachable
            logger.error(f"Could not create version indexes: {e}")

        self._collection = collection
        logger.info(f"Version store ready: {self.db_name}.{self.collection_name}")

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None
        self._collection = None
        logger.info("Version store closed")


def _store_call(fn):
    """Re-raise driver errors and unreadable records as StoreUnavailable."""

    @wraps(fn)
    async def wrapper(*args, **kwargs):
        try:
            return await fn(*args, **kwargs)
        except PyMongoError as e:
            logger.error(f"Version store failure in {fn.__name__}: {e}")
            raise StoreUnavailable(str(e)) from e
        except ValidationError as e:
            logger.error(f"Unreadable version record in {fn.__name__}: {e}")
            raise StoreUnavailable("Stored version record is malformed") from e

    return wrapper


class VersionRepository:
    """All queries against the versions collection."""

    def __init__(self, collection: Collection):
        self.collection = collection

    @_store_call
    async def insert(self, version: Version) -> Version:
        await run_in_threadpool(self.collection.insert_one, version.to_document())
        return version

    @_store_call
    async def find_latest(self) -> Optional[Version]:
        doc = await run_in_threadpool(self.collection.find_one, {}, sort=HISTORY_SORT)
        return Version.from_document(doc) if doc else None

    @_store_call
    async def find_all_sorted(self) -> List[Version]:
        def fetch():
            return list(self.collection.find({}).sort(HISTORY_SORT))

        return [Version.from_document(d) for d in await run_in_threadpool(fetch)]

    @_store_call
    async def find_by_id(self, version_id: str) -> Optional[Version]:
        doc = await run_in_threadpool(self.collection.find_one, {"id": version_id})
        return Version.from_document(doc) if doc else None

    @_store_call
    async def delete_by_id(self, version_id: str) -> Optional[Version]:
        doc = await run_in_threadpool(self.collection.find_one_and_delete, {"id": version_id})
        return Version.from_document(doc) if doc else None
