import asyncio
import logging
from contextlib import AsyncExitStack
from datetime import datetime, timezone
from typing import Callable, List, Optional

from bson import ObjectId

from wordtrail.db.mongo import VersionRepository
from wordtrail.errors import InvalidInput, NotFound
from wordtrail.models.schemas import Version
from wordtrail.services.diff import compute_diff, tokenize

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current UTC time at the store's millisecond resolution."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def new_version_id() -> str:
    return str(ObjectId())


class VersionStore:
    """
    Append-only history of text snapshots.

    save_version reads the latest snapshot and then inserts the new one; the
    two steps are not atomic, so concurrent saves may share a baseline.
    Pass serialize_saves=True to hold an in-process lock across both steps.
    """

    def __init__(
        self,
        repository: VersionRepository,
        serialize_saves: bool = False,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_version_id,
    ):
        self.repository = repository
        self.clock = clock
        self.id_factory = id_factory
        self._save_lock = asyncio.Lock() if serialize_saves else None

    async def save_version(self, new_text: Optional[str]) -> Version:
        if not new_text:
            raise InvalidInput("newText is required")

        async with AsyncExitStack() as stack:
            if self._save_lock is not None:
                await stack.enter_async_context(self._save_lock)

            latest = await self.repository.find_latest()
            previous_text = latest.new_text if latest else ""

            diff = compute_diff(previous_text, new_text)
            version = Version(
                id=self.id_factory(),
                timestamp=self.clock(),
                previous_text=previous_text,
                new_text=new_text,
                added_words=diff.added,
                removed_words=diff.removed,
                old_length=len(tokenize(previous_text)),
                new_length=len(tokenize(new_text)),
            )
            saved = await self.repository.insert(version)

        logger.info(
            f"Saved version {saved.id} (+{len(saved.added_words)} / -{len(saved.removed_words)})"
        )
        return saved

    async def list_versions(self) -> List[Version]:
        return await self.repository.find_all_sorted()

    async def get_version(self, version_id: str) -> Version:
        version = await self.repository.find_by_id(version_id)
        if version is None:
            raise NotFound("Version not found")
        return version

    async def delete_version(self, version_id: str) -> Version:
        deleted = await self.repository.delete_by_id(version_id)
        if deleted is None:
            raise NotFound("Version not found")
        logger.info(f"Deleted version {version_id}")
        return deleted
