"""
Document store backed by Supabase tables.

Each collection is a table keyed by ``uid``; writes are upserts so a
record is replaced, never duplicated.
"""

import logging
from typing import Any

import httpx
from supabase import PostgrestAPIError

from shared.repository import BaseRepository

from .exceptions import DocumentWriteError
from .interfaces import IDocumentStore

logger = logging.getLogger(__name__)

KEY_COLUMN = "uid"


class SupabaseDocumentStore(BaseRepository[dict], IDocumentStore):
    """
    Repository for onboarding records.

    Does NOT check who the record belongs to; the onboarding service
    only ever writes the current identity's records.
    """

    async def upsert(self, collection: str, key: str, record: dict[str, Any]) -> None:
        row = {**record, KEY_COLUMN: key}
        try:
            await self._db.table(collection).upsert(row, on_conflict=KEY_COLUMN).execute()
        except (PostgrestAPIError, httpx.HTTPError) as e:
            logger.warning("Upsert into %s failed for %s: %s", collection, key, e)
            raise DocumentWriteError(collection, key, str(e)) from e
        logger.debug("Upserted %s/%s", collection, key)
