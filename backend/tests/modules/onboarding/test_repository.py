from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from supabase import PostgrestAPIError

from modules.onboarding.exceptions import DocumentWriteError
from modules.onboarding.repository import SupabaseDocumentStore


@pytest.fixture
def db():
    client = MagicMock()
    client.table.return_value.upsert.return_value.execute = AsyncMock()
    return client


class TestSupabaseDocumentStore:
    @pytest.mark.asyncio
    async def test_upserts_on_uid(self, db):
        """Should upsert the row keyed by uid."""
        store = SupabaseDocumentStore(db)

        await store.upsert("users", "user-1", {"email": "a@example.com", "created_at": "now"})

        db.table.assert_called_once_with("users")
        db.table.return_value.upsert.assert_called_once_with(
            {"email": "a@example.com", "created_at": "now", "uid": "user-1"},
            on_conflict="uid",
        )
        db.table.return_value.upsert.return_value.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_key_wins_over_record(self, db):
        store = SupabaseDocumentStore(db)

        await store.upsert("users", "user-1", {"uid": "someone-else"})

        row = db.table.return_value.upsert.call_args.args[0]
        assert row["uid"] == "user-1"

    @pytest.mark.asyncio
    async def test_postgrest_error(self, db):
        """Should raise DocumentWriteError when PostgREST rejects the write."""
        db.table.return_value.upsert.return_value.execute.side_effect = PostgrestAPIError(
            {"message": "permission denied", "code": "42501"}
        )
        store = SupabaseDocumentStore(db)

        with pytest.raises(DocumentWriteError) as exc_info:
            await store.upsert("waitinglist", "user-1", {})

        assert exc_info.value.collection == "waitinglist"
        assert exc_info.value.key == "user-1"

    @pytest.mark.asyncio
    async def test_transport_error(self, db):
        db.table.return_value.upsert.return_value.execute.side_effect = httpx.ConnectError("down")
        store = SupabaseDocumentStore(db)

        with pytest.raises(DocumentWriteError):
            await store.upsert("users", "user-1", {})
