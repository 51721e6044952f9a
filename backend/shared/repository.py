"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access.
"""

from typing import TypeVar, Generic
from supabase import AsyncClient


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses implement domain-specific data access and handle
    Pydantic model to row mapping internally.

    Example:
        class ProfileRepository(BaseRepository[ProfileRecord]):
            async def get(self, uid: str) -> Optional[ProfileRecord]:
                result = await self._db.table("users").select("*").eq("uid", uid).execute()
                if not result.data:
                    return None
                return ProfileRecord(**result.data[0])
    """

    def __init__(self, db: AsyncClient) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Async Supabase client instance for database operations.
        """
        self._db = db
