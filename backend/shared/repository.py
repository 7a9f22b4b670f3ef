"""
Base repository class for database access.

Provides a common abstraction layer for all Supabase-backed repositories,
encapsulating client access and the helpers shared by data operations.
"""

from datetime import datetime
from typing import TypeVar, Generic, Optional, Any
from supabase import Client


T = TypeVar("T")

# Postgres error code for unique_violation
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Base class for all Supabase repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class ProductRepository(BaseRepository[Product]):
            def get(self, product_id: str) -> Optional[Product]:
                result = self._db.table("products").select("*").eq("id", product_id).execute()
                if not result.data:
                    return None
                return self._map_to_product(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _parse_datetime(value: Any) -> Optional[datetime]:
        """Parse an ISO timestamp from a PostgREST row."""
        if value is None or isinstance(value, datetime):
            return value
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
