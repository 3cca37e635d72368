"""
Base Repository - common interface for every store.

Every repository receives the database client in its constructor, so tests
can pass a fake client instead of patching imports. Store failures are
raised as StoreError carrying the failing stage; the repositories never
retry.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Generic, List, Optional, TypeVar

from dateutil.parser import isoparse

from app.core.exceptions import StoreError
from app.core.timezone import to_utc

logger = logging.getLogger(__name__)

# Type variable for entities
T = TypeVar('T')


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a timestamp column (ISO string or datetime) into aware UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_utc(value)
    return to_utc(isoparse(str(value)))


class BaseRepository(ABC, Generic[T]):
    """
    Base interface for repositories.

    Attributes:
        db: Database client (Supabase, fake, etc.)
        table_name: Table name in the database

    Example:
        class CustomerRepository(BaseRepository[Customer]):
            @property
            def table_name(self) -> str:
                return "customers"
    """

    def __init__(self, db_client: Any):
        """
        Initialize the repository.

        Args:
            db_client: Database client (Supabase, fake, etc.)
        """
        self.db = db_client

    @property
    @abstractmethod
    def table_name(self) -> str:
        """Table name in the database."""
        pass

    @abstractmethod
    async def list_all(self) -> List[T]:
        """List every entity of the table."""
        pass

    def _table(self):
        return self.db.table(self.table_name)

    def _execute(self, query: Any, stage: str, **context: Any) -> Any:
        """
        Run a query, converting any client failure into StoreError.

        Args:
            query: Query builder ready for .execute()
            stage: Name of the operation, reported on failure
            **context: Extra identifiers for the error details (campaign_id, ...)

        Returns:
            Response object from the client
        """
        try:
            return query.execute()
        except Exception as e:
            logger.error(
                f"Error on {self.table_name} ({stage}): {e}",
                extra={"stage": stage, "details": context},
            )
            raise StoreError(
                f"{self.table_name} store failed during {stage}",
                stage=stage,
                details=context,
                original_error=e,
            ) from e
