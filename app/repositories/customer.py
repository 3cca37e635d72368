"""
Repository for customers.

Customers are read-only to the campaign engine; creation only exists for
data ingestion.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from app.core.exceptions import StoreError
from app.core.timezone import iso_utc

from .base import BaseRepository, parse_datetime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Customer:
    """
    Customer entity.

    The numeric and date attributes are the ones audience rules can target.
    """

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    spend: Optional[float] = None
    visits: Optional[int] = None
    last_order_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Customer":
        """Build a Customer from a database row."""
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name"),
            email=data.get("email"),
            spend=data.get("spend"),
            visits=data.get("visits"),
            last_order_date=parse_datetime(data.get("last_order_date")),
            created_at=parse_datetime(data.get("created_at")),
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dict."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "spend": self.spend,
            "visits": self.visits,
            "lastOrderDate": iso_utc(self.last_order_date) if self.last_order_date else None,
            "createdAt": iso_utc(self.created_at) if self.created_at else None,
        }


class CustomerRepository(BaseRepository[Customer]):
    """
    Customer Store.

    Usage:
        repo = CustomerRepository(supabase, page_size=1000)
        population = await repo.list_all()
    """

    def __init__(self, db_client, page_size: int = 1000):
        super().__init__(db_client)
        self.page_size = page_size

    @property
    def table_name(self) -> str:
        return "customers"

    async def list_all(self) -> List[Customer]:
        """
        Load the whole population, page by page.

        Pages are requested with an exact count, so a server row cap below
        page_size (PostgREST max-rows) still loads every customer. Without
        a count, a short page ends the scan.

        Returns:
            Every customer, ordered by id

        Raises:
            StoreError: if any page fails to load
        """
        customers: List[Customer] = []
        offset = 0

        while True:
            query = (
                self._table()
                .select("*", count="exact")
                .order("id")
                .range(offset, offset + self.page_size - 1)
            )
            response = self._execute(query, "load_population", offset=offset)
            rows = response.data or []
            customers.extend(Customer.from_dict(row) for row in rows)

            if not rows:
                break
            if response.count is not None:
                if len(customers) >= response.count:
                    break
            elif len(rows) < self.page_size:
                break
            offset += len(rows)

        logger.debug(f"Loaded {len(customers)} customers")
        return customers

    async def create(self, data: dict) -> Customer:
        """
        Insert a new customer.

        Args:
            data: Column values (name, email, spend, visits, last_order_date)

        Returns:
            Created customer with its id
        """
        response = self._execute(self._table().insert(data), "create_customer")
        if not response.data:
            raise StoreError("customers store returned no row on insert", stage="create_customer")

        customer = Customer.from_dict(response.data[0])
        logger.info(f"Customer created: {customer.id}")
        return customer
