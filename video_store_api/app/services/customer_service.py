"""Business logic for customers."""

from typing import List

from video_store_api.app.core.db import get_connection
from video_store_api.app.schemas.customer import CustomerRead


class CustomerService:
    """Read-only access to the store's customers."""

    @classmethod
    async def list_customers(cls) -> List[CustomerRead]:
        """All customers with the number of movies each has at home."""
        conn = get_connection()
        try:
            rows = conn.execute(
                """
                SELECT c.id, c.name, c.postal_code, c.phone, c.registered_at,
                       (SELECT COUNT(*) FROM rentals r
                        WHERE r.customer_id = c.id AND r.returned = 0) AS movies_checked_out_count
                FROM customers c
                ORDER BY c.id ASC
                """
            ).fetchall()
            return [CustomerRead(**dict(row)) for row in rows]
        finally:
            conn.close()
