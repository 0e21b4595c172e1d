"""Customer repository interface.

Extends ``IRepository[Customer]`` with the email and name look-ups the
Service Layer needs to enforce email uniqueness and serve searches.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Customer]:
        """Retrieve a customer by email address."""

    @abstractmethod
    def exists_by_email(self, email: str) -> bool:
        """``True`` when a customer with ``email`` exists."""

    @abstractmethod
    def search_by_name(self, text: str) -> List[Customer]:
        """Customers whose name contains ``text`` (case-insensitive)."""

    @abstractmethod
    def delete_by_email(self, email: str) -> bool:
        """Remove the customer owning ``email``. ``False`` if none."""
