"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
and deletes return ``False`` instead of raising, so the Service Layer
decides how to translate a missing entity into an API response.

``save`` propagates ``IntegrityError`` when the email unique constraint
rejects a write; it runs in its own savepoint so the caller's
transaction stays usable.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Customer]:
        """Retrieve a customer by primary key.

        Returns ``None`` for non-existent or invalid IDs (e.g. malformed UUID).
        """
        try:
            return Customer.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Customer]:
        """List customers with optional Django ORM look-ups.

        Examples of valid filters::

            {"email": "juan@example.com"}
            {"name__icontains": "juan"}
        """
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer."""
        is_new = entity._state.adding
        entity.save()
        logger.info(
            "customer.saved",
            customer_id=str(entity.id),
            is_new=is_new,
        )
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Delete a customer by ID.

        Returns ``True`` if the customer was found and deleted,
        ``False`` if no customer exists with the given ID.
        """
        customer = self.get_by_id(id)
        if not customer:
            return False
        customer.delete()
        logger.info("customer.deleted", customer_id=str(id))
        return True

    def get_by_email(self, email: str) -> Optional[Customer]:
        """Retrieve a customer by email address."""
        return Customer.objects.filter(email=email).first()

    def exists_by_email(self, email: str) -> bool:
        return Customer.objects.filter(email=email).exists()

    def search_by_name(self, text: str) -> List[Customer]:
        return self.list(filters={"name__icontains": text})

    @transaction.atomic
    def delete_by_email(self, email: str) -> bool:
        deleted, _ = Customer.objects.filter(email=email).delete()
        if deleted:
            logger.info("customer.deleted", email=email)
        return bool(deleted)
