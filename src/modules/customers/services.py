"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository``.

Business rules enforced here:
- Email must be unique on create and on update.
- Updates and deletes of a missing customer fail with ``CustomerNotFound``.
- ``id`` and the registration timestamp survive updates untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import IntegrityError, transaction

from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound
from modules.customers.models import Customer

if TYPE_CHECKING:
    from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(self, dto: CreateCustomerDTO) -> Customer:
        """Create a new customer after enforcing email uniqueness.

        The existence check gives a clean 409 in the common case; the
        database unique constraint catches the concurrent-create race.

        Raises:
            CustomerAlreadyExists: if the email is already taken.
        """
        log = logger.bind(email=dto.email)

        if self._repo.exists_by_email(dto.email):
            log.warning("customer.duplicate_email")
            raise CustomerAlreadyExists("Email already registered.")

        customer = Customer(name=dto.name, email=dto.email, phone=dto.phone)
        try:
            customer = self._repo.save(customer)
        except IntegrityError:
            log.warning("customer.duplicate_email", detected_by="constraint")
            raise CustomerAlreadyExists("Email already registered.") from None

        log.info("customer.created", customer_id=str(customer.id))
        return customer

    @transaction.atomic
    def update_customer(self, id: str, dto: UpdateCustomerDTO) -> Customer:
        """Overwrite name, email and phone of an existing customer.

        Raises:
            CustomerNotFound: if the customer does not exist.
            CustomerAlreadyExists: if the new email belongs to another customer.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")

        log = logger.bind(customer_id=str(id))

        if dto.email != customer.email:
            existing = self._repo.get_by_email(dto.email)
            if existing and existing.id != customer.id:
                log.warning("customer.duplicate_email")
                raise CustomerAlreadyExists("Email already registered.")

        customer.name = dto.name
        customer.email = dto.email
        customer.phone = dto.phone

        try:
            customer = self._repo.save(customer)
        except IntegrityError:
            log.warning("customer.duplicate_email", detected_by="constraint")
            raise CustomerAlreadyExists("Email already registered.") from None

        log.info("customer.updated")
        return customer

    @transaction.atomic
    def delete_customer(self, id: str) -> None:
        """Delete a customer by ID.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        if not self._repo.delete(id):
            raise CustomerNotFound(f"Customer {id} not found.")
        logger.info("customer.deleted", customer_id=str(id))

    @transaction.atomic
    def delete_customer_by_email(self, email: str) -> None:
        """Delete the customer owning ``email``.

        Raises:
            CustomerNotFound: if no customer has that email.
        """
        if not self._repo.delete_by_email(email):
            raise CustomerNotFound(f"Customer with email {email} not found.")
        logger.info("customer.deleted", email=email)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(self) -> List[Customer]:
        """Return every customer, newest first."""
        return self._repo.list()

    def search_customers(self, text: str) -> List[Customer]:
        """Customers whose name contains ``text`` (case-insensitive)."""
        return self._repo.search_by_name(text)

    def get_customer(self, id: str) -> Customer:
        """Retrieve a single customer by ID.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")
        logger.info("customer.retrieved", customer_id=str(id))
        return customer

    def get_customer_by_email(self, email: str) -> Customer:
        """Retrieve a single customer by email.

        Raises:
            CustomerNotFound: if no customer has that email.
        """
        customer = self._repo.get_by_email(email)
        if not customer:
            raise CustomerNotFound(f"Customer with email {email} not found.")
        return customer
