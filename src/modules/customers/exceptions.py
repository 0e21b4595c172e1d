"""Customer domain exceptions.

Raised by the Service Layer when business rules are violated.
Each carries an ``ErrorKind`` so the API layer (Views) can translate
it into the matching HTTP response without a per-exception branch.
"""

from __future__ import annotations

from modules.core.exceptions import DomainError, ErrorKind


class CustomerAlreadyExists(DomainError):
    """A customer with the same email already exists."""

    kind = ErrorKind.CONFLICT
    code = "customer_already_exists"


class CustomerNotFound(DomainError):
    """The requested customer does not exist."""

    kind = ErrorKind.NOT_FOUND
    code = "customer_not_found"
