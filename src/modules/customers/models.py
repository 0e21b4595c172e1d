"""Customer model.

Business rules implemented:
- Email must be unique in the system (``unique=True`` backs the service
  check with an atomic database constraint).
- ``id`` and the registration timestamp are assigned on insert and never
  change afterwards.
- Phone numbers are masked in ``__str__``.
"""

from __future__ import annotations

from datetime import datetime

from django.db import models

from modules.core.models import BaseModel


class Customer(BaseModel):
    """Customer aggregate root.

    ``created_at`` (inherited) is the registration timestamp, exposed on
    the wire as ``registeredAt``.  ``phone`` is ``NULL`` when the customer
    did not provide one.
    """

    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254, unique=True)
    phone = models.CharField(  # noqa: DJ01
        max_length=16, null=True, blank=True, default=None
    )

    class Meta:
        db_table = "customers"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="customers_created_idx"),
            models.Index(fields=["name"], name="customers_name_idx"),
        ]

    @property
    def registered_at(self) -> datetime | None:
        return self.created_at

    def __str__(self) -> str:
        suffix = self.phone[-4:] if self.phone else "????"
        return f"{self.name} <{self.email}> (phone: ***{suffix})"
