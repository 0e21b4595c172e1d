"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the Service
layer.  DTOs are immutable (``frozen=True``) and are validated *before*
any service call, so the service only ever sees well-formed input.

- ``CreateCustomerDTO``: input for customer creation.
- ``UpdateCustomerDTO``: full replacement of the mutable fields.
- ``CustomerSearchDTO``: query parameters of the name search.
"""

from __future__ import annotations

from typing import Annotated, Any, Mapping, Optional, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    field_validator,
)

PHONE_PATTERN = r"^[+]?[0-9]{8,15}$"

PhoneStr = Annotated[str, StringConstraints(pattern=PHONE_PATTERN)]

_EMAIL_ADAPTER = TypeAdapter(EmailStr)


def normalize_lookup_email(value: str) -> str:
    """Spell an email the way ``EmailStr`` stored it (lowercase domain).

    Values that are not valid addresses are returned unchanged; they
    cannot match a stored customer.
    """
    try:
        return _EMAIL_ADAPTER.validate_python(value)
    except ValidationError:
        return value


class _CustomerFields(BaseModel):
    """Writable customer fields shared by create and update.

    Validates:
    - ``name`` is non-blank once surrounding whitespace is stripped.
    - ``email`` is a well-formed address (Pydantic ``EmailStr``).
    - ``phone``, when given, is 8-15 digits with an optional leading ``+``.

    ``id`` and ``registeredAt`` are read-only and silently ignored.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[PhoneStr] = None

    @field_validator("phone", mode="before")
    @classmethod
    def blank_phone_is_none(cls, v: Any) -> Any:
        """Treat ``""`` (or whitespace) as "no phone"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def from_payload(cls, data: Any) -> Self:
        """Validate a request body, keeping only the writable fields.

        Absent keys are left out rather than defaulted so required
        fields are reported as ``missing``.  A body that is not a JSON
        object fails as a whole.
        """
        if isinstance(data, Mapping):
            data = {key: data[key] for key in cls.model_fields if key in data}
        return cls.model_validate(data)


class CreateCustomerDTO(_CustomerFields):
    """Immutable DTO for customer creation requests."""


class UpdateCustomerDTO(_CustomerFields):
    """Immutable DTO for customer update requests (PUT semantics).

    Every mutable field is overwritten: omitting ``phone`` clears it.
    """


class CustomerSearchDTO(BaseModel):
    """Query string of ``GET /customers/search/``."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str
