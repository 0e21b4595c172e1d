"""Unit tests for CustomerService.

Covers:
- create_customer: happy path, duplicate email, unique-constraint race.
- update_customer: happy path, not found, email collision, preserved
  identity and registration timestamp.
- get_customer / get_customer_by_email: happy path, not found.
- delete_customer / delete_customer_by_email: happy path, not found.
- list_customers / search_customers: pass-through.
"""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from django.db import IntegrityError

from modules.core.exceptions import ErrorKind
from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound
from modules.customers.models import Customer
from modules.customers.services import CustomerService

pytestmark = pytest.mark.unit

REGISTERED_AT = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def service(mock_repo):
    return CustomerService(repository=mock_repo)


def _make_customer(**overrides) -> Customer:
    defaults = {
        "name": "Juan Pérez",
        "email": "juan@example.com",
        "phone": "+1234567890",
    }
    defaults.update(overrides)
    customer = Customer(**defaults)
    customer.created_at = REGISTERED_AT
    return customer


# ===========================================================================
# create_customer
# ===========================================================================


class TestCreateCustomer:
    def test_success(self, service, mock_repo):
        mock_repo.exists_by_email.return_value = False
        mock_repo.save.side_effect = lambda c: c

        dto = CreateCustomerDTO(
            name="Juan Pérez", email="juan@example.com", phone="+1234567890"
        )
        customer = service.create_customer(dto)

        assert customer.name == "Juan Pérez"
        assert customer.email == "juan@example.com"
        assert customer.phone == "+1234567890"
        assert customer.id is not None
        mock_repo.exists_by_email.assert_called_once_with("juan@example.com")
        mock_repo.save.assert_called_once()

    def test_without_phone(self, service, mock_repo):
        mock_repo.exists_by_email.return_value = False
        mock_repo.save.side_effect = lambda c: c

        customer = service.create_customer(
            CreateCustomerDTO(name="Juan", email="juan@example.com")
        )

        assert customer.phone is None

    def test_duplicate_email_raises(self, service, mock_repo):
        mock_repo.exists_by_email.return_value = True

        dto = CreateCustomerDTO(name="Duplicate", email="juan@example.com")
        with pytest.raises(CustomerAlreadyExists, match="Email"):
            service.create_customer(dto)

        mock_repo.save.assert_not_called()

    def test_unique_constraint_violation_raises_conflict(self, service, mock_repo):
        """A concurrent insert slipping past the existence check is still a 409."""
        mock_repo.exists_by_email.return_value = False
        mock_repo.save.side_effect = IntegrityError("UNIQUE constraint failed")

        dto = CreateCustomerDTO(name="Racer", email="juan@example.com")
        with pytest.raises(CustomerAlreadyExists) as exc_info:
            service.create_customer(dto)

        assert exc_info.value.kind is ErrorKind.CONFLICT


# ===========================================================================
# update_customer
# ===========================================================================


class TestUpdateCustomer:
    def test_success_overwrites_mutable_fields(self, service, mock_repo):
        existing = _make_customer()
        mock_repo.get_by_id.return_value = existing
        mock_repo.get_by_email.return_value = None
        mock_repo.save.side_effect = lambda c: c

        dto = UpdateCustomerDTO(
            name="Juan Actualizado", email="juan.new@example.com", phone="12345678"
        )
        customer = service.update_customer(str(existing.id), dto)

        assert customer.name == "Juan Actualizado"
        assert customer.email == "juan.new@example.com"
        assert customer.phone == "12345678"
        mock_repo.save.assert_called_once()

    def test_preserves_id_and_registration_timestamp(self, service, mock_repo):
        existing = _make_customer()
        original_id = existing.id
        mock_repo.get_by_id.return_value = existing
        mock_repo.save.side_effect = lambda c: c

        dto = UpdateCustomerDTO(name="Other", email="juan@example.com")
        customer = service.update_customer(str(original_id), dto)

        assert customer.id == original_id
        assert customer.registered_at == REGISTERED_AT

    def test_omitted_phone_is_cleared(self, service, mock_repo):
        existing = _make_customer(phone="+1234567890")
        mock_repo.get_by_id.return_value = existing
        mock_repo.save.side_effect = lambda c: c

        dto = UpdateCustomerDTO(name="Juan", email="juan@example.com")
        customer = service.update_customer(str(existing.id), dto)

        assert customer.phone is None

    def test_not_found_raises(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        dto = UpdateCustomerDTO(name="Ghost", email="ghost@example.com")
        with pytest.raises(CustomerNotFound):
            service.update_customer("non-existent-id", dto)

        mock_repo.save.assert_not_called()

    def test_email_collision_raises(self, service, mock_repo):
        existing = _make_customer()
        other = _make_customer(email="taken@example.com")
        mock_repo.get_by_id.return_value = existing
        mock_repo.get_by_email.return_value = other

        dto = UpdateCustomerDTO(name="Juan", email="taken@example.com")
        with pytest.raises(CustomerAlreadyExists, match="Email"):
            service.update_customer(str(existing.id), dto)

        mock_repo.save.assert_not_called()

    def test_same_email_not_rejected(self, service, mock_repo):
        existing = _make_customer()
        mock_repo.get_by_id.return_value = existing
        mock_repo.save.side_effect = lambda c: c

        dto = UpdateCustomerDTO(name="Juan", email="juan@example.com")
        customer = service.update_customer(str(existing.id), dto)

        assert customer.email == "juan@example.com"
        mock_repo.get_by_email.assert_not_called()

    def test_unique_constraint_violation_raises_conflict(self, service, mock_repo):
        existing = _make_customer()
        mock_repo.get_by_id.return_value = existing
        mock_repo.get_by_email.return_value = None
        mock_repo.save.side_effect = IntegrityError("UNIQUE constraint failed")

        dto = UpdateCustomerDTO(name="Juan", email="racer@example.com")
        with pytest.raises(CustomerAlreadyExists):
            service.update_customer(str(existing.id), dto)


# ===========================================================================
# Queries
# ===========================================================================


class TestGetCustomer:
    def test_success(self, service, mock_repo):
        existing = _make_customer()
        mock_repo.get_by_id.return_value = existing

        customer = service.get_customer(str(existing.id))

        assert customer.id == existing.id

    def test_not_found_raises(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(CustomerNotFound) as exc_info:
            service.get_customer("non-existent-id")

        assert exc_info.value.kind is ErrorKind.NOT_FOUND


class TestGetCustomerByEmail:
    def test_success(self, service, mock_repo):
        existing = _make_customer()
        mock_repo.get_by_email.return_value = existing

        assert service.get_customer_by_email("juan@example.com") is existing
        mock_repo.get_by_email.assert_called_once_with("juan@example.com")

    def test_not_found_raises(self, service, mock_repo):
        mock_repo.get_by_email.return_value = None

        with pytest.raises(CustomerNotFound):
            service.get_customer_by_email("ghost@example.com")


class TestListAndSearch:
    def test_list_passes_through(self, service, mock_repo):
        customers = [_make_customer(), _make_customer(email="b@example.com")]
        mock_repo.list.return_value = customers

        assert service.list_customers() == customers

    def test_search_passes_through(self, service, mock_repo):
        match = _make_customer()
        mock_repo.search_by_name.return_value = [match]

        assert service.search_customers("Juan") == [match]
        mock_repo.search_by_name.assert_called_once_with("Juan")


# ===========================================================================
# delete_customer / delete_customer_by_email
# ===========================================================================


class TestDeleteCustomer:
    def test_success(self, service, mock_repo):
        existing = _make_customer()
        mock_repo.delete.return_value = True

        assert service.delete_customer(str(existing.id)) is None

        mock_repo.delete.assert_called_once_with(str(existing.id))

    def test_not_found_raises(self, service, mock_repo):
        mock_repo.delete.return_value = False

        with pytest.raises(CustomerNotFound):
            service.delete_customer("non-existent-id")


class TestDeleteCustomerByEmail:
    def test_success(self, service, mock_repo):
        mock_repo.delete_by_email.return_value = True

        service.delete_customer_by_email("juan@example.com")

        mock_repo.delete_by_email.assert_called_once_with("juan@example.com")

    def test_not_found_raises(self, service, mock_repo):
        mock_repo.delete_by_email.return_value = False

        with pytest.raises(CustomerNotFound):
            service.delete_customer_by_email("ghost@example.com")
