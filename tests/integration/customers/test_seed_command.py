import pytest
from django.core.management import call_command

from modules.customers.management.commands.seed_customers import SEED_CUSTOMERS
from modules.customers.models import Customer

pytestmark = pytest.mark.integration


def test_seed_creates_customers():
    call_command("seed_customers")
    assert Customer.objects.count() == len(SEED_CUSTOMERS)


def test_seed_is_idempotent():
    call_command("seed_customers")
    call_command("seed_customers")
    assert Customer.objects.count() == len(SEED_CUSTOMERS)
