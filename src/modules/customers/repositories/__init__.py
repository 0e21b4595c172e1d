"""Customer repositories package.

``get_customer_repository`` builds the implementation named by the
``CUSTOMER_REPOSITORY`` setting, so the store is chosen at startup
rather than hard-wired into the views.
"""

from django.conf import settings
from django.utils.module_loading import import_string

from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.repositories.interfaces import ICustomerRepository

__all__ = ["CustomerDjangoRepository", "ICustomerRepository", "get_customer_repository"]


def get_customer_repository() -> ICustomerRepository:
    repository_class = import_string(settings.CUSTOMER_REPOSITORY)
    return repository_class()
