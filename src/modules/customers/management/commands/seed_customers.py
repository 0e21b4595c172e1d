from __future__ import annotations

from django.core.management.base import BaseCommand

from modules.customers.dtos import CreateCustomerDTO
from modules.customers.exceptions import CustomerAlreadyExists
from modules.customers.repositories import get_customer_repository
from modules.customers.services import CustomerService

SEED_CUSTOMERS = [
    ("Juan Pérez", "juan.perez@example.com", "+1234567890"),
    ("Juana Gómez", "juana.gomez@example.com", "5491155550000"),
    ("Ana Souza", "ana@example.com", None),
    ("Bruno Lima", "bruno@example.com", "+5511999998888"),
    ("Carla Mendes", "carla@example.com", "11988887777"),
    ("Daniel Costa", "daniel@example.com", None),
]


class Command(BaseCommand):
    help = "Seed database with development customers."

    def handle(self, *args, **options):
        self.stdout.write("Creating customers...")
        service = CustomerService(repository=get_customer_repository())

        created = 0
        for name, email, phone in SEED_CUSTOMERS:
            dto = CreateCustomerDTO(name=name, email=email, phone=phone)
            try:
                service.create_customer(dto)
            except CustomerAlreadyExists:
                continue
            created += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: customers={created}, "
                f"skipped={len(SEED_CUSTOMERS) - created}"
            )
        )
