"""Customer DRF serializers for API output.

The serializer operates at the Interface layer (API Views).  It renders
responses and describes the resource for the OpenAPI schema; request
validation lives in the Pydantic DTOs (``dtos.py``).
"""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    """Read serializer for the Customer resource.

    ``registeredAt`` keeps the wire name of the registration timestamp.
    """

    registeredAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Customer
        fields = ["id", "name", "email", "phone", "registeredAt"]
        read_only_fields = ["id"]
