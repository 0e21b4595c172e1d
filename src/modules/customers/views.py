"""Customer API views.

Exposes the ``CustomerService`` via HTTP using a DRF ViewSet.
Input is validated into Pydantic DTOs before any service call;
domain exceptions are caught at each endpoint and translated through
their ``ErrorKind``.  Anything else propagates to
``modules.core.exceptions.api_exception_handler`` (generic 500).
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import (
    DomainError,
    domain_error_response,
    validation_error_response,
)
from modules.customers.dtos import (
    CreateCustomerDTO,
    CustomerSearchDTO,
    UpdateCustomerDTO,
    normalize_lookup_email,
)
from modules.customers.models import Customer
from modules.customers.repositories import get_customer_repository
from modules.customers.serializers import CustomerSerializer
from modules.customers.services import CustomerService

EMAIL_PATH = r"email/(?P<email>[^/]+)"

_NOT_FOUND = OpenApiResponse(description="Customer not found")
_CONFLICT = OpenApiResponse(description="Email already registered")
_INVALID = OpenApiResponse(description="Invalid input")


@extend_schema(tags=["Customer"])
class CustomerViewSet(GenericViewSet):
    """ViewSet for Customer CRUD operations.

    Uses ``CustomerService`` with the repository configured in
    ``settings.CUSTOMER_REPOSITORY``.  Does **not** extend
    ``ModelViewSet``: all ORM access goes through the service/repository
    layer.
    """

    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=get_customer_repository())

    # ------------------------------------------------------------------
    # List / Retrieve / Search
    # ------------------------------------------------------------------

    @extend_schema(summary="List all customers")
    def list(self, request: Request) -> Response:
        """GET /api/v1/customers/"""
        customers = self._service.list_customers()
        return Response(CustomerSerializer(customers, many=True).data)

    @extend_schema(
        summary="Retrieve a customer by ID",
        responses={200: CustomerSerializer, 404: _NOT_FOUND},
    )
    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        try:
            customer = self._service.get_customer(pk)
        except DomainError as exc:
            return domain_error_response(exc)
        return Response(CustomerSerializer(customer).data)

    @extend_schema(
        summary="Retrieve a customer by email",
        parameters=[OpenApiParameter("email", OpenApiTypes.EMAIL, OpenApiParameter.PATH)],
        responses={200: CustomerSerializer, 404: _NOT_FOUND},
    )
    @action(detail=False, methods=["get"], url_path=EMAIL_PATH, url_name="by-email")
    def by_email(self, request: Request, email: str) -> Response:
        """GET /api/v1/customers/email/{email}/"""
        try:
            customer = self._service.get_customer_by_email(normalize_lookup_email(email))
        except DomainError as exc:
            return domain_error_response(exc)
        return Response(CustomerSerializer(customer).data)

    @extend_schema(
        summary="Search customers by name",
        parameters=[
            OpenApiParameter(
                "name",
                OpenApiTypes.STR,
                OpenApiParameter.QUERY,
                required=True,
                description="Text contained in the customer name",
            )
        ],
        responses={200: CustomerSerializer(many=True), 400: _INVALID},
    )
    @action(detail=False, methods=["get"], url_path="search")
    def search(self, request: Request) -> Response:
        """GET /api/v1/customers/search/?name=text"""
        try:
            query = CustomerSearchDTO.model_validate(dict(request.query_params.items()))
        except PydanticValidationError as exc:
            return validation_error_response(exc)

        customers = self._service.search_customers(query.name)
        return Response(CustomerSerializer(customers, many=True).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    @extend_schema(
        summary="Create a customer",
        request=CustomerSerializer,
        responses={201: CustomerSerializer, 400: _INVALID, 409: _CONFLICT},
    )
    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        try:
            dto = CreateCustomerDTO.from_payload(request.data)
        except PydanticValidationError as exc:
            return validation_error_response(exc)

        try:
            customer = self._service.create_customer(dto)
        except DomainError as exc:
            return domain_error_response(exc)

        out = CustomerSerializer(customer)
        return Response(out.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Replace a customer's name, email and phone",
        request=CustomerSerializer,
        responses={
            200: CustomerSerializer,
            400: _INVALID,
            404: _NOT_FOUND,
            409: _CONFLICT,
        },
    )
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/customers/{pk}/"""
        try:
            dto = UpdateCustomerDTO.from_payload(request.data)
        except PydanticValidationError as exc:
            return validation_error_response(exc)

        try:
            customer = self._service.update_customer(pk, dto)
        except DomainError as exc:
            return domain_error_response(exc)

        return Response(CustomerSerializer(customer).data)

    @extend_schema(summary="Delete a customer by ID", responses={204: None, 404: _NOT_FOUND})
    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/customers/{pk}/"""
        try:
            self._service.delete_customer(pk)
        except DomainError as exc:
            return domain_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        summary="Delete a customer by email",
        parameters=[OpenApiParameter("email", OpenApiTypes.EMAIL, OpenApiParameter.PATH)],
        responses={204: None, 404: _NOT_FOUND},
    )
    @by_email.mapping.delete
    def destroy_by_email(self, request: Request, email: str) -> Response:
        """DELETE /api/v1/customers/email/{email}/"""
        try:
            self._service.delete_customer_by_email(normalize_lookup_email(email))
        except DomainError as exc:
            return domain_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)
