"""
Service Contract

Shared base for the dashboard's async services and the errors they raise.
Endpoints catch these errors and map them to HTTP status codes.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseService(ABC, Generic[RequestT, ResponseT]):
    """
    Async service that turns one request model into one response model.

    Subclasses name themselves (the name prefixes their errors) and
    report health for the /health style checks.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        """
        Handle one request.

        Raises:
            ValidationError: The request passed schema validation but is unusable
            DataUnavailableError: There are no bars to work with
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass

    async def validate_input(self, request: RequestT) -> RequestT:
        """Checks beyond the pydantic schema. Pass-through unless overridden."""
        return request


class ServiceError(Exception):
    """Error raised by a service, tagged with the service name."""

    def __init__(self, service_name: str, message: str, details: Optional[dict] = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class ValidationError(ServiceError):
    """Request is well-formed but unusable, e.g. a blank symbol. Maps to 400."""


class DataUnavailableError(ServiceError):
    """A result needs bars and none were supplied. Maps to 404."""
