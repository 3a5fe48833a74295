"""HTTP clients for the publisher's external collaborators."""

from .analytics_client import DomainAuthorizationClient, normalize_url
from .client import Client
from .exceptions import (
    APIError,
    ClientError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ValidationError,
)
from .revalidate_client import RevalidateClient

__all__ = [
    "Client",
    "RevalidateClient",
    "DomainAuthorizationClient",
    "normalize_url",
    "ClientError",
    "ConnectionError",
    "RequestTimeoutError",
    "APIError",
    "RateLimitError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
]
