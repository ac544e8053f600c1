"""Remote review API access for Lingoreview."""

from .client import CredentialProvider, RemoteReviewGateway
from .errors import AuthError, GatewayError, NotFoundError, TransportError

__all__ = [
    "AuthError",
    "CredentialProvider",
    "GatewayError",
    "NotFoundError",
    "RemoteReviewGateway",
    "TransportError",
]
