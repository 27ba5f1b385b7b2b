"""
Type definitions for request signing functionality

This module provides type definitions and data classes for EdgeGrid
EG1-HMAC-SHA256 request signing.
"""

from typing import Callable, Dict, Optional, Union
from dataclasses import dataclass
from enum import Enum

from ..exceptions import ArgumentError, ErrorCodes

# Name of the header carrying the EdgeGrid signature
AUTHORIZATION_HEADER = "Authorization"

# Scheme tag that prefixes the auth-data value
EDGEGRID_ALGORITHM = "EG1-HMAC-SHA256"

# Maximum number of leading body bytes included in the body hash (128 KiB)
DEFAULT_MAX_BODY_SIZE = 131072


class HttpMethod(str, Enum):
    """HTTP methods supported for signing"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def coerce(cls, method: Union[str, 'HttpMethod']) -> 'HttpMethod':
        """Convert a method name in any case to an HttpMethod."""
        if isinstance(method, cls):
            return method
        if not isinstance(method, str) or not method.strip():
            raise ArgumentError(
                "HTTP method is required",
                ErrorCodes.INVALID_METHOD,
                {"method": repr(method)}
            )
        try:
            return cls(method.strip().upper())
        except ValueError:
            raise ArgumentError(
                f"Unsupported HTTP method: {method}",
                ErrorCodes.INVALID_METHOD,
                {"method": method}
            )


@dataclass
class SignableRequest:
    """
    Request to be signed according to the EdgeGrid scheme

    Scheme and host come from the credentials, not from the request.

    Attributes:
        method: HTTP method (GET, POST, etc.)
        path_and_query: Host-relative path including any query string
        body: Optional request body (string or bytes)
    """
    method: HttpMethod
    path_and_query: str
    body: Optional[bytes] = None

    def __post_init__(self):
        """Validate and normalize request after initialization"""
        self.method = HttpMethod.coerce(self.method)

        if self.path_and_query is None or self.path_and_query == "":
            raise ArgumentError(
                "Request path cannot be empty",
                ErrorCodes.MISSING_PATH
            )

        if not isinstance(self.path_and_query, str) or not self.path_and_query.startswith('/'):
            raise ArgumentError(
                f"Request path must start with '/': {self.path_and_query}",
                ErrorCodes.INVALID_PATH,
                {"path_and_query": str(self.path_and_query)}
            )

        if isinstance(self.body, str):
            self.body = self.body.encode('utf-8')
        elif isinstance(self.body, bytearray):
            self.body = bytes(self.body)
        elif self.body is not None and not isinstance(self.body, bytes):
            raise ArgumentError(
                f"Body must be string, bytes, or None, got {type(self.body)}",
                ErrorCodes.INVALID_BODY,
                {"body_type": str(type(self.body))}
            )


@dataclass(frozen=True)
class SigningConfig:
    """
    Configuration for request signing

    Attributes:
        max_body_size: Maximum number of leading body bytes to hash
        nonce_generator: Optional custom nonce generator function
        timestamp_generator: Optional custom timestamp generator function
        log_string_to_sign: Log the string-to-sign and body hash at DEBUG
    """
    max_body_size: int = DEFAULT_MAX_BODY_SIZE
    nonce_generator: Optional['NonceGenerator'] = None
    timestamp_generator: Optional['TimestampGenerator'] = None
    log_string_to_sign: bool = False


@dataclass(frozen=True)
class SigningContext:
    """
    Per-call signing values, generated once and shared by every step

    Attributes:
        timestamp: UTC timestamp formatted as yyyyMMddTHH:mm:ss+0000
        nonce: Lower-case UUID string
    """
    timestamp: str
    nonce: str


@dataclass(frozen=True)
class EdgeGridSignatureResult:
    """
    Generated EdgeGrid signature

    Attributes:
        authorization: Complete Authorization header value
        string_to_sign: Tab-separated canonical request data
        auth_data: Auth-data value preceding the signature
        body_hash: Base64 SHA-256 of the (truncated) body, or empty
        context: Timestamp and nonce used for this signature
    """
    authorization: str
    string_to_sign: str
    auth_data: str
    body_hash: str
    context: SigningContext

    @property
    def headers(self) -> Dict[str, str]:
        """Headers that should be added to the request."""
        return {AUTHORIZATION_HEADER: self.authorization}


# Type aliases for convenience
NonceGenerator = Callable[[], str]
TimestampGenerator = Callable[[], str]
RequestBody = Union[str, bytes, None]
