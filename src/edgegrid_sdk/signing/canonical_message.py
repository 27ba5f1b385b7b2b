"""
Canonical request data construction for EdgeGrid signatures

This module builds the two strings covered by an EG1-HMAC-SHA256
signature: the tab-separated string-to-sign and the auth-data value.
Both must be reproduced byte-for-byte by the verifying server.
"""

from ..credentials.types import EdgeGridCredentials
from .types import (
    EDGEGRID_ALGORITHM,
    HttpMethod,
    SignableRequest,
    SigningContext,
)
from .utils import DEFAULT_MAX_BODY_SIZE, calculate_body_hash

# The scheme is fixed; plain HTTP requests are never signed
SIGNED_SCHEME = "https"


class CanonicalMessageBuilder:
    """
    Canonical message builder for EdgeGrid signatures
    """

    def __init__(
        self,
        credentials: EdgeGridCredentials,
        request: SignableRequest,
        context: SigningContext,
        max_body_size: int = DEFAULT_MAX_BODY_SIZE
    ):
        """
        Initialize canonical message builder.

        Args:
            credentials: Credentials supplying host and tokens
            request: Request being signed
            context: Timestamp and nonce for this signature
            max_body_size: Maximum number of body bytes to hash
        """
        self.credentials = credentials
        self.request = request
        self.context = context
        self.max_body_size = max_body_size

    def body_hash(self) -> str:
        """
        Hash the request body.

        Only non-empty POST bodies are hashed; every other request yields an
        empty body hash.
        """
        if self.request.method != HttpMethod.POST or not self.request.body:
            return ""
        return calculate_body_hash(self.request.body, self.max_body_size)

    def string_to_sign(self, body_hash: str) -> str:
        """
        Build the tab-separated request data.

        Fields: method, scheme, host, path and query, an always-empty header
        hash, body hash, then a trailing tab.
        """
        return build_string_to_sign(
            self.request.method.value,
            self.credentials.host,
            self.request.path_and_query,
            body_hash
        )

    def auth_data(self) -> str:
        """Build the auth-data value that precedes the signature."""
        return build_auth_data(self.credentials, self.context)


def build_string_to_sign(method: str, host: str, path_and_query: str, body_hash: str = "") -> str:
    """
    Build the EdgeGrid string-to-sign.

    Args:
        method: Upper-case HTTP method
        host: API host from the credentials
        path_and_query: Host-relative path including query string
        body_hash: Base64 body hash, or empty string

    Returns:
        str: Tab-separated canonical request data
    """
    header_hash = ""
    fields = [method, SIGNED_SCHEME, host, path_and_query, header_hash, body_hash]
    return '\t'.join(fields) + '\t'


def build_auth_data(credentials: EdgeGridCredentials, context: SigningContext) -> str:
    """
    Build the auth-data value.

    Args:
        credentials: Credentials supplying the client and access tokens
        context: Timestamp and nonce for this signature

    Returns:
        str: Scheme tag followed by semicolon-terminated key=value pairs
    """
    pairs = [
        ('client_token', credentials.client_token),
        ('access_token', credentials.access_token),
        ('timestamp', context.timestamp),
        ('nonce', context.nonce.lower()),
    ]
    return f"{EDGEGRID_ALGORITHM} " + ''.join(f"{key}={value};" for key, value in pairs)
