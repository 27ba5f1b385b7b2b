"""
HTTP client integration for request signing

This module attaches EdgeGrid Authorization headers to requests prepared
requests. It only mutates the prepared request; sending it is left to the
caller's session.
"""

import logging
from typing import Optional
from urllib.parse import parse_qsl, urlsplit, urlunsplit

import requests
from requests.auth import AuthBase
from requests.models import PreparedRequest

from ..credentials.types import EdgeGridCredentials
from ..exceptions import ArgumentError, ErrorCodes
from .types import AUTHORIZATION_HEADER
from .edgegrid_signer import EdgeGridSigner

logger = logging.getLogger(__name__)

ACCOUNT_SWITCH_KEY_PARAM = "accountSwitchKey"


def apply_account_switch_key(path_and_query: str, account_switch_key: Optional[str]) -> str:
    """
    Append an account switch key to a path and query string.

    A query that already carries accountSwitchKey is left as is.

    Args:
        path_and_query: Host-relative path including any query string
        account_switch_key: Key to append; empty or None leaves the path unchanged

    Returns:
        str: Path with accountSwitchKey appended as a query parameter
    """
    if not account_switch_key:
        return path_and_query

    _, _, query = path_and_query.partition('?')
    existing = [name for name, _ in parse_qsl(query, keep_blank_values=True)]
    if ACCOUNT_SWITCH_KEY_PARAM in existing:
        logger.debug(f"{ACCOUNT_SWITCH_KEY_PARAM} already present in query, not appending")
        return path_and_query

    separator = '&' if '?' in path_and_query else '?'
    return f"{path_and_query}{separator}{ACCOUNT_SWITCH_KEY_PARAM}={account_switch_key}"


def _read_seekable(body, max_body_size: int) -> Optional[bytes]:
    """Read up to max_body_size bytes from a file-like body and rewind it."""
    try:
        if hasattr(body, 'seekable') and not body.seekable():
            return None
        position = body.tell()
        data = body.read(max_body_size)
        body.seek(position)
    except (OSError, ValueError) as e:
        logger.debug(f"Request body of type {type(body).__name__} could not be rewound: {e}")
        return None

    if data is None:
        return None
    if isinstance(data, str):
        return data.encode('utf-8')
    return bytes(data)


def _prepared_body(prepared_request: PreparedRequest, max_body_size: int) -> Optional[bytes]:
    """Return the prepared body as bytes, or None when it cannot be read twice."""
    body = prepared_request.body
    if body is None:
        return None
    if isinstance(body, str):
        return body.encode('utf-8')
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    if all(hasattr(body, name) for name in ('read', 'seek', 'tell')):
        data = _read_seekable(body, max_body_size)
        if data is not None:
            return data

    # Generators and non-seekable streams are consumed by the transport
    logger.debug(f"Request body of type {type(body).__name__} is not hashed")
    return None


def sign_prepared_request(
    prepared_request: PreparedRequest,
    credentials: EdgeGridCredentials,
    signer: Optional[EdgeGridSigner] = None,
    account_switch_key: Optional[str] = None
) -> PreparedRequest:
    """
    Sign a prepared request.

    Args:
        prepared_request: Prepared request to sign
        credentials: Credentials to sign with
        signer: Optional signer (a default signer is created if None)
        account_switch_key: Optional account switch key to add to the query

    Returns:
        PreparedRequest: Request with the Authorization header added

    Raises:
        ArgumentError: If the request has no URL or method
        ConfigurationError: If the client secret is empty
    """
    if not prepared_request.url:
        raise ArgumentError("Request URL cannot be empty", ErrorCodes.MISSING_PATH)
    if not prepared_request.method:
        raise ArgumentError("Request method cannot be empty", ErrorCodes.INVALID_METHOD)

    signer = signer or EdgeGridSigner()

    path_and_query = apply_account_switch_key(prepared_request.path_url, account_switch_key)
    if path_and_query != prepared_request.path_url:
        parts = urlsplit(prepared_request.url)
        path_part, _, query_part = path_and_query.partition('?')
        prepared_request.url = urlunsplit((parts.scheme, parts.netloc, path_part, query_part, parts.fragment))

    header_value = signer.compute_authorization_header(
        credentials,
        prepared_request.method,
        path_and_query,
        _prepared_body(prepared_request, signer.config.max_body_size)
    )

    prepared_request.headers[AUTHORIZATION_HEADER] = header_value
    return prepared_request


class EdgeGridAuth(AuthBase):
    """
    requests authentication handler for EdgeGrid

    Usage:
        session = requests.Session()
        session.auth = EdgeGridAuth(EdgeGridCredentials.from_edgerc())
        session.get(f"https://{credentials.host}/identity-management/v3/user-profile")
    """

    def __init__(
        self,
        credentials: EdgeGridCredentials,
        signer: Optional[EdgeGridSigner] = None,
        account_switch_key: Optional[str] = None
    ):
        """
        Initialize the authentication handler.

        Args:
            credentials: Credentials to sign with
            signer: Optional signer (a default signer is created if None)
            account_switch_key: Optional key; falls back to credentials.account_key
        """
        self.credentials = credentials
        self.signer = signer or EdgeGridSigner()
        self.account_switch_key = account_switch_key or credentials.account_key

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        return sign_prepared_request(
            request,
            self.credentials,
            self.signer,
            self.account_switch_key
        )

    @classmethod
    def from_edgerc(
        cls,
        edgerc_path: Optional[str] = None,
        section: Optional[str] = "default",
        **kwargs
    ) -> 'EdgeGridAuth':
        """Create a handler from resolved edgerc/environment credentials."""
        return cls(EdgeGridCredentials.from_edgerc(edgerc_path, section), **kwargs)


def create_signing_session(
    credentials: EdgeGridCredentials,
    signer: Optional[EdgeGridSigner] = None,
    account_switch_key: Optional[str] = None
) -> requests.Session:
    """
    Create a requests session that signs every request.

    Args:
        credentials: Credentials to sign with
        signer: Optional signer
        account_switch_key: Optional account switch key

    Returns:
        requests.Session: Session with EdgeGridAuth installed
    """
    session = requests.Session()
    session.auth = EdgeGridAuth(credentials, signer, account_switch_key)
    return session
