"""
Utility functions for request signing

This module provides utility functions for EdgeGrid request signing,
including nonce generation, timestamp handling, body hashing and the
base64 HMAC-SHA256 primitive used for key derivation and signatures.
"""

import time
import uuid
import hashlib
import hmac
import base64
import re
from datetime import datetime, timezone
from typing import Optional, Union

from ..exceptions import SigningError, ErrorCodes
from .types import DEFAULT_MAX_BODY_SIZE, RequestBody

EDGEGRID_TIMESTAMP_FORMAT = '%Y%m%dT%H:%M:%S+0000'

_TIMESTAMP_PATTERN = re.compile(r'^\d{8}T\d{2}:\d{2}:\d{2}\+0000$')
_NONCE_PATTERN = re.compile(r'^[^\s;=]+$')


def generate_nonce() -> str:
    """
    Generate a random 128-bit nonce.

    Returns:
        str: Lower-case UUID v4 string
    """
    return str(uuid.uuid4()).lower()


def format_edgegrid_timestamp(moment: Optional[Union[datetime, float, int]] = None) -> str:
    """
    Format a moment as an EdgeGrid timestamp (yyyyMMddTHH:mm:ss+0000).

    Args:
        moment: datetime or Unix timestamp (uses current time if None).
            Naive datetimes are taken as UTC.

    Returns:
        str: Formatted UTC timestamp
    """
    if moment is None:
        moment = time.time()

    if isinstance(moment, datetime):
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        dt = moment.astimezone(timezone.utc)
    else:
        dt = datetime.fromtimestamp(moment, tz=timezone.utc)

    return dt.strftime(EDGEGRID_TIMESTAMP_FORMAT)


def generate_timestamp() -> str:
    """
    Generate the current EdgeGrid timestamp.

    Returns:
        str: Current UTC time formatted as yyyyMMddTHH:mm:ss+0000
    """
    return format_edgegrid_timestamp()


def validate_nonce(nonce: str) -> bool:
    """
    Validate nonce format.

    Generated nonces are UUIDs, but injected nonces may be any token that
    cannot break the auth-data value (no whitespace, ';' or '=').

    Args:
        nonce: Nonce string to validate

    Returns:
        bool: True if nonce is valid
    """
    if not isinstance(nonce, str):
        return False
    return bool(_NONCE_PATTERN.match(nonce))


def validate_timestamp(timestamp: str) -> bool:
    """
    Validate an EdgeGrid timestamp string.

    Args:
        timestamp: Timestamp to validate

    Returns:
        bool: True if timestamp matches yyyyMMddTHH:mm:ss+0000 and is a real date
    """
    if not isinstance(timestamp, str) or not _TIMESTAMP_PATTERN.match(timestamp):
        return False

    try:
        datetime.strptime(timestamp, EDGEGRID_TIMESTAMP_FORMAT)
    except ValueError:
        return False
    return True


def calculate_body_hash(
    body: RequestBody,
    max_body_size: int = DEFAULT_MAX_BODY_SIZE
) -> str:
    """
    Calculate the base64 SHA-256 hash of a request body.

    Only the leading max_body_size bytes are hashed.

    Args:
        body: Request body content (string, bytes, or None)
        max_body_size: Maximum number of bytes to hash

    Returns:
        str: Base64-encoded digest, or empty string for an empty body

    Raises:
        SigningError: If body is not string, bytes, or None
    """
    if body is None:
        return ""
    if isinstance(body, str):
        body = body.encode('utf-8')
    elif not isinstance(body, (bytes, bytearray)):
        raise SigningError(
            f"Body must be string, bytes, or None, got {type(body)}",
            ErrorCodes.SIGNING_FAILED,
            {"body_type": str(type(body))}
        )

    if len(body) == 0:
        return ""

    if len(body) > max_body_size:
        body = body[:max_body_size]

    digest = hashlib.sha256(body).digest()
    return base64.b64encode(digest).decode('ascii')


def hmac_sha256_base64(key: str, message: str) -> str:
    """
    Compute a base64-encoded HMAC-SHA256.

    Both key and message are UTF-8 encoded.

    Args:
        key: HMAC key
        message: Message to authenticate

    Returns:
        str: Base64-encoded digest
    """
    mac = hmac.new(key.encode('utf-8'), message.encode('utf-8'), hashlib.sha256)
    return base64.b64encode(mac.digest()).decode('ascii')


class PerformanceTimer:
    """Simple performance timer for monitoring signing operations."""

    def __init__(self):
        self.start_time = time.perf_counter()

    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return (time.perf_counter() - self.start_time) * 1000
