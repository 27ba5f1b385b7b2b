"""
Type definitions for EdgeGrid credentials

This module provides the immutable credential set consumed by the request
signer. Instances are normally produced by the credential resolver.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

# Fields that must be non-empty for a usable credential set
REQUIRED_FIELDS: Tuple[str, ...] = ('host', 'client_token', 'client_secret', 'access_token')

# All fields understood by the resolver, in environment/edgerc order
CREDENTIAL_FIELDS: Tuple[str, ...] = ('client_token', 'client_secret', 'host', 'access_token', 'account_key')


@dataclass(frozen=True)
class EdgeGridCredentials:
    """
    EdgeGrid API client credentials

    Attributes:
        host: API origin without scheme or trailing slash
        client_token: Client token issued for the API client
        client_secret: Client secret used to derive signing keys (never logged)
        access_token: Access token issued for the API client
        account_key: Optional account switch key for multi-account callers
    """
    host: str
    client_token: str
    client_secret: str = field(repr=False)
    access_token: str
    account_key: str = ""

    def is_complete(self) -> bool:
        """Check that every required field is populated."""
        return not missing_fields(self.to_dict())

    def to_dict(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name in CREDENTIAL_FIELDS}

    @classmethod
    def from_edgerc(
        cls,
        edgerc_path: Optional[str] = None,
        section: Optional[str] = "default"
    ) -> 'EdgeGridCredentials':
        """
        Resolve credentials from the environment and/or an edgerc file.

        See resolve_credentials() for the resolution order.
        """
        from .resolver import resolve_credentials
        return resolve_credentials(edgerc_path, section)


def missing_fields(values: Dict[str, str]) -> Tuple[str, ...]:
    """Return the required field names that are absent or empty in values."""
    return tuple(name for name in REQUIRED_FIELDS if not values.get(name))
