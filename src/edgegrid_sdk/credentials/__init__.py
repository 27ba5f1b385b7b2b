"""
EdgeGrid Python SDK - Credentials Module

Resolves EdgeGrid client credentials from AKAMAI_* environment variables
and edgerc configuration files.
"""

from .types import (
    EdgeGridCredentials,
    REQUIRED_FIELDS,
    CREDENTIAL_FIELDS,
)

from .resolver import (
    DEFAULT_SECTION,
    DEFAULT_EDGERC_PATH,
    resolve_credentials,
    normalize_section,
    environment_variable_name,
    credentials_from_environment,
    parse_edgerc,
    read_edgerc,
    expand_user_path,
    merge_credential_values,
)

__all__ = [
    'EdgeGridCredentials',
    'REQUIRED_FIELDS',
    'CREDENTIAL_FIELDS',
    'DEFAULT_SECTION',
    'DEFAULT_EDGERC_PATH',
    'resolve_credentials',
    'normalize_section',
    'environment_variable_name',
    'credentials_from_environment',
    'parse_edgerc',
    'read_edgerc',
    'expand_user_path',
    'merge_credential_values',
]
