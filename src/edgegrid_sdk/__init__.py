"""
EdgeGrid Python SDK
Credential resolution and EG1-HMAC-SHA256 request signing
"""

from .version import __version__
from .exceptions import (
    EdgeGridSDKError,
    ConfigurationError,
    ArgumentError,
    SigningError,
    ErrorCodes,
)
from .credentials import (
    EdgeGridCredentials,
    resolve_credentials,
    environment_variable_name,
    parse_edgerc,
    read_edgerc,
)
from .signing import (
    # Core signing functionality
    EdgeGridSigner,
    create_signer,
    compute_authorization_header,
    AUTHORIZATION_HEADER,
    # Types
    SignableRequest,
    SigningConfig,
    SigningContext,
    EdgeGridSignatureResult,
    HttpMethod,
    # Configuration
    SigningConfigBuilder,
    create_signing_config,
    # Utilities
    DEFAULT_MAX_BODY_SIZE,
    generate_nonce,
    generate_timestamp,
    # HTTP Integration
    EdgeGridAuth,
    sign_prepared_request,
    apply_account_switch_key,
    create_signing_session,
)


# Public API exports
__all__ = [
    '__version__',
    # Exceptions
    'EdgeGridSDKError',
    'ConfigurationError',
    'ArgumentError',
    'SigningError',
    'ErrorCodes',
    # Credentials
    'EdgeGridCredentials',
    'resolve_credentials',
    'environment_variable_name',
    'parse_edgerc',
    'read_edgerc',
    # Request Signing - Core
    'EdgeGridSigner',
    'create_signer',
    'compute_authorization_header',
    'AUTHORIZATION_HEADER',
    # Request Signing - Types
    'SignableRequest',
    'SigningConfig',
    'SigningContext',
    'EdgeGridSignatureResult',
    'HttpMethod',
    # Request Signing - Configuration
    'SigningConfigBuilder',
    'create_signing_config',
    # Request Signing - Utilities
    'DEFAULT_MAX_BODY_SIZE',
    'generate_nonce',
    'generate_timestamp',
    # Request Signing - HTTP Integration
    'EdgeGridAuth',
    'sign_prepared_request',
    'apply_account_switch_key',
    'create_signing_session',
]
