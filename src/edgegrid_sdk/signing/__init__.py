"""
EdgeGrid Python SDK - Request Signing Module

EG1-HMAC-SHA256 request signing for Akamai EdgeGrid APIs.
This module computes the Authorization header for a request from a
resolved credential set and attaches it to requests prepared requests.
"""

from .types import (
    AUTHORIZATION_HEADER,
    EDGEGRID_ALGORITHM,
    SignableRequest,
    SigningConfig,
    SigningContext,
    EdgeGridSignatureResult,
    HttpMethod,
)

from .edgegrid_signer import (
    EdgeGridSigner,
    create_signer,
    compute_authorization_header,
)

from .signing_config import (
    SigningConfigBuilder,
    DEFAULT_SIGNING_CONFIG,
    create_signing_config,
    validate_signing_config,
)

from .canonical_message import (
    CanonicalMessageBuilder,
    build_string_to_sign,
    build_auth_data,
)

from .utils import (
    DEFAULT_MAX_BODY_SIZE,
    generate_nonce,
    generate_timestamp,
    format_edgegrid_timestamp,
    calculate_body_hash,
    hmac_sha256_base64,
    validate_nonce,
    validate_timestamp,
)

from .integration import (
    EdgeGridAuth,
    sign_prepared_request,
    apply_account_switch_key,
    create_signing_session,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'EdgeGridSigner',
    'create_signer',
    'compute_authorization_header',
    'AUTHORIZATION_HEADER',
    'EDGEGRID_ALGORITHM',
    # Types
    'SignableRequest',
    'SigningConfig',
    'SigningContext',
    'EdgeGridSignatureResult',
    'HttpMethod',
    # Configuration
    'SigningConfigBuilder',
    'DEFAULT_SIGNING_CONFIG',
    'create_signing_config',
    'validate_signing_config',
    # Canonical request data
    'CanonicalMessageBuilder',
    'build_string_to_sign',
    'build_auth_data',
    # Utilities
    'DEFAULT_MAX_BODY_SIZE',
    'generate_nonce',
    'generate_timestamp',
    'format_edgegrid_timestamp',
    'calculate_body_hash',
    'hmac_sha256_base64',
    'validate_nonce',
    'validate_timestamp',
    # HTTP Integration
    'EdgeGridAuth',
    'sign_prepared_request',
    'apply_account_switch_key',
    'create_signing_session',
]
