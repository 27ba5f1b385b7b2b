"""
EdgeGrid EG1-HMAC-SHA256 request signer

This module provides the signer that turns a credential set and one request
description into an Authorization header value. The signing key is derived
per request from the client secret and the request timestamp, and the
signature covers the string-to-sign followed by the auth-data value.
"""

import logging
from typing import Optional, Union

from ..credentials.types import EdgeGridCredentials
from ..exceptions import (
    ArgumentError,
    ConfigurationError,
    EdgeGridSDKError,
    ErrorCodes,
    SigningError,
)
from .types import (
    AUTHORIZATION_HEADER,
    EDGEGRID_ALGORITHM,
    EdgeGridSignatureResult,
    HttpMethod,
    RequestBody,
    SignableRequest,
    SigningConfig,
    SigningContext,
)
from .utils import (
    DEFAULT_MAX_BODY_SIZE,
    PerformanceTimer,
    generate_nonce,
    generate_timestamp,
    hmac_sha256_base64,
    validate_nonce,
    validate_timestamp,
)
from .canonical_message import CanonicalMessageBuilder
from .signing_config import DEFAULT_SIGNING_CONFIG, validate_signing_config

logger = logging.getLogger(__name__)

__all__ = [
    'AUTHORIZATION_HEADER',
    'EDGEGRID_ALGORITHM',
    'DEFAULT_MAX_BODY_SIZE',
    'EdgeGridSigner',
    'create_signer',
    'compute_authorization_header',
]


class EdgeGridSigner:
    """
    EdgeGrid request signer

    Instances hold only immutable configuration and may be shared between
    threads. Every call generates its own timestamp and nonce.
    """

    def __init__(self, config: Optional[SigningConfig] = None):
        """
        Initialize the signer with configuration.

        Args:
            config: Signing configuration (defaults are used if None)

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config = config or DEFAULT_SIGNING_CONFIG
        validate_signing_config(config)
        self.config = config

    def compute_authorization_header(
        self,
        credentials: EdgeGridCredentials,
        method: Union[str, HttpMethod],
        path_and_query: str,
        body: RequestBody = None
    ) -> str:
        """
        Compute the Authorization header value for one request.

        Args:
            credentials: Credentials to sign with
            method: HTTP method, any case
            path_and_query: Host-relative path including query string
            body: Optional request body; hashed only for POST

        Returns:
            str: Header value to send under the Authorization header

        Raises:
            ConfigurationError: If the client secret is empty
            ArgumentError: If the request description is invalid
        """
        self._require_client_secret(credentials)
        request = SignableRequest(method=method, path_and_query=path_and_query, body=body)
        return self.sign_request(credentials, request).authorization

    def sign_request(
        self,
        credentials: EdgeGridCredentials,
        request: SignableRequest
    ) -> EdgeGridSignatureResult:
        """
        Sign a request and return the header with its intermediate values.

        Args:
            credentials: Credentials to sign with
            request: Request to sign

        Returns:
            EdgeGridSignatureResult: Header value plus string-to-sign and auth data

        Raises:
            ConfigurationError: If the client secret is empty
            ArgumentError: If request is missing
            SigningError: If signing fails
        """
        self._require_client_secret(credentials)
        if request is None:
            raise ArgumentError("Request cannot be None", ErrorCodes.MISSING_PATH)

        timer = PerformanceTimer()

        try:
            context = self._create_signing_context()
            builder = CanonicalMessageBuilder(
                credentials, request, context, self.config.max_body_size
            )

            body_hash = builder.body_hash()
            string_to_sign = builder.string_to_sign(body_hash)
            auth_data = builder.auth_data()

            if self.config.log_string_to_sign:
                logger.debug(f"Body hash: {body_hash!r}")
                logger.debug(f"String to sign: {string_to_sign!r}")

            signing_key = hmac_sha256_base64(credentials.client_secret, context.timestamp)
            signature = hmac_sha256_base64(signing_key, string_to_sign + auth_data)

            result = EdgeGridSignatureResult(
                authorization=f"{auth_data}signature={signature}",
                string_to_sign=string_to_sign,
                auth_data=auth_data,
                body_hash=body_hash,
                context=context,
            )

        except EdgeGridSDKError:
            raise
        except Exception as e:
            raise SigningError(
                f"Request signing failed: {e}",
                ErrorCodes.SIGNING_FAILED,
                {"original_error": type(e).__name__}
            ) from e

        elapsed_ms = timer.elapsed_ms()
        if elapsed_ms > 10:
            logger.warning(f"Signing operation took {elapsed_ms:.2f}ms (target: <10ms)")

        logger.debug(f"Signed {request.method.value} request to {credentials.host}{request.path_and_query}")
        return result

    def _create_signing_context(self) -> SigningContext:
        """
        Generate the timestamp and nonce for one signature.

        Raises:
            SigningError: If a generator produces an invalid value
        """
        timestamp_gen = self.config.timestamp_generator or generate_timestamp
        nonce_gen = self.config.nonce_generator or generate_nonce

        timestamp = timestamp_gen()
        nonce = nonce_gen()

        if not validate_timestamp(timestamp):
            raise SigningError(
                f"Invalid timestamp: {timestamp}",
                ErrorCodes.INVALID_TIMESTAMP,
                {"timestamp": timestamp}
            )

        if not validate_nonce(nonce):
            raise SigningError(
                f"Invalid nonce format: {nonce}",
                ErrorCodes.INVALID_NONCE,
                {"nonce": nonce}
            )

        return SigningContext(timestamp=timestamp, nonce=nonce.lower())

    @staticmethod
    def _require_client_secret(credentials: EdgeGridCredentials) -> None:
        if credentials is None or not getattr(credentials, 'client_secret', None):
            raise ConfigurationError(
                "Client secret is required for signing",
                ErrorCodes.MISSING_CLIENT_SECRET
            )


def create_signer(config: Optional[SigningConfig] = None) -> EdgeGridSigner:
    """
    Create a new EdgeGrid signer.

    Args:
        config: Signing configuration

    Returns:
        EdgeGridSigner: Configured signer instance
    """
    return EdgeGridSigner(config)


def compute_authorization_header(
    credentials: EdgeGridCredentials,
    method: Union[str, HttpMethod],
    path_and_query: str,
    body: RequestBody = None,
    config: Optional[SigningConfig] = None
) -> str:
    """
    Compute the Authorization header value for one request.

    Args:
        credentials: Credentials to sign with
        method: HTTP method
        path_and_query: Host-relative path including query string
        body: Optional request body
        config: Optional signing configuration

    Returns:
        str: Authorization header value
    """
    return create_signer(config).compute_authorization_header(
        credentials, method, path_and_query, body
    )
