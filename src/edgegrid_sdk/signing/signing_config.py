"""
Configuration management for request signing

This module provides the fluent configuration builder and validation for
EdgeGrid request signing. The injectable nonce and timestamp generators let
callers pin the otherwise random parts of a signature.
"""

from typing import Optional

from ..exceptions import ConfigurationError, ErrorCodes
from .types import (
    SigningConfig,
    NonceGenerator,
    TimestampGenerator,
)
from .utils import DEFAULT_MAX_BODY_SIZE


DEFAULT_SIGNING_CONFIG = SigningConfig()


class SigningConfigBuilder:
    """
    Builder for creating signing configurations with fluent API
    """

    def __init__(self):
        self._max_body_size: int = DEFAULT_MAX_BODY_SIZE
        self._nonce_generator: Optional[NonceGenerator] = None
        self._timestamp_generator: Optional[TimestampGenerator] = None
        self._log_string_to_sign: bool = False

    def max_body_size(self, size: int) -> 'SigningConfigBuilder':
        """Set the maximum number of body bytes included in the body hash."""
        self._max_body_size = size
        return self

    def nonce_generator(self, generator: NonceGenerator) -> 'SigningConfigBuilder':
        """Set a custom nonce generator."""
        self._nonce_generator = generator
        return self

    def timestamp_generator(self, generator: TimestampGenerator) -> 'SigningConfigBuilder':
        """Set a custom timestamp generator."""
        self._timestamp_generator = generator
        return self

    def fixed_context(self, timestamp: str, nonce: str) -> 'SigningConfigBuilder':
        """
        Pin timestamp and nonce to constant values.

        Useful for reproducing known signatures; never use for live traffic.
        """
        self._timestamp_generator = lambda: timestamp
        self._nonce_generator = lambda: nonce
        return self

    def log_string_to_sign(self, enabled: bool = True) -> 'SigningConfigBuilder':
        """Enable DEBUG logging of the string-to-sign and body hash."""
        self._log_string_to_sign = enabled
        return self

    def build(self) -> SigningConfig:
        """
        Build the signing configuration.

        Returns:
            SigningConfig: Validated configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config = SigningConfig(
            max_body_size=self._max_body_size,
            nonce_generator=self._nonce_generator,
            timestamp_generator=self._timestamp_generator,
            log_string_to_sign=self._log_string_to_sign,
        )
        validate_signing_config(config)
        return config


def create_signing_config() -> SigningConfigBuilder:
    """
    Create a new signing configuration builder.

    Returns:
        SigningConfigBuilder: New builder instance
    """
    return SigningConfigBuilder()


def validate_signing_config(config: SigningConfig) -> None:
    """
    Validate signing configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigurationError: If configuration is invalid
    """
    if not isinstance(config, SigningConfig):
        raise ConfigurationError(
            "Configuration must be SigningConfig instance",
            ErrorCodes.INVALID_CONFIG,
            {"config_type": str(type(config))}
        )

    if isinstance(config.max_body_size, bool) or not isinstance(config.max_body_size, int) \
            or config.max_body_size <= 0:
        raise ConfigurationError(
            f"Maximum body size must be a positive integer: {config.max_body_size}",
            ErrorCodes.INVALID_CONFIG,
            {"max_body_size": config.max_body_size}
        )

    for name in ('nonce_generator', 'timestamp_generator'):
        generator = getattr(config, name)
        if generator is not None and not callable(generator):
            raise ConfigurationError(
                f"{name} must be callable",
                ErrorCodes.INVALID_CONFIG,
                {"field": name}
            )
