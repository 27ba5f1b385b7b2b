"""
Exception classes for EdgeGrid Python SDK
"""

from typing import Optional, Dict, Any


class EdgeGridSDKError(Exception):
    """Base exception for all EdgeGrid SDK errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.error_code}, details: {self.details})"
        return f"{self.message} (code: {self.error_code})"


class ConfigurationError(EdgeGridSDKError):
    """Exception raised when credentials or signing configuration cannot be resolved"""
    pass


class ArgumentError(EdgeGridSDKError, ValueError):
    """Exception raised for invalid request descriptors supplied by the caller"""
    pass


class SigningError(EdgeGridSDKError):
    """Exception raised when the signature computation itself fails"""
    pass


class ErrorCodes:
    """Standard error codes carried on SDK exceptions"""

    # Credential resolution
    MISSING_CREDENTIALS = "MISSING_CREDENTIALS"
    EDGERC_UNREADABLE = "EDGERC_UNREADABLE"
    SECTION_NOT_FOUND = "SECTION_NOT_FOUND"

    # Signing configuration
    MISSING_CLIENT_SECRET = "MISSING_CLIENT_SECRET"
    INVALID_CONFIG = "INVALID_CONFIG"

    # Request descriptor
    MISSING_PATH = "MISSING_PATH"
    INVALID_PATH = "INVALID_PATH"
    INVALID_METHOD = "INVALID_METHOD"
    INVALID_BODY = "INVALID_BODY"

    # Signing
    SIGNING_FAILED = "SIGNING_FAILED"
    INVALID_NONCE = "INVALID_NONCE"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"
