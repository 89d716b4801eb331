"""Core exceptions for the bridge."""

from typing import Optional


class BridgeError(Exception):
    """Base exception for bridge errors."""
    
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StreamMappingError(BridgeError):
    """Raised when a converted stream chunk cannot be serialized."""
    pass


class ConfigurationError(BridgeError):
    """Raised when there's an issue with the configuration."""
    pass


class InvalidRequestError(BridgeError):
    """Raised when an incoming request is invalid."""
    
    def __init__(self, message: str, code: str = "invalid_request") -> None:
        super().__init__(message)
        self.code = code


class UpstreamError(BridgeError):
    """Raised when the Responses upstream cannot be reached."""
    
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
