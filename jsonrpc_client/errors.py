"""
JSON-RPC error taxonomy

Standard JSON-RPC 2.0 error codes plus the application-level band, their default
messages, and the exceptions raised by transports and configuration loading.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional


class ErrorCode(IntEnum):
    """Error codes surfaced through a ResultSlot"""
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    INVALID_PARAMETERS = 6000
    VALIDATION_ERROR = 6001
    UNAUTHORIZED = 7000
    FORBIDDEN = 7001
    EXTERNAL_INTEGRATION_ERROR = 8000
    INTERNAL_INTEGRATION_ERROR = 8001


DEFAULT_MESSAGES = {
    ErrorCode.PARSE_ERROR: "Parse error",
    ErrorCode.INVALID_REQUEST: "Invalid request",
    ErrorCode.METHOD_NOT_FOUND: "Method not found",
    ErrorCode.INVALID_PARAMS: "Invalid params",
    ErrorCode.INTERNAL_ERROR: "Internal error",
    ErrorCode.INVALID_PARAMETERS: "Invalid parameters",
    ErrorCode.VALIDATION_ERROR: "Validation error",
    ErrorCode.UNAUTHORIZED: "Invalid authorization key",
    ErrorCode.FORBIDDEN: "Access denied",
    ErrorCode.EXTERNAL_INTEGRATION_ERROR: "External service error",
    ErrorCode.INTERNAL_INTEGRATION_ERROR: "Internal service error",
}


def default_message(code: Optional[int]) -> Optional[str]:
    """Return the fixed message for a known code, None otherwise"""
    try:
        return DEFAULT_MESSAGES[ErrorCode(code)]
    except (ValueError, TypeError):
        return None


@dataclass(frozen=True)
class RpcError:
    """Structured error attached to a failed ResultSlot"""
    code: Optional[int]
    message: str
    data: Any = None

    @classmethod
    def from_payload(cls, payload: Any) -> "RpcError":
        """Build an error from the ``error`` member of a reply

        Args:
            payload: The decoded error object

        Returns:
            RpcError: Error with the default message filled in when the reply omits one
        """
        if not isinstance(payload, dict):
            return cls(code=None, message=str(payload))

        code = payload.get("code")
        message = payload.get("message") or default_message(code) or "Unknown error"
        return cls(code=code, message=message, data=payload.get("data"))

    @classmethod
    def from_code(cls, code: ErrorCode, data: Any = None) -> "RpcError":
        return cls(code=int(code), message=DEFAULT_MESSAGES[code], data=data)

    def to_dict(self) -> Dict[str, Any]:
        error = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


class JsonRpcClientError(Exception):
    """Base class for errors raised inside the client package"""


class TransportError(JsonRpcClientError):
    """Raised by a transport on network failure, non-2xx status or malformed JSON"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(JsonRpcClientError):
    """Raised when a configuration document cannot be loaded"""
