"""
TrendSearch - Error Taxonomy

Every failure surfaced by the client is one of the classes below. The
hierarchy is flat: each kind subclasses TrendSearchError
directly and carries its own fields, so callers dispatch with a plain
isinstance check and serializers use the stable `code` string.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class TrendSearchError(Exception):
    """Base error for all TrendSearch failures."""

    code = "TRENDSEARCH_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def details(self) -> Dict[str, Any]:
        """Structured fields for machine-readable error envelopes."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details()}


class TransportError(TrendSearchError):
    """Network failure, timeout, non-2xx response or undecodable body."""

    code = "TRANSPORT_ERROR"

    def __init__(
        self,
        message: str,
        url: str,
        status: Optional[int] = None,
        response_body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status = status
        self.response_body = response_body

    def details(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "url": self.url,
            "response_body": self.response_body,
        }


class RateLimitError(TrendSearchError):
    """HTTP 429 from upstream. `retry_after` is in seconds when the server sent one."""

    code = "RATE_LIMIT_ERROR"

    def __init__(
        self,
        message: str,
        url: str,
        status: int = 429,
        retry_after: Optional[float] = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status = status
        self.retry_after = retry_after

    @property
    def retry_after_ms(self) -> Optional[int]:
        if self.retry_after is None:
            return None
        return int(round(self.retry_after * 1000))

    def details(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "url": self.url,
            "retry_after_ms": self.retry_after_ms,
        }


class SchemaValidationError(TrendSearchError):
    """A request or response did not match its declared shape."""

    code = "SCHEMA_VALIDATION_ERROR"

    def __init__(self, endpoint: str, issues: List[str]) -> None:
        super().__init__(f"Schema validation failed for endpoint '{endpoint}'.")
        self.endpoint = endpoint
        self.issues = list(issues)

    def details(self) -> Dict[str, Any]:
        return {"endpoint": self.endpoint, "issues": self.issues}


class UnexpectedResponseError(TrendSearchError):
    """Response parsed fine but lacks a structural element (widget, RPC frame)."""

    code = "UNEXPECTED_RESPONSE_ERROR"

    def __init__(self, endpoint: str, message: str) -> None:
        super().__init__(message)
        self.endpoint = endpoint

    def details(self) -> Dict[str, Any]:
        return {"endpoint": self.endpoint}


class EndpointUnavailableError(TrendSearchError):
    """A legacy upstream endpoint has been decommissioned (404/410)."""

    code = "ENDPOINT_UNAVAILABLE_ERROR"

    def __init__(
        self,
        endpoint: str,
        status: Optional[int] = None,
        replacements: Optional[List[str]] = None,
    ) -> None:
        replacements = list(replacements or [])
        status_hint = f" (HTTP {status})" if status else ""
        replacement_hint = (
            " Use '" + "', '".join(replacements) + "' instead." if replacements else ""
        )
        super().__init__(
            f"Endpoint '{endpoint}' is unavailable{status_hint}.{replacement_hint}"
        )
        self.endpoint = endpoint
        self.status = status
        self.replacements = replacements

    def details(self) -> Dict[str, Any]:
        return {
            "endpoint": self.endpoint,
            "status": self.status,
            "replacements": self.replacements,
        }


class ConfigError(TrendSearchError):
    """Raised when environment configuration is missing or malformed."""

    code = "CONFIG_ERROR"

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key

    def details(self) -> Dict[str, Any]:
        return {"key": self.key}
