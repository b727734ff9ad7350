"""
Proxy error types.

Each error carries the HTTP status code and the plain-text message returned to
the caller. They are raised where the failure happens and rendered by the
exception handler registered in main.py.
"""

from typing import Dict, Optional


class StitchProxyError(Exception):
    """Base class for failures that map to a specific HTTP response."""

    status_code = 500

    def __init__(self, message: str, headers: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.headers = headers or {}


class ValidationError(StitchProxyError):
    """Malformed, oversized or empty upload."""

    status_code = 400


class MethodError(StitchProxyError):
    """Request method other than POST or OPTIONS."""

    status_code = 405

    def __init__(self, message: str = "Only POST allowed"):
        super().__init__(message, headers={"Allow": "POST, OPTIONS"})


class UpstreamUnavailable(StitchProxyError):
    """HTTP stitcher could not be reached."""

    status_code = 502


class InternalError(StitchProxyError):
    """File read, re-encoding or gRPC failure."""

    status_code = 500
