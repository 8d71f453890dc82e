from __future__ import annotations

from typing import Optional

__all__ = [
    "GatewayError",
    "RateLimitedError",
    "GatewayAuthError",
    "GatewayNotConfiguredError",
]


class GatewayError(Exception):
    """Upstream language-model call failed. Carries an HTTP status and a message safe to show users."""

    status_code: int = 502
    code: str = "gateway_error"
    user_message: str = "I'm having trouble connecting right now. Please try again."

    def __init__(self, detail: str = "", *, upstream_status: Optional[int] = None) -> None:
        super().__init__(detail or self.user_message)
        self.detail = detail
        self.upstream_status = upstream_status


class RateLimitedError(GatewayError):
    status_code = 429
    code = "rate_limited"
    user_message = "We're experiencing high demand. Please try again in a minute."


class GatewayAuthError(GatewayError):
    status_code = 401
    code = "auth_error"
    user_message = "Authentication error. Please contact support."


class GatewayNotConfiguredError(GatewayError):
    status_code = 503
    code = "not_configured"
    user_message = "The companion isn't available right now. Please try again later."
