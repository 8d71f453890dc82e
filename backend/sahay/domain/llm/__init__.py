from .errors import GatewayError, RateLimitedError, GatewayAuthError, GatewayNotConfiguredError
from .parsing import Ok, ParseError, parse_json_payload, parse_model
from .gateway import LLMGateway, get_gateway

__all__ = [
    "GatewayError", "RateLimitedError", "GatewayAuthError", "GatewayNotConfiguredError",
    "Ok", "ParseError", "parse_json_payload", "parse_model",
    "LLMGateway", "get_gateway",
]
