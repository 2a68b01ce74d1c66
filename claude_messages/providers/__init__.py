from .anthropic_client import AnthropicTransport
from .base import MessagesTransport, ProviderResponse, parse_api_error

__all__ = [
    "AnthropicTransport",
    "MessagesTransport",
    "ProviderResponse",
    "parse_api_error",
]
