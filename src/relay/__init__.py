"""
Orion Relay -- one request/response model over OpenAI, Anthropic, Gemini and Groq.

    from relay import RelayClient

    client = RelayClient.from_model("openai/gpt-4o-mini")
    response = await client.send("What is Python?")
"""

__version__ = "1.0.0"
__author__ = "Orion Team"

from relay.client import RelayClient
from relay.errors import (
    CredentialMissingError,
    NetworkError,
    ParseError,
    ProviderError,
    RelayError,
    UnknownProviderError,
    ValidationError,
)
from relay.models import Message, OutputFormat, Provider, Request, Response, Role, Usage
from relay.resolver import parse_model_string

__all__ = [
    "CredentialMissingError",
    "Message",
    "NetworkError",
    "OutputFormat",
    "ParseError",
    "Provider",
    "ProviderError",
    "RelayClient",
    "RelayError",
    "Request",
    "Response",
    "Role",
    "UnknownProviderError",
    "Usage",
    "ValidationError",
    "parse_model_string",
]
