# Orion Relay
# Copyright (C) 2025 Phoenix Link (Pty) Ltd. All Rights Reserved.
#
# This file is part of Orion Relay.
#
# Orion Relay is dual-licensed:
#
# 1. Open Source: GNU Affero General Public License v3.0 (AGPL-3.0)
#    You may use, modify, and distribute this file under AGPL-3.0.
#    See LICENSE for the full text.
#
# 2. Commercial: Available from Phoenix Link (Pty) Ltd
#    For proprietary use, SaaS deployment, or enterprise licensing.
#    See LICENSE-ENTERPRISE.md or contact info@phoenixlink.co.za
#
# Contributions require a signed CLA. See COPYRIGHT.md and CLA.md.
"""
Orion Relay -- Error taxonomy

Every failure raised by the relay is a RelayError subclass, so callers can
catch the whole family with one clause or branch on the specific class:

    try:
        response = await client.send("Hello")
    except ProviderError as e:
        if e.status == 429:
            ...
    except RelayError as e:
        print(f"LLM call failed: {e}")

Errors are never retried or swallowed inside the relay.
"""

from __future__ import annotations

from typing import Any

# Longest provider body kept on ParseError / ProviderError for debugging
BODY_EXCERPT_CHARS = 500


class RelayError(Exception):
    """Base class for every error raised by Orion Relay.

    Attributes:
        message: Human-readable error description.
        provider: Provider value (e.g. "openai") when the error is provider-specific.
        details: Extra context for debugging.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.details = details or {}

    def __str__(self) -> str:
        if self.provider:
            return f"[{self.provider}] {self.message}"
        return self.message


class ValidationError(RelayError, ValueError):
    """Request is malformed or misses a field the provider requires.

    Always raised before any HTTP call is made.
    """

    def __init__(self, message: str, *, problems: list[str] | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.problems = problems or [message]


class UnknownProviderError(RelayError, LookupError):
    """A model string could not be mapped to any provider."""

    def __init__(self, text: str, message: str | None = None) -> None:
        super().__init__(message or f"Cannot determine provider for model: {text!r}")
        self.input = text


class CredentialMissingError(RelayError):
    """No usable API key was available when a request was sent."""

    def __init__(self, provider: str, env_var: str | None = None) -> None:
        hint = f" Set {env_var} or pass the key explicitly." if env_var else ""
        super().__init__(f"API key not configured.{hint}", provider=provider)
        self.env_var = env_var


class NetworkError(RelayError):
    """Transport-level failure: DNS, connection refused, transport timeout."""


class ProviderError(RelayError):
    """The provider answered with a non-success HTTP status.

    Attributes:
        status: HTTP status code returned by the provider.
        message: Provider-reported error message (or the raw body).
    """

    def __init__(self, status: int, message: str, *, provider: str | None = None) -> None:
        super().__init__(message, provider=provider, details={"status": status})
        self.status = status

    def __str__(self) -> str:
        return f"{super().__str__()} (HTTP {self.status})"


class ParseError(RelayError):
    """Success status, but the reply body does not have the expected shape."""

    def __init__(self, message: str, *, body: str = "", provider: str | None = None) -> None:
        super().__init__(message, provider=provider)
        self.body = body[:BODY_EXCERPT_CHARS]


__all__ = [
    "RelayError",
    "ValidationError",
    "UnknownProviderError",
    "CredentialMissingError",
    "NetworkError",
    "ProviderError",
    "ParseError",
]
