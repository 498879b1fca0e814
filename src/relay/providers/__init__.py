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
Translators -- one per provider wire dialect.

Every translator satisfies the Translator protocol: a single async send().
Callers pick one by Provider through get_translator() and never need to
know the concrete class.
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Protocol, runtime_checkable

import httpx

from relay.config import RelaySettings
from relay.models import Provider, Request, Response
from relay.providers.anthropic import AnthropicTranslator
from relay.providers.gemini import GeminiTranslator
from relay.providers.openai import OpenAICompatibleTranslator


@runtime_checkable
class Translator(Protocol):
    """Turns a Request into one provider HTTP exchange and back."""

    provider: Provider

    async def send(self, request: Request, credential: str) -> Response:
        """Send request using credential.

        Raises:
            ValidationError: invalid request, before any HTTP call
            CredentialMissingError: empty credential, before any HTTP call
            NetworkError: transport failure
            ProviderError: non-2xx reply
            ParseError: 2xx reply with an unexpected body
        """
        ...


_FACTORIES: dict[Provider, Callable[..., Translator]] = {
    Provider.OPENAI: partial(OpenAICompatibleTranslator, Provider.OPENAI),
    Provider.GROQ: partial(OpenAICompatibleTranslator, Provider.GROQ),
    Provider.ANTHROPIC: AnthropicTranslator,
    Provider.GEMINI: GeminiTranslator,
}


def get_translator(
    provider: Provider,
    settings: RelaySettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Translator:
    factory = _FACTORIES[Provider(provider)]
    return factory(settings=settings, transport=transport)


__all__ = [
    "AnthropicTranslator",
    "GeminiTranslator",
    "OpenAICompatibleTranslator",
    "Translator",
    "get_translator",
]
