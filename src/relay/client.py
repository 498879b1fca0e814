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
Orion Relay -- Client facade

RelayClient owns one provider, one credential and (optionally) a default
model for its whole life. It holds no mutable state, so one instance can
serve any number of concurrent send() calls.

    client = RelayClient.from_model("anthropic/claude-3-5-sonnet-20241022")
    response = await client.send_with_system("You are terse.", "What is Python?")
    print(response.content, response.usage.total_tokens)

Errors raised by the translator reach the caller unchanged.
"""

from __future__ import annotations

import logging

import httpx

from relay.config import RelaySettings
from relay.credentials import (
    Reader,
    credential_from_env,
    env_var_for,
    mask_credential,
    resolve_credential,
)
from relay.errors import CredentialMissingError, ValidationError
from relay.models import Message, Provider, Request, Response
from relay.providers import Translator, get_translator
from relay.resolver import ModelPatterns, parse_model_string

logger = logging.getLogger("relay.client")


class RelayClient:
    """Unified entry point for one provider."""

    def __init__(
        self,
        provider: Provider,
        credential: str | None = None,
        model: str | None = None,
        *,
        settings: RelaySettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._provider = Provider(provider)
        self._credential = credential.strip() if credential else None
        self._default_model = model
        self._settings = settings or RelaySettings()
        self._translator: Translator = get_translator(
            self._provider, settings=self._settings, transport=transport
        )

    # -- constructors -----------------------------------------------------

    @classmethod
    def from_env(
        cls,
        provider: Provider,
        model: str | None = None,
        *,
        settings: RelaySettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> RelayClient:
        """Build a client whose key comes from {PROVIDER}_API_KEY.

        A missing variable is not an error here; sending will raise
        CredentialMissingError.
        """
        provider = Provider(provider)
        return cls(
            provider,
            credential_from_env(provider),
            model,
            settings=settings,
            transport=transport,
        )

    @classmethod
    def from_model(
        cls,
        model_string: str,
        credential: str | None = None,
        *,
        interactive: bool = False,
        reader: Reader | None = None,
        settings: RelaySettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> RelayClient:
        """Build a client from "provider/model" or a recognizable bare model name.

        The credential is taken from the argument, then the environment, then
        (when interactive) a prompt. Raises CredentialMissingError when none
        of those yields a key.
        """
        settings = settings or RelaySettings.from_env()
        patterns = ModelPatterns().extended(settings.extra_patterns)
        provider, model_name = parse_model_string(model_string, patterns)
        key = resolve_credential(provider, credential, interactive=interactive, reader=reader)
        logger.debug("Resolved %r to %s/%s", model_string, provider.value, model_name)
        return cls(provider, key, model_name, settings=settings, transport=transport)

    # -- accessors --------------------------------------------------------

    @property
    def provider(self) -> Provider:
        return self._provider

    @property
    def default_model(self) -> str | None:
        return self._default_model

    def __repr__(self) -> str:
        return (
            f"RelayClient(provider={self._provider.value!r}, "
            f"model={self._default_model!r}, credential={mask_credential(self._credential)!r})"
        )

    # -- sending ----------------------------------------------------------

    async def send_request(self, request: Request) -> Response:
        """Validate request and send it to the configured provider."""
        request.ensure_valid()
        if not self._credential:
            raise CredentialMissingError(self._provider.value, env_var_for(self._provider))
        return await self._translator.send(request, self._credential)

    async def send(self, text: str) -> Response:
        """Send one user message to the default model."""
        request = Request(self._require_model()).with_message(Message.user(text))
        return await self.send_request(request)

    async def send_with_system(self, system_text: str, user_text: str) -> Response:
        """Send one user message under a system prompt to the default model."""
        request = (
            Request(self._require_model())
            .with_system_prompt(system_text)
            .with_message(Message.user(user_text))
        )
        return await self.send_request(request)

    def _require_model(self) -> str:
        if not self._default_model:
            raise ValidationError(
                "No default model set. Build the client with a model "
                "(e.g. RelayClient.from_model) or use send_request().",
                provider=self._provider.value,
            )
        return self._default_model


__all__ = ["RelayClient"]
