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
Orion Relay -- Anthropic Messages translator

POST {base}/messages with x-api-key + anthropic-version. The system prompt
is a top-level field; system-role messages are folded into it. max_tokens
is mandatory for this API and is checked locally. There is no JSON mode,
so JSON output is requested through the system text.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel

from relay.config import ANTHROPIC_API_VERSION, RelaySettings, provider_info
from relay.errors import ParseError, ValidationError
from relay.models import OutputFormat, Provider, Request, Response, Role, Usage
from relay.providers.base import (
    JSON_INSTRUCTION,
    append_instruction,
    check_preconditions,
    log_request,
    parse_reply,
    post_json,
)


class _ContentBlock(BaseModel):
    type: str = "text"
    text: str | None = None


class _Usage(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0
    # Not sent by the API today; honoured if it ever appears.
    total_tokens: int | None = None


class MessagesReply(BaseModel):
    content: list[_ContentBlock]
    usage: _Usage | None = None
    model: str = ""
    stop_reason: str | None = None


class AnthropicTranslator:
    provider = Provider.ANTHROPIC

    def __init__(
        self,
        *,
        settings: RelaySettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings or RelaySettings()
        self._transport = transport

    def endpoint(self, request: Request) -> str:
        return f"{self._settings.base_url(self.provider)}/messages"

    def headers(self, credential: str) -> dict[str, str]:
        return {
            provider_info(self.provider).auth_header: credential,
            "anthropic-version": ANTHROPIC_API_VERSION,
            "Content-Type": "application/json",
        }

    def build_payload(self, request: Request) -> dict[str, Any]:
        if request.max_tokens is None:
            raise ValidationError(
                "max_tokens is required by the Anthropic Messages API",
                provider=self.provider.value,
            )

        system_parts = [request.system_prompt] if request.system_prompt else []
        system_parts.extend(m.content for m in request.messages if m.role is Role.SYSTEM)
        messages = [m.to_dict() for m in request.messages if m.role is not Role.SYSTEM]
        if not messages:
            raise ValidationError(
                "At least one user or assistant message is required",
                provider=self.provider.value,
            )

        system = "\n\n".join(system_parts) or None
        if request.output_format is OutputFormat.JSON:
            system = append_instruction(system, JSON_INSTRUCTION)

        payload: dict[str, Any] = {
            "model": request.model,
            "messages": messages,
            "max_tokens": request.max_tokens,
        }
        if system:
            payload["system"] = system
        if request.temperature is not None:
            payload["temperature"] = request.temperature
        if request.top_p is not None:
            payload["top_p"] = request.top_p
        return payload

    def parse(self, body: str, request: Request) -> Response:
        reply = parse_reply(MessagesReply, body, self.provider)
        texts = [b.text for b in reply.content if b.type == "text" and b.text is not None]
        if not texts:
            raise ParseError(
                "Reply contains no text content blocks", body=body, provider=self.provider.value
            )
        usage = None
        if reply.usage is not None:
            usage = Usage.from_counts(
                reply.usage.input_tokens,
                reply.usage.output_tokens,
                reply.usage.total_tokens,
            )
        return Response(
            content="".join(texts),
            usage=usage,
            model=reply.model or request.model,
            provider=self.provider,
            metadata={"stop_reason": reply.stop_reason},
        )

    async def send(self, request: Request, credential: str) -> Response:
        check_preconditions(self.provider, request, credential)
        payload = self.build_payload(request)
        log_request(self.provider, request)
        body = await post_json(
            self.provider,
            self.endpoint(request),
            self.headers(credential),
            payload,
            settings=self._settings,
            transport=self._transport,
            model=request.model,
        )
        return self.parse(body, request)


__all__ = ["AnthropicTranslator", "MessagesReply"]
