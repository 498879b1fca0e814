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
Orion Relay -- OpenAI-compatible translator (OpenAI, Groq)

POST {base}/chat/completions with a Bearer key. The system prompt travels
as a leading "system" message. JSON output needs both the json_object
response_format and a JSON instruction in the system text, because the
directive alone is not honoured reliably.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, Field

from relay.config import RelaySettings, provider_info
from relay.models import OutputFormat, Provider, Request, Response, Role, Usage
from relay.providers.base import (
    JSON_INSTRUCTION,
    append_instruction,
    check_preconditions,
    log_request,
    parse_reply,
    post_json,
)

OPENAI_COMPATIBLE = (Provider.OPENAI, Provider.GROQ)


# ── Reply shape ──────────────────────────────────────────────────────────


class _ReplyMessage(BaseModel):
    content: str


class _Choice(BaseModel):
    message: _ReplyMessage
    finish_reason: str | None = None


class _Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int | None = None


class ChatCompletion(BaseModel):
    choices: list[_Choice] = Field(min_length=1)
    usage: _Usage | None = None
    model: str = ""


# ── Translator ───────────────────────────────────────────────────────────


class OpenAICompatibleTranslator:
    """Chat-completions dialect shared by OpenAI and Groq."""

    def __init__(
        self,
        provider: Provider = Provider.OPENAI,
        *,
        settings: RelaySettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        provider = Provider(provider)
        if provider not in OPENAI_COMPATIBLE:
            raise ValueError(f"{provider.value} does not speak the chat-completions dialect")
        self.provider = provider
        self._settings = settings or RelaySettings()
        self._transport = transport

    def endpoint(self, request: Request) -> str:
        return f"{self._settings.base_url(self.provider)}/chat/completions"

    def headers(self, credential: str) -> dict[str, str]:
        return {
            provider_info(self.provider).auth_header: f"Bearer {credential}",
            "Content-Type": "application/json",
        }

    def build_payload(self, request: Request) -> dict[str, Any]:
        messages = [m.to_dict() for m in request.messages]
        if request.system_prompt:
            messages.insert(0, {"role": Role.SYSTEM.value, "content": request.system_prompt})

        if request.output_format is OutputFormat.JSON:
            if messages and messages[0]["role"] == Role.SYSTEM.value:
                messages[0]["content"] = append_instruction(messages[0]["content"], JSON_INSTRUCTION)
            else:
                messages.insert(0, {"role": Role.SYSTEM.value, "content": JSON_INSTRUCTION})

        payload: dict[str, Any] = {"model": request.model, "messages": messages}
        if request.max_tokens is not None:
            payload["max_tokens"] = request.max_tokens
        if request.temperature is not None:
            payload["temperature"] = request.temperature
        if request.top_p is not None:
            payload["top_p"] = request.top_p
        if request.output_format is OutputFormat.JSON:
            payload["response_format"] = {"type": "json_object"}
        return payload

    def parse(self, body: str, request: Request) -> Response:
        reply = parse_reply(ChatCompletion, body, self.provider)
        choice = reply.choices[0]
        usage = None
        if reply.usage is not None:
            usage = Usage.from_counts(
                reply.usage.prompt_tokens,
                reply.usage.completion_tokens,
                reply.usage.total_tokens,
            )
        return Response(
            content=choice.message.content,
            usage=usage,
            model=reply.model or request.model,
            provider=self.provider,
            metadata={"finish_reason": choice.finish_reason},
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


__all__ = ["ChatCompletion", "OpenAICompatibleTranslator"]
