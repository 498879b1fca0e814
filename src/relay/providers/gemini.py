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
Orion Relay -- Google Gemini generateContent translator

POST {base}/models/{model}:generateContent with x-goog-api-key. Roles are
"user" and "model"; there is no system slot in the turn list, so system
text is prepended to the first user turn. Sampling knobs and JSON mode live
under generationConfig.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, Field

from relay.config import RelaySettings, provider_info
from relay.errors import ParseError, ValidationError
from relay.models import OutputFormat, Provider, Request, Response, Role, Usage
from relay.providers.base import check_preconditions, log_request, parse_reply, post_json

JSON_MIME_TYPE = "application/json"


class _Part(BaseModel):
    text: str | None = None


class _Content(BaseModel):
    parts: list[_Part] = Field(min_length=1)
    role: str = "model"


class _Candidate(BaseModel):
    content: _Content
    finish_reason: str | None = Field(None, alias="finishReason")


class _UsageMetadata(BaseModel):
    prompt_token_count: int = Field(0, alias="promptTokenCount")
    candidates_token_count: int = Field(0, alias="candidatesTokenCount")
    total_token_count: int | None = Field(None, alias="totalTokenCount")


class GenerateContentReply(BaseModel):
    candidates: list[_Candidate] = Field(min_length=1)
    usage_metadata: _UsageMetadata | None = Field(None, alias="usageMetadata")
    version: str = Field("", alias="modelVersion")


class GeminiTranslator:
    provider = Provider.GEMINI

    def __init__(
        self,
        *,
        settings: RelaySettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings or RelaySettings()
        self._transport = transport

    def endpoint(self, request: Request) -> str:
        model = request.model
        if model.startswith("models/"):
            model = model[len("models/"):]
        return f"{self._settings.base_url(self.provider)}/models/{model}:generateContent"

    def headers(self, credential: str) -> dict[str, str]:
        return {
            provider_info(self.provider).auth_header: credential,
            "Content-Type": "application/json",
        }

    def build_payload(self, request: Request) -> dict[str, Any]:
        system_parts = [request.system_prompt] if request.system_prompt else []
        contents: list[dict[str, Any]] = []
        for message in request.messages:
            if message.role is Role.SYSTEM:
                system_parts.append(message.content)
                continue
            role = "model" if message.role is Role.ASSISTANT else "user"
            contents.append({"role": role, "parts": [{"text": message.content}]})

        if not contents:
            raise ValidationError(
                "At least one user or assistant message is required",
                provider=self.provider.value,
            )

        system_text = "\n\n".join(system_parts)
        if system_text:
            first_user = next((c for c in contents if c["role"] == "user"), None)
            if first_user is None:
                contents.insert(0, {"role": "user", "parts": [{"text": system_text}]})
            else:
                part = first_user["parts"][0]
                part["text"] = f"{system_text}\n\n{part['text']}"

        generation_config: dict[str, Any] = {}
        if request.temperature is not None:
            generation_config["temperature"] = request.temperature
        if request.top_p is not None:
            generation_config["topP"] = request.top_p
        if request.max_tokens is not None:
            generation_config["maxOutputTokens"] = request.max_tokens
        if request.output_format is OutputFormat.JSON:
            generation_config["responseMimeType"] = JSON_MIME_TYPE

        payload: dict[str, Any] = {"contents": contents}
        if generation_config:
            payload["generationConfig"] = generation_config
        return payload

    def parse(self, body: str, request: Request) -> Response:
        reply = parse_reply(GenerateContentReply, body, self.provider)
        candidate = reply.candidates[0]
        text = candidate.content.parts[0].text
        if text is None:
            raise ParseError(
                "First candidate part carries no text", body=body, provider=self.provider.value
            )
        usage = None
        meta = reply.usage_metadata
        if meta is not None:
            usage = Usage.from_counts(
                meta.prompt_token_count, meta.candidates_token_count, meta.total_token_count
            )
        return Response(
            content=text,
            usage=usage,
            model=reply.version or request.model,
            provider=self.provider,
            metadata={"finish_reason": candidate.finish_reason},
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


__all__ = ["GeminiTranslator", "GenerateContentReply"]
