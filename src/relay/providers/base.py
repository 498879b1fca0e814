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
Orion Relay -- Shared HTTP exchange for translators

Each translator builds its own payload and headers, then hands them to
post_json(), which owns the transport call and the status classification:

    request failure     -> NetworkError (connect, timeout, redirects, bad encoding)
    non-2xx status      -> ProviderError(status, provider message)
    2xx                 -> raw body text, parsed by the translator

Nothing here retries. One short-lived httpx.AsyncClient per call.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, TypeVar

import httpx
import pydantic

from relay.config import RelaySettings
from relay.credentials import env_var_for
from relay.errors import CredentialMissingError, NetworkError, ParseError, ProviderError
from relay.models import Provider, Request

logger = logging.getLogger("relay.providers")

JSON_INSTRUCTION = (
    "Respond only with valid JSON. Do not wrap it in Markdown or add any text "
    "before or after the JSON."
)

ReplyT = TypeVar("ReplyT", bound=pydantic.BaseModel)


def check_preconditions(provider: Provider, request: Request, credential: str | None) -> None:
    """Fail fast, before any network traffic."""
    request.ensure_valid()
    if not credential or not credential.strip():
        raise CredentialMissingError(provider.value, env_var_for(provider))


def append_instruction(text: str | None, instruction: str) -> str:
    if not text:
        return instruction
    if instruction in text:
        return text
    return f"{text.rstrip()}\n\n{instruction}"


def error_message_from_body(body: str, fallback: str) -> str:
    """Pull the provider's own error text out of an error reply.

    OpenAI, Groq, Anthropic and Gemini all nest it under error.message;
    Gemini sometimes wraps the object in a one-element list.
    """
    try:
        data = json.loads(body)
    except ValueError:
        data = None

    if isinstance(data, list) and data:
        data = data[0]
    if isinstance(data, dict):
        err = data.get("error", data)
        if isinstance(err, dict) and isinstance(err.get("message"), str) and err["message"]:
            return err["message"]
        if isinstance(err, str) and err:
            return err

    body = body.strip()
    return body or fallback


async def post_json(
    provider: Provider,
    url: str,
    headers: dict[str, str],
    payload: dict[str, Any],
    *,
    settings: RelaySettings,
    transport: httpx.AsyncBaseTransport | None = None,
    model: str = "",
) -> str:
    """POST payload as JSON and return the body of a 2xx reply."""
    started = time.monotonic()
    try:
        async with httpx.AsyncClient(
            timeout=settings.timeout_seconds, transport=transport
        ) as client:
            resp = await client.post(url, headers=headers, json=payload)
    except httpx.RequestError as e:
        # TransportError plus DecodingError and TooManyRedirects
        logger.warning(
            "Request failure calling %s: %s",
            url,
            e,
            extra={"component": provider.value, "fields": {"model": model}},
        )
        raise NetworkError(
            f"Request to {url} failed: {e.__class__.__name__}: {e}", provider=provider.value
        ) from e

    latency_ms = int((time.monotonic() - started) * 1000)
    body = resp.text

    if not resp.is_success:
        message = error_message_from_body(body, resp.reason_phrase or f"HTTP {resp.status_code}")
        logger.warning(
            "Provider error",
            extra={
                "component": provider.value,
                "fields": {"status": resp.status_code, "model": model, "latency_ms": latency_ms},
            },
        )
        raise ProviderError(resp.status_code, message, provider=provider.value)

    logger.debug(
        "Reply received",
        extra={
            "component": provider.value,
            "fields": {"status": resp.status_code, "model": model, "latency_ms": latency_ms},
        },
    )
    return body


def parse_reply(reply_type: type[ReplyT], body: str, provider: Provider) -> ReplyT:
    """Validate a 2xx body against the provider's reply shape."""
    try:
        return reply_type.model_validate_json(body)
    except pydantic.ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        where = ".".join(str(p) for p in first.get("loc", ())) or "<body>"
        logger.warning(
            "Unexpected reply shape at %s",
            where,
            extra={"component": provider.value},
        )
        raise ParseError(
            f"Unexpected {provider.value} reply: {first.get('msg', 'invalid body')} at {where}",
            body=body,
            provider=provider.value,
        ) from e


def log_request(provider: Provider, request: Request) -> None:
    logger.info(
        "Sending request",
        extra={
            "component": provider.value,
            "fields": {
                "model": request.model,
                "messages": len(request.messages),
                "format": request.output_format.value,
            },
        },
    )


__all__ = [
    "JSON_INSTRUCTION",
    "append_instruction",
    "check_preconditions",
    "error_message_from_body",
    "log_request",
    "parse_reply",
    "post_json",
]
