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
Orion Relay -- Provider table and runtime settings

PROVIDERS holds the fixed facts about each provider (base URL, credential
variable, prefix aliases). RelaySettings holds the knobs a deployment may
override from the environment:

    RELAY_TIMEOUT_SECONDS        transport timeout handed to httpx (default 120)
    RELAY_<PROVIDER>_BASE_URL    e.g. RELAY_OPENAI_BASE_URL for a proxy
    RELAY_LOG_LEVEL              level for configure_logging() (default WARNING)
    RELAY_MODEL_PATTERNS         extra inference patterns, "prefix=provider,..."
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from relay.models import Provider

# =============================================================================
# SUPPORTED PROVIDERS
# =============================================================================

ANTHROPIC_API_VERSION = "2023-06-01"


@dataclass(frozen=True)
class ProviderInfo:
    """Static facts about one provider."""

    display: str
    base_url: str
    env_var: str
    auth_header: str
    aliases: tuple[str, ...] = ()


PROVIDERS: dict[Provider, ProviderInfo] = {
    Provider.OPENAI: ProviderInfo(
        display="OpenAI",
        base_url="https://api.openai.com/v1",
        env_var="OPENAI_API_KEY",
        auth_header="Authorization",
    ),
    Provider.ANTHROPIC: ProviderInfo(
        display="Anthropic",
        base_url="https://api.anthropic.com/v1",
        env_var="ANTHROPIC_API_KEY",
        auth_header="x-api-key",
    ),
    Provider.GEMINI: ProviderInfo(
        display="Google Gemini",
        base_url="https://generativelanguage.googleapis.com/v1beta",
        env_var="GEMINI_API_KEY",
        auth_header="x-goog-api-key",
        aliases=("google",),
    ),
    Provider.GROQ: ProviderInfo(
        display="Groq",
        base_url="https://api.groq.com/openai/v1",
        env_var="GROQ_API_KEY",
        auth_header="Authorization",
    ),
}


def provider_info(provider: Provider) -> ProviderInfo:
    return PROVIDERS[Provider(provider)]


# =============================================================================
# RUNTIME SETTINGS
# =============================================================================

DEFAULT_TIMEOUT_SECONDS = 120.0
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class RelaySettings:
    """Deployment-level knobs. Read-only once built."""

    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    base_urls: dict[Provider, str] = field(default_factory=dict)
    log_level: str = DEFAULT_LOG_LEVEL
    extra_patterns: tuple[tuple[str, Provider], ...] = ()

    def base_url(self, provider: Provider) -> str:
        provider = Provider(provider)
        return self.base_urls.get(provider, PROVIDERS[provider].base_url).rstrip("/")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "RelaySettings":
        env = os.environ if environ is None else environ
        base_urls = {}
        for provider in Provider:
            override = env.get(f"RELAY_{provider.name}_BASE_URL", "").strip()
            if override:
                base_urls[provider] = override
        return cls(
            timeout_seconds=_get_float(env, "RELAY_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
            base_urls=base_urls,
            log_level=env.get("RELAY_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            extra_patterns=_parse_patterns(env.get("RELAY_MODEL_PATTERNS", "")),
        )


def _get_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be a number, got: {raw}") from exc
    if value <= 0:
        raise ValueError(f"Environment variable {name} must be positive, got: {raw}")
    return value


def _parse_patterns(raw: str) -> tuple[tuple[str, Provider], ...]:
    """Parse "prefix=provider,prefix=provider" into ordered pairs."""
    patterns = []
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        prefix, sep, name = item.partition("=")
        if not sep or not prefix.strip():
            raise ValueError(
                f"RELAY_MODEL_PATTERNS entries must look like 'prefix=provider', got: {item}"
            )
        try:
            provider = Provider(name.strip().lower())
        except ValueError as exc:
            raise ValueError(
                f"RELAY_MODEL_PATTERNS names unknown provider {name.strip()!r}. "
                f"Supported: {[p.value for p in Provider]}"
            ) from exc
        patterns.append((prefix.strip().lower(), provider))
    return tuple(patterns)


__all__ = [
    "ANTHROPIC_API_VERSION",
    "PROVIDERS",
    "ProviderInfo",
    "RelaySettings",
    "provider_info",
]
