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
Orion Relay -- Model-string resolver

Turns a caller's model string into (Provider, model_name):

    "openai/gpt-4o-mini"          -> (Provider.OPENAI, "gpt-4o-mini")
    "google/gemini-2.5-flash"     -> (Provider.GEMINI, "gemini-2.5-flash")
    "groq/openai/gpt-oss-120b"    -> (Provider.GROQ, "openai/gpt-oss-120b")
    "claude-3-5-sonnet-20241022"  -> (Provider.ANTHROPIC, "claude-3-5-sonnet-20241022")

Bare names are matched against ModelPatterns. The resolver never guesses:
a name no pattern claims raises UnknownProviderError.
"""

from __future__ import annotations

import logging
from typing import Iterable

from relay.config import PROVIDERS
from relay.errors import UnknownProviderError, ValidationError
from relay.models import Provider

logger = logging.getLogger("relay.resolver")

DEFAULT_PATTERNS: tuple[tuple[str, Provider], ...] = (
    ("gpt", Provider.OPENAI),
    ("o1", Provider.OPENAI),
    ("o3", Provider.OPENAI),
    ("o4", Provider.OPENAI),
    ("claude", Provider.ANTHROPIC),
    ("gemini", Provider.GEMINI),
    ("llama", Provider.GROQ),
    ("mixtral", Provider.GROQ),
)


def _prefix_table() -> dict[str, Provider]:
    table = {}
    for provider, info in PROVIDERS.items():
        table[provider.value] = provider
        for alias in info.aliases:
            table[alias] = provider
    return table


class ModelPatterns:
    """Ordered, non-overlapping prefix -> provider rules for bare model names.

    Two prefixes that point at different providers may not overlap (one being
    a prefix of the other); such a set is rejected when built.
    """

    def __init__(self, patterns: Iterable[tuple[str, Provider]] = DEFAULT_PATTERNS):
        rules = []
        for prefix, provider in patterns:
            prefix = prefix.strip().lower()
            if not prefix:
                raise ValueError("Model pattern prefix must not be empty")
            rules.append((prefix, Provider(provider)))
        _check_overlaps(rules)
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[tuple[str, Provider], ...]:
        return self._rules

    def extended(self, extra: Iterable[tuple[str, Provider]]) -> ModelPatterns:
        """Return a new pattern set with extra rules appended."""
        return ModelPatterns(self._rules + tuple(extra))

    def match(self, model_name: str) -> Provider | None:
        lowered = model_name.lower()
        for prefix, provider in self._rules:
            if lowered.startswith(prefix):
                return provider
        return None


def _check_overlaps(rules: list[tuple[str, Provider]]) -> None:
    for i, (a, pa) in enumerate(rules):
        for b, pb in rules[i + 1:]:
            if pa is pb:
                continue
            if a.startswith(b) or b.startswith(a):
                raise ValueError(
                    f"Ambiguous model patterns: {a!r} ({pa.value}) overlaps "
                    f"{b!r} ({pb.value})"
                )


DEFAULT_MODEL_PATTERNS = ModelPatterns()


def parse_model_string(
    model: str, patterns: ModelPatterns | None = None
) -> tuple[Provider, str]:
    """Resolve a model string to (Provider, bare model name).

    Raises:
        UnknownProviderError: unknown prefix, or no pattern matches a bare name.
        ValidationError: empty input or empty model name after the prefix.
    """
    if not isinstance(model, str) or not model.strip():
        raise ValidationError("Model string must be a non-empty string")
    model = model.strip()

    if "/" in model:
        prefix, model_name = model.split("/", 1)
        provider = _prefix_table().get(prefix.lower())
        if provider is None:
            raise UnknownProviderError(
                model,
                f"Unknown provider prefix: {prefix!r}. "
                f"Supported: {', '.join(sorted(_prefix_table()))}",
            )
        if not model_name:
            raise ValidationError(f"Model name missing after provider prefix in {model!r}")
        logger.debug("Resolved %r explicitly to %s", model, provider.value)
        return provider, model_name

    provider = (patterns or DEFAULT_MODEL_PATTERNS).match(model)
    if provider is None:
        raise UnknownProviderError(
            model,
            f"Cannot infer provider from model name: {model!r}. "
            "Use the form 'provider/model' (e.g. 'openai/gpt-4o').",
        )
    logger.debug("Inferred provider %s for %r", provider.value, model)
    return provider, model


__all__ = ["DEFAULT_PATTERNS", "ModelPatterns", "parse_model_string"]
