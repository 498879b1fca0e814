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
Orion Relay -- Unified request/response model

Provider-agnostic shapes handed to and returned from every translator.
Requests are immutable; the with_* builders return a new Request:

    request = (
        Request("gpt-4o-mini")
        .with_system_prompt("You are terse.")
        .with_message(Message.user("What is Python?"))
        .with_temperature(0.2)
    )

Field values are checked by Request.validate() at send time, never clamped.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from relay.errors import ValidationError

DEFAULT_MAX_TOKENS = 1024
TEMPERATURE_RANGE = (0.0, 2.0)
TOP_P_RANGE = (0.0, 1.0)


class Provider(str, Enum):
    """Supported LLM providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    GROQ = "groq"


class Role(str, Enum):
    """Conversation roles."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class OutputFormat(str, Enum):
    """Requested shape of the model output."""

    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True)
class Message:
    """One conversation turn."""

    role: Role
    content: str

    def __post_init__(self) -> None:
        if not isinstance(self.role, Role):
            try:
                object.__setattr__(self, "role", Role(str(self.role).lower()))
            except ValueError as exc:
                raise ValidationError(
                    f"Unknown message role: {self.role!r}. "
                    f"Supported: {[r.value for r in Role]}"
                ) from exc

    @classmethod
    def system(cls, content: str) -> Message:
        return cls(Role.SYSTEM, content)

    @classmethod
    def user(cls, content: str) -> Message:
        return cls(Role.USER, content)

    @classmethod
    def assistant(cls, content: str) -> Message:
        return cls(Role.ASSISTANT, content)

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


@dataclass(frozen=True)
class Request:
    """A provider-agnostic chat request."""

    model: str
    messages: tuple[Message, ...] = ()
    system_prompt: str | None = None
    max_tokens: int | None = DEFAULT_MAX_TOKENS
    temperature: float | None = None
    top_p: float | None = None
    output_format: OutputFormat = OutputFormat.TEXT

    def __post_init__(self) -> None:
        if not isinstance(self.messages, tuple):
            object.__setattr__(self, "messages", tuple(self.messages))
        if not isinstance(self.output_format, OutputFormat):
            object.__setattr__(self, "output_format", OutputFormat(self.output_format))

    # -- builders ---------------------------------------------------------

    def with_message(self, message: Message) -> Request:
        return replace(self, messages=self.messages + (message,))

    def with_messages(self, messages: Iterable[Message]) -> Request:
        """Replace the whole conversation."""
        return replace(self, messages=tuple(messages))

    def with_system_prompt(self, prompt: str | None) -> Request:
        return replace(self, system_prompt=prompt)

    def with_max_tokens(self, max_tokens: int | None) -> Request:
        """Set the output token budget. None leaves it unset."""
        return replace(self, max_tokens=max_tokens)

    def with_temperature(self, temperature: float | None) -> Request:
        return replace(self, temperature=temperature)

    def with_top_p(self, top_p: float | None) -> Request:
        return replace(self, top_p=top_p)

    def with_output_format(self, output_format: OutputFormat) -> Request:
        return replace(self, output_format=OutputFormat(output_format))

    # -- validation -------------------------------------------------------

    def validate(self) -> list[str]:
        """Return every problem with this request (empty list when valid)."""
        errors = []
        if not isinstance(self.model, str) or not self.model.strip():
            errors.append("model must be a non-empty string")
        if not self.messages:
            errors.append("at least one message is required")
        if self.max_tokens is not None:
            if isinstance(self.max_tokens, bool) or not isinstance(self.max_tokens, int):
                errors.append(f"max_tokens must be an integer, got {self.max_tokens!r}")
            elif self.max_tokens <= 0:
                errors.append(f"max_tokens must be > 0, got {self.max_tokens}")
        errors.extend(_check_range("temperature", self.temperature, TEMPERATURE_RANGE))
        errors.extend(_check_range("top_p", self.top_p, TOP_P_RANGE))
        return errors

    def ensure_valid(self) -> None:
        """Raise ValidationError listing every problem, if any."""
        errors = self.validate()
        if errors:
            raise ValidationError("Invalid request: " + "; ".join(errors), problems=errors)


def _check_range(name: str, value: float | None, bounds: tuple[float, float]) -> list[str]:
    if value is None:
        return []
    low, high = bounds
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return [f"{name} must be a number, got {value!r}"]
    if not low <= value <= high:
        return [f"{name} must be within [{low}, {high}], got {value}"]
    return []


@dataclass(frozen=True)
class Usage:
    """Token accounting reported by the provider."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_counts(cls, prompt: int, completion: int, total: int | None = None) -> Usage:
        # Some providers report no total; derive it.
        if total is None:
            total = prompt + completion
        return cls(prompt_tokens=prompt, completion_tokens=completion, total_tokens=total)


@dataclass(frozen=True)
class Response:
    """Normalized reply from any provider."""

    content: str
    usage: Usage | None = None
    model: str = ""
    provider: Provider | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": self.content,
            "usage": None
            if self.usage is None
            else {
                "prompt_tokens": self.usage.prompt_tokens,
                "completion_tokens": self.usage.completion_tokens,
                "total_tokens": self.usage.total_tokens,
            },
            "model": self.model,
            "provider": self.provider.value if self.provider else None,
            "metadata": dict(self.metadata),
        }


__all__ = [
    "DEFAULT_MAX_TOKENS",
    "Message",
    "OutputFormat",
    "Provider",
    "Request",
    "Response",
    "Role",
    "Usage",
]
