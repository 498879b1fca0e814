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
Orion Relay -- Credential lookup

Order: explicit key -> {PROVIDER}_API_KEY -> interactive prompt (opt-in).
A prompted key lives only in the returned value; the process environment
is left untouched.
"""

from __future__ import annotations

import getpass
import logging
import os
from typing import Callable, Mapping

from relay.config import provider_info
from relay.errors import CredentialMissingError
from relay.models import Provider

logger = logging.getLogger("relay.credentials")

Reader = Callable[[str], str]


def env_var_for(provider: Provider) -> str:
    return provider_info(provider).env_var


def mask_credential(credential: str | None) -> str:
    """Safe-to-log form of a key: only the last four characters survive."""
    if not credential:
        return "<none>"
    if len(credential) <= 8:
        return "****"
    return f"****{credential[-4:]}"


def credential_from_env(
    provider: Provider, environ: Mapping[str, str] | None = None
) -> str | None:
    env = os.environ if environ is None else environ
    value = env.get(env_var_for(provider), "").strip()
    return value or None


def prompt_for_credential(provider: Provider, reader: Reader | None = None) -> str | None:
    """Ask the user for a key. Returns None when nothing usable was entered."""
    info = provider_info(provider)
    read = reader or getpass.getpass
    try:
        value = read(f"{info.display} API key ({info.env_var} not set): ")
    except EOFError:
        return None
    value = (value or "").strip()
    return value or None


def resolve_credential(
    provider: Provider,
    explicit: str | None = None,
    *,
    interactive: bool = False,
    reader: Reader | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Find a usable key for provider or raise CredentialMissingError."""
    provider = Provider(provider)
    if explicit and explicit.strip():
        return explicit.strip()

    key = credential_from_env(provider, environ)
    if key:
        logger.debug("Using %s from environment (%s)", env_var_for(provider), mask_credential(key))
        return key

    if interactive:
        key = prompt_for_credential(provider, reader)
        if key:
            return key

    raise CredentialMissingError(provider.value, env_var_for(provider))


__all__ = [
    "credential_from_env",
    "env_var_for",
    "mask_credential",
    "prompt_for_credential",
    "resolve_credential",
]
