"""
Provider table for multi-ai-chat.

Each entry describes how to talk to one provider: where to POST, what JSON
body to send, and which response fields hold the answer. Adding a provider
means adding an entry here; nothing else in the request path branches on
provider names.

Several endpoints are placeholders for services that normally sit behind
OAuth (Gemini, Copilot). Point <NAME>_API_URL at a proxy you control.
"""

from dataclasses import replace
from functools import partial
from typing import Any, Dict, Mapping

from ..config import DEFAULT_OPENAI_MODEL, Settings
from .base import ProviderSpec

SYSTEM_PROMPT = "You are a helpful assistant."


def openai_body(question: str, model: str = DEFAULT_OPENAI_MODEL) -> Dict[str, Any]:
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": question},
        ],
        "max_tokens": 1200,
    }


def grok_body(question: str) -> Dict[str, Any]:
    return {"input": question, "max_tokens": 800}


def prompt_body(question: str) -> Dict[str, Any]:
    return {"prompt": question}


def input_body(question: str) -> Dict[str, Any]:
    return {"input": question}


PROVIDER_REGISTRY: Dict[str, ProviderSpec] = {
    "openai": ProviderSpec(
        name="openai",
        endpoint="https://api.openai.com/v1/chat/completions",
        request_builder=openai_body,
        response_field_paths=("choices.0.message.content", "error.message", "error"),
    ),
    "grok": ProviderSpec(
        name="grok",
        endpoint="https://api.grok.example/v1/generate",
        request_builder=grok_body,
        response_field_paths=("output", "result", "text", "error"),
    ),
    "copilot": ProviderSpec(
        name="copilot",
        endpoint="https://api.microsoft.com/copilot/v1/generate",
        request_builder=prompt_body,
        response_field_paths=("result", "text", "message", "error"),
    ),
    "gemini": ProviderSpec(
        name="gemini",
        endpoint="https://api.gemini.example/v1/generate",
        request_builder=prompt_body,
        response_field_paths=("candidates.0.content", "output", "text", "error"),
    ),
    "meta": ProviderSpec(
        name="meta",
        endpoint="https://api.meta.example/v1/generate",
        request_builder=input_body,
        response_field_paths=("output", "response", "text", "error"),
    ),
}


def build_provider_specs(
    settings: Settings,
    registry: Mapping[str, ProviderSpec] = PROVIDER_REGISTRY,
) -> Dict[str, ProviderSpec]:
    """
    Resolve registry entries against the configured endpoints and keys.

    Args:
        settings: Startup configuration
        registry: Static provider table to resolve

    Returns:
        Dict mapping provider name to its resolved ProviderSpec. Configured
        names with no registry entry are left out; the router reports them.
    """
    specs: Dict[str, ProviderSpec] = {}
    for name in settings.providers:
        template = registry.get(name)
        if template is None:
            continue

        creds = settings.credentials_for(name)
        changes: Dict[str, Any] = {"auth_token": creds.api_key}
        if creds.endpoint:
            changes["endpoint"] = creds.endpoint
        if template.request_builder is openai_body:
            changes["request_builder"] = partial(openai_body, model=settings.openai_model)

        specs[name] = replace(template, **changes)
    return specs
