"""
Concurrent multi-provider request engine.

This package sends one question to several conversational-AI HTTP APIs:
- registry: static provider table (endpoint, body shape, answer fields)
- executor: one provider's HTTP exchange with timeout and retry
- normalizer: pull display text out of differently shaped responses
- router: run every provider in parallel and keep configured order

Usage:
    from multiai.providers import build_provider_specs, run

    specs = build_provider_specs(settings)
    results = run("Your question", settings.providers, specs, settings)
"""

from .base import ProviderResult, ProviderSpec, ProviderStatus
from .executor import execute
from .normalizer import normalize
from .registry import PROVIDER_REGISTRY, build_provider_specs
from .router import query_providers_parallel, run

__all__ = [
    "PROVIDER_REGISTRY",
    "ProviderResult",
    "ProviderSpec",
    "ProviderStatus",
    "build_provider_specs",
    "execute",
    "normalize",
    "query_providers_parallel",
    "run",
]
