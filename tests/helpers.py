from typing import Optional, Tuple

from multiai.config import Settings
from multiai.providers.base import ProviderSpec


def make_spec(
    name: str = "A",
    token: Optional[str] = "sk-test",
    paths: Tuple[str, ...] = ("text", "error"),
    endpoint: str = "https://api.example.test/v1/generate",
) -> ProviderSpec:
    return ProviderSpec(
        name=name,
        endpoint=endpoint,
        request_builder=lambda q: {"input": q},
        response_field_paths=paths,
        auth_token=token,
    )


def make_settings(**overrides) -> Settings:
    values = {
        "providers": ["A"],
        "max_attempts": 3,
        "base_backoff_seconds": 0,
        "timeout_seconds": 5,
        "stagger_seconds": 0,
    }
    values.update(overrides)
    return Settings(**values)
