"""Configuration for multi-ai-chat."""

import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

# Providers list (order controls output ordering)
DEFAULT_PROVIDERS = ["openai", "grok", "copilot", "gemini", "meta"]

DEFAULT_LOG_DIR = "./multi-ai-chat-logs"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"

# Environment variable names for the tunables
ENV_PROVIDERS = "MULTIAI_PROVIDERS"
ENV_CONFIG_FILE = "MULTIAI_CONFIG_FILE"
ENV_LOG_DIR = "MULTIAI_LOG_DIR"
ENV_RETRY_MAX = "MULTIAI_RETRY_MAX"
ENV_RETRY_BASE_SLEEP = "MULTIAI_RETRY_BASE_SLEEP"
ENV_TIMEOUT = "MULTIAI_CURL_TIMEOUT"
ENV_CONCURRENT_WAIT = "MULTIAI_CONCURRENT_WAIT"
ENV_MASK_KEYS = "MULTIAI_MASK_KEYS"
ENV_OPENAI_MODEL = "OPENAI_MODEL"

_FALSE_VALUES = {"0", "false", "no", "off"}


class ProviderCredentials(BaseModel):
    """Endpoint/key pair for one provider. Either side may be unset."""

    model_config = ConfigDict(frozen=True)

    endpoint: Optional[str] = None
    api_key: Optional[str] = None


class Settings(BaseModel):
    """Everything a run needs, resolved once at startup."""

    model_config = ConfigDict(frozen=True)

    providers: List[str] = Field(default_factory=lambda: list(DEFAULT_PROVIDERS))
    credentials: Dict[str, ProviderCredentials] = Field(default_factory=dict)
    max_attempts: int = Field(3, ge=1)
    base_backoff_seconds: float = Field(1.0, ge=0)
    timeout_seconds: float = Field(20.0, gt=0)
    stagger_seconds: float = Field(0.1, ge=0)
    log_dir: Path = Path(DEFAULT_LOG_DIR)
    mask_keys: bool = True
    openai_model: str = DEFAULT_OPENAI_MODEL
    config_file: Optional[Path] = None

    @field_validator("providers")
    @classmethod
    def _providers_not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one provider must be configured")
        return value

    def credentials_for(self, name: str) -> ProviderCredentials:
        return self.credentials.get(name, ProviderCredentials())


def key_env_var(provider: str) -> str:
    return f"{provider.upper()}_API_KEY"


def url_env_var(provider: str) -> str:
    return f"{provider.upper()}_API_URL"


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_providers(raw: Optional[str]) -> List[str]:
    if raw is None or not raw.strip():
        return list(DEFAULT_PROVIDERS)
    return [p.strip() for p in raw.split(",") if p.strip()]


def _collect_environment(environ: Mapping[str, str]) -> Dict[str, str]:
    """
    Merge the configuration sources into a single mapping.

    Precedence (lowest first): a .env file found from the working directory,
    the process environment, then the file named by MULTIAI_CONFIG_FILE.
    """
    merged: Dict[str, str] = {}

    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        merged.update({k: v for k, v in dotenv_values(dotenv_path).items() if v is not None})

    merged.update(environ)

    config_file = merged.get(ENV_CONFIG_FILE)
    if config_file and os.path.isfile(config_file):
        merged.update({k: v for k, v in dotenv_values(config_file).items() if v is not None})

    return merged


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment and optional config files.

    Args:
        environ: Mapping to read instead of os.environ (used by tests)

    Returns:
        Immutable Settings instance

    Raises:
        ConfigError: if any tunable has an invalid value
    """
    env = _collect_environment(os.environ if environ is None else environ)

    providers = _parse_providers(env.get(ENV_PROVIDERS))
    credentials = {
        name: ProviderCredentials(
            endpoint=_blank_to_none(env.get(url_env_var(name))),
            api_key=_blank_to_none(env.get(key_env_var(name))),
        )
        for name in providers
    }

    values = {
        "providers": providers,
        "credentials": credentials,
        "max_attempts": env.get(ENV_RETRY_MAX),
        "base_backoff_seconds": env.get(ENV_RETRY_BASE_SLEEP),
        "timeout_seconds": env.get(ENV_TIMEOUT),
        "stagger_seconds": env.get(ENV_CONCURRENT_WAIT),
        "log_dir": env.get(ENV_LOG_DIR),
        "openai_model": _blank_to_none(env.get(ENV_OPENAI_MODEL)),
    }
    # Unset tunables fall back to the model defaults
    values = {k: v for k, v in values.items() if v is not None}

    mask = env.get(ENV_MASK_KEYS)
    if mask is not None:
        values["mask_keys"] = mask.strip().lower() not in _FALSE_VALUES

    config_file = env.get(ENV_CONFIG_FILE)
    if config_file and os.path.isfile(config_file):
        values["config_file"] = config_file

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
