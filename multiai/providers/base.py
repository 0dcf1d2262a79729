"""Provider-neutral types shared by the registry, executor and router."""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple


class ProviderStatus(str, Enum):
    SUCCESS = "success"
    MISSING_CREDENTIAL = "missing_api_key"
    TRANSPORT_ERROR = "transport_error"
    MAX_RETRIES_EXHAUSTED = "max_retries_exhausted"
    UNKNOWN_PROVIDER = "unknown_provider"


@dataclass(frozen=True)
class ProviderSpec:
    """Static description of one provider API, with its resolved credential."""

    name: str
    endpoint: str
    request_builder: Callable[[str], Dict[str, Any]]
    response_field_paths: Tuple[str, ...]
    auth_token: Optional[str] = None

    @property
    def has_credential(self) -> bool:
        return bool(self.auth_token and self.auth_token.strip())

    def build_body(self, question: str) -> bytes:
        return json.dumps(self.request_builder(question)).encode("utf-8")

    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.auth_token}",
            "Content-Type": "application/json",
        }


@dataclass(frozen=True)
class ProviderResult:
    provider: str
    status: ProviderStatus
    display_text: Optional[str] = None
    raw_body: Optional[bytes] = None
    error: Optional[Dict[str, str]] = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.status is ProviderStatus.SUCCESS

    @classmethod
    def failure(
        cls,
        provider: str,
        status: ProviderStatus,
        message: Optional[str] = None,
        attempts: int = 0,
    ) -> "ProviderResult":
        """Build a non-success result carrying the short JSON error payload."""
        payload = {"error": status.value, "provider": provider}
        if message:
            payload["message"] = message
        return cls(provider=provider, status=status, error=payload, attempts=attempts)


@dataclass
class RetryState:
    """Attempt bookkeeping for a single executor invocation."""

    max_attempts: int
    base_backoff_seconds: float
    attempt: int = 0
    last_error: Optional[str] = field(default=None)

    def next_attempt(self) -> int:
        self.attempt += 1
        return self.attempt

    @property
    def exhausted(self) -> bool:
        return self.attempt >= self.max_attempts

    def backoff_delay(self) -> float:
        # attempt is 1-based, so the first retry waits base_backoff_seconds
        return self.base_backoff_seconds * (2 ** (self.attempt - 1))
