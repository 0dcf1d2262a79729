"""HTTP request executor: one provider, bounded attempts, exponential backoff."""

import time
from typing import Callable, Optional

import httpx

from ..logger import get_logger, mask_sensitive
from .base import ProviderResult, ProviderSpec, ProviderStatus, RetryState
from .normalizer import normalize

log = get_logger()

_ERROR_SNIPPET_CHARS = 200


def _describe_failure(exc: httpx.HTTPError, timeout_seconds: float) -> str:
    if isinstance(exc, httpx.TimeoutException):
        return f"timed out after {timeout_seconds}s ({type(exc).__name__})"
    return f"{type(exc).__name__}: {exc}"


def _describe_status(response: httpx.Response) -> str:
    body = response.text.strip()[:_ERROR_SNIPPET_CHARS]
    detail = f"HTTP {response.status_code}"
    return f"{detail}: {body}" if body else detail


def execute(
    spec: ProviderSpec,
    question: str,
    max_attempts: int = 3,
    base_backoff_seconds: float = 1.0,
    timeout_seconds: float = 20.0,
    *,
    client: Optional[httpx.Client] = None,
    sleep: Callable[[float], None] = time.sleep,
    mask_keys: bool = True,
) -> ProviderResult:
    """
    POST the question to one provider, retrying transient failures.

    Args:
        spec: Resolved provider description
        question: Raw question text
        max_attempts: Upper bound on HTTP attempts
        base_backoff_seconds: Delay before the first retry; doubles each retry
        timeout_seconds: Per-attempt timeout
        client: httpx.Client to reuse (a private one is created otherwise)
        sleep: Blocking sleep used between attempts
        mask_keys: Redact token-like substrings in error details

    Returns:
        ProviderResult with status SUCCESS, MISSING_CREDENTIAL or
        MAX_RETRIES_EXHAUSTED. Never raises for HTTP-level failures.
    """
    if not spec.has_credential:
        log.warning(f"No API key configured for provider={spec.name}; skipping request")
        return ProviderResult.failure(spec.name, ProviderStatus.MISSING_CREDENTIAL)

    if client is None:
        with httpx.Client(timeout=timeout_seconds) as owned:
            return _execute_with_client(
                owned, spec, question, max_attempts, base_backoff_seconds, timeout_seconds, sleep, mask_keys
            )
    return _execute_with_client(
        client, spec, question, max_attempts, base_backoff_seconds, timeout_seconds, sleep, mask_keys
    )


def _execute_with_client(
    client: httpx.Client,
    spec: ProviderSpec,
    question: str,
    max_attempts: int,
    base_backoff_seconds: float,
    timeout_seconds: float,
    sleep: Callable[[float], None],
    mask_keys: bool,
) -> ProviderResult:
    body = spec.build_body(question)
    headers = spec.headers()
    state = RetryState(max_attempts=max_attempts, base_backoff_seconds=base_backoff_seconds)

    while not state.exhausted:
        attempt = state.next_attempt()
        log.debug(f"Attempt {attempt}/{state.max_attempts} for provider={spec.name}")

        try:
            response = client.post(spec.endpoint, content=body, headers=headers, timeout=timeout_seconds)
        except httpx.HTTPError as e:
            state.last_error = mask_sensitive(_describe_failure(e, timeout_seconds), mask_keys)
        else:
            if response.is_success:
                raw = response.content
                text = normalize(spec.name, raw, spec.response_field_paths)
                if text is None:
                    log.info(f"No known response field for provider={spec.name}; keeping raw body")
                log.debug(f"Provider {spec.name} succeeded on attempt {attempt}/{state.max_attempts}")
                return ProviderResult(
                    provider=spec.name,
                    status=ProviderStatus.SUCCESS,
                    display_text=text,
                    raw_body=raw,
                    attempts=attempt,
                )
            state.last_error = mask_sensitive(_describe_status(response), mask_keys)

        log.warning(
            f"Request failed for provider={spec.name} "
            f"(attempt {attempt}/{state.max_attempts}): {state.last_error}"
        )
        if not state.exhausted:
            delay = state.backoff_delay()
            log.info(f"Retrying provider={spec.name} in {delay:g}s...")
            sleep(delay)

    log.error(f"Giving up on provider={spec.name} after {state.attempt} attempts")
    return ProviderResult.failure(
        spec.name,
        ProviderStatus.MAX_RETRIES_EXHAUSTED,
        message=state.last_error,
        attempts=state.attempt,
    )
