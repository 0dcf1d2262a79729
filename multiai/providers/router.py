"""
Fan a question out to every configured provider in parallel.

Each provider runs as its own unit of work: a dedicated worker thread
performing the blocking HTTP exchange, tracked by an asyncio task. The
thread pool is sized to the number of launched units so none of them queue.
All units are awaited before results are returned, and results always come
back in configured provider order regardless of which finished first.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Awaitable, Callable, List, Mapping, Sequence

from ..config import Settings
from ..logger import get_logger, mask_sensitive
from .base import ProviderResult, ProviderSpec, ProviderStatus
from .executor import execute

log = get_logger()

Executor = Callable[..., ProviderResult]


async def _completed(result: ProviderResult) -> ProviderResult:
    return result


def _launch(
    spec: ProviderSpec,
    question: str,
    settings: Settings,
    executor: Executor,
    pool: ThreadPoolExecutor,
) -> "asyncio.Future[ProviderResult]":
    call = partial(
        executor,
        spec,
        question,
        settings.max_attempts,
        settings.base_backoff_seconds,
        settings.timeout_seconds,
        mask_keys=settings.mask_keys,
    )
    return asyncio.get_running_loop().run_in_executor(pool, call)


async def query_providers_parallel(
    question: str,
    provider_names: Sequence[str],
    specs: Mapping[str, ProviderSpec],
    settings: Settings,
    executor: Executor = execute,
) -> List[ProviderResult]:
    """
    Query every configured provider concurrently.

    Args:
        question: Raw question text
        provider_names: Configured providers, in output order
        specs: Resolved provider specs keyed by name
        settings: Run configuration (retry, timeout and stagger tunables)
        executor: Blocking per-provider request function

    Returns:
        One ProviderResult per entry in provider_names, in the same order
    """
    units: List[Awaitable[ProviderResult]] = []
    launched = sum(1 for name in provider_names if name in specs)
    pool = ThreadPoolExecutor(max_workers=max(1, launched), thread_name_prefix="multiai")

    try:
        for index, name in enumerate(provider_names):
            spec = specs.get(name)
            if spec is None:
                log.error(f"Unknown provider={name}; no request sent")
                units.append(_completed(ProviderResult.failure(name, ProviderStatus.UNKNOWN_PROVIDER)))
                continue

            log.debug(f"Launching request for provider={name}")
            units.append(_launch(spec, question, settings, executor, pool))

            # Throttle launches so every provider's quota is not hit in the same instant
            if settings.stagger_seconds and index < len(provider_names) - 1:
                await asyncio.sleep(settings.stagger_seconds)

        # Wait for all to complete; one unit's fault never cancels its siblings
        outcomes = await asyncio.gather(*units, return_exceptions=True)
    finally:
        pool.shutdown(wait=True)

    results: List[ProviderResult] = []
    for name, outcome in zip(provider_names, outcomes):
        if isinstance(outcome, BaseException):
            log.error(f"Unit of work for provider={name} failed: {type(outcome).__name__}: {outcome}")
            outcome = ProviderResult.failure(
                name,
                ProviderStatus.TRANSPORT_ERROR,
                message=mask_sensitive(f"{type(outcome).__name__}: {outcome}", settings.mask_keys),
            )
        results.append(outcome)
    return results


def run(
    question: str,
    provider_names: Sequence[str],
    specs: Mapping[str, ProviderSpec],
    settings: Settings,
    executor: Executor = execute,
) -> List[ProviderResult]:
    """Blocking entry point around query_providers_parallel."""
    return asyncio.run(query_providers_parallel(question, provider_names, specs, settings, executor))
