"""Render provider results as a labeled plain-text report."""

import json
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from .logger import get_logger, mask_sensitive
from .providers.base import ProviderResult
from .providers.normalizer import pretty_body

log = get_logger()

RULE = "-" * 29
NO_RESULT = "(no result)"
EMPTY_BODY = "(empty response body)"


def result_body(result: ProviderResult) -> Optional[str]:
    """Pick what to show for one result, most specific first."""
    if result.display_text:
        return result.display_text
    if result.error is not None:
        return json.dumps(result.error, separators=(",", ":"))
    return pretty_body(result.raw_body)


def render(
    results: Sequence[ProviderResult],
    question: str,
    providers: Optional[Sequence[str]] = None,
    mask_keys: bool = True,
    now: Optional[datetime] = None,
) -> str:
    """
    Build the aggregated report.

    Args:
        results: Provider results in output order
        question: The question that was asked
        providers: Expected provider order; names with no matching result
            render a "(no result)" entry. Defaults to the order of results.
        mask_keys: Redact token-like substrings in everything shown
        now: Timestamp for the header (defaults to the current time)

    Returns:
        Report text ending without a trailing newline
    """
    by_name: Dict[str, ProviderResult] = {r.provider: r for r in results}
    order = list(providers) if providers is not None else [r.provider for r in results]
    stamp = (now or datetime.now(timezone.utc).astimezone()).isoformat(timespec="seconds")

    lines: List[str] = [
        "",
        "=== Multi-AI Chat Results ===",
        f"Question: {mask_sensitive(question, mask_keys)}",
        f"Timestamp: {stamp}",
        RULE,
    ]

    for name in order:
        result = by_name.get(name)
        lines.append("")
        if result is None:
            lines.append(f">>> Provider: {name.upper()} {NO_RESULT}")
            log.error(f"Missing result for provider={name}")
            continue

        body = result_body(result)
        lines.append(f">>> Provider: {name.upper()}")
        lines.append(RULE)
        lines.append(mask_sensitive(body, mask_keys) if body else EMPTY_BODY)

        summary = result.display_text or (json.dumps(result.error) if result.error else "(raw output)")
        log.info(f"Provider {name} returned [{result.status.value}]: {mask_sensitive(summary, mask_keys)}")

    return "\n".join(lines)
