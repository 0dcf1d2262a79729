"""Extract display text from provider responses of differing shapes."""

import json
from typing import Any, Optional, Sequence, Union

_MISSING = object()


def _walk(data: Any, path: str) -> Any:
    current = data
    for segment in path.split("."):
        if isinstance(current, dict):
            current = current.get(segment, _MISSING)
        elif isinstance(current, list) and segment.lstrip("-").isdigit():
            index = int(segment)
            current = current[index] if -len(current) <= index < len(current) else _MISSING
        else:
            return _MISSING
        if current is _MISSING:
            return _MISSING
    return current


def parse_body(raw_body: Union[bytes, str, None]) -> Any:
    """Decode a response body as JSON, returning _MISSING when it is not JSON."""
    if raw_body is None:
        return _MISSING
    if isinstance(raw_body, bytes):
        raw_body = raw_body.decode("utf-8", errors="replace")
    try:
        return json.loads(raw_body)
    except (ValueError, RecursionError):
        return _MISSING


def normalize(
    provider_name: str,
    raw_body: Union[bytes, str, None],
    field_paths: Sequence[str],
) -> Optional[str]:
    """
    Return the first non-empty string found along field_paths.

    Args:
        provider_name: Provider label (unused for lookup, kept for call sites)
        raw_body: Raw response body
        field_paths: Dot-separated paths tried in order; integer segments
            index into lists (e.g. "choices.0.message.content")

    Returns:
        The extracted text, or None when the body is not JSON or no path
        leads to a non-empty string
    """
    del provider_name
    data = parse_body(raw_body)
    if data is _MISSING:
        return None

    for path in field_paths:
        value = _walk(data, path)
        if isinstance(value, str) and value.strip():
            return value
    return None


def pretty_body(raw_body: Union[bytes, str, None]) -> Optional[str]:
    """Pretty-print a JSON body, or return it as literal text if it is not JSON."""
    if raw_body is None:
        return None
    data = parse_body(raw_body)
    if data is _MISSING:
        if isinstance(raw_body, bytes):
            return raw_body.decode("utf-8", errors="replace")
        return raw_body
    return json.dumps(data, indent=2, ensure_ascii=False)
