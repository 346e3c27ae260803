# =============================================================================
# lib/urlencoded.py - Nested URL-Encoded Body Parser
# =============================================================================
# Parses application/x-www-form-urlencoded bodies into nested structures,
# the way HTML forms and most JS clients encode objects:
#
#   title=Intro&tags[]=python&tags[]=web&author[name]=Ada
#   -> {"title": "Intro", "tags": ["python", "web"], "author": {"name": "Ada"}}
#
# Numeric brackets are kept as dict keys; they do not build sparse lists.
# Objects appended with `a[]` merge by position: a[][b]=1&a[][c]=2 gives
# {"a": [{"b": "1", "c": "2"}]}.
# =============================================================================

import re
from typing import Any
from urllib.parse import parse_qsl

MAX_DEPTH = 5

_BRACKET = re.compile(r"\[([^\[\]]*)\]")


def split_key(key: str, depth: int = MAX_DEPTH) -> list[str]:
    """
    Split a form key into its path segments.

    Example:
        split_key("a[b][]") -> ["a", "b", ""]
        split_key("plain") -> ["plain"]

    Brackets beyond `depth` are kept together as one literal segment.
    """
    start = key.find("[")
    if start <= 0:
        return [key]

    segments = [key[:start]]
    pos = start
    while len(segments) <= depth:
        match = _BRACKET.match(key, pos)
        if not match:
            break
        segments.append(match.group(1))
        pos = match.end()

    if pos < len(key):
        segments.append(key[pos:])
    return segments


def _build(segments: list[str], value: str) -> Any:
    if not segments:
        return value
    head, rest = segments[0], segments[1:]
    if head == "":
        return [_build(rest, value)]
    return {head: _build(rest, value)}


def _merge(target: Any, source: Any) -> Any:
    if isinstance(target, list):
        if not isinstance(source, list):
            return target + [source]
        for index, item in enumerate(source):
            if index < len(target) and isinstance(target[index], dict) and isinstance(item, dict):
                target[index] = _merge(target[index], item)
            else:
                target.append(item)
        return target

    if isinstance(target, dict) and isinstance(source, dict):
        for key, value in source.items():
            target[key] = _merge(target[key], value) if key in target else value
        return target

    # Repeated scalar keys collect into a list
    if isinstance(source, list):
        return [target] + source
    return [target, source]


def parse_urlencoded(body: str | bytes, depth: int = MAX_DEPTH) -> dict[str, Any]:
    """
    Parse a URL-encoded body with nested bracket keys.

    Args:
        body: Raw body (bytes are decoded as UTF-8)
        depth: Maximum bracket nesting turned into structure

    Returns:
        Parsed body as a dict. An empty body gives an empty dict.

    Raises:
        UnicodeDecodeError: If a bytes body is not valid UTF-8
    """
    if isinstance(body, bytes):
        body = body.decode("utf-8")

    result: dict[str, Any] = {}
    for key, value in parse_qsl(body, keep_blank_values=True):
        segments = split_key(key, depth)
        result = _merge(result, {segments[0]: _build(segments[1:], value)})
    return result
