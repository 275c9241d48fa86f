"""Recovery of JSON payloads from free-form model output.

Models are asked for "JSON only" but routinely wrap the answer in markdown
fences, prepend a sentence of prose, or append commentary. The helpers here
turn such text back into a JSON value, or hand back the caller's default.
"""
import json
import logging
import re
from typing import Any, Iterator, List, Optional, Sequence, Type, Union

from smart_trip.core.errors import JSONRecoveryError

logger = logging.getLogger(__name__)

_CODE_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
_FENCE_PATTERN = re.compile(r"```(?:json)?\n?", re.IGNORECASE)
_CONTROL_CHARS_PATTERN = re.compile(r"[\u0000-\u001F\u007F-\u009F]")
_CLOSERS = {"{": "}", "[": "]"}
# upper bound on opening brackets tried per text
_MAX_OPENERS = 64

ExpectedType = Optional[Union[Type[dict], Type[list]]]


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences (```json / ```) and surrounding whitespace."""

    if not text:
        return ""
    return _FENCE_PATTERN.sub("", text).strip()


def strip_control_characters(text: str) -> str:
    """Remove C0 / C1 control characters, newlines and tabs included."""

    if not text:
        return ""
    return _CONTROL_CHARS_PATTERN.sub("", text)


def _match_from(text: str, start: int) -> Optional[int]:
    """Return the index closing the bracket opened at ``start``, if any."""

    stack: List[str] = []
    in_string = False
    escaped = False
    for idx in range(start, len(text)):
        char = text[idx]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in _CLOSERS:
            stack.append(_CLOSERS[char])
        elif char in ("}", "]"):
            if not stack or stack.pop() != char:
                return None
            if not stack:
                return idx
    return None


def iter_balanced_json(text: str) -> Iterator[str]:
    """Yield top-level balanced ``{...}`` / ``[...]`` substrings, left to right.

    Brackets inside string literals are ignored. Once a segment closes, the
    openers nested inside it are never yielded on their own. An opener that
    never closes (or closes with the wrong bracket) is skipped and the next
    one, nested or not, is tried.
    """

    if not text:
        return
    tried = 0
    start = 0
    while start < len(text):
        if text[start] not in _CLOSERS:
            start += 1
            continue
        tried += 1
        if tried > _MAX_OPENERS:
            return
        end = _match_from(text, start)
        if end is None:
            start += 1
            continue
        yield text[start : end + 1]
        start = end + 1


def find_balanced_json(text: str) -> Optional[str]:
    """Return the first balanced JSON-looking substring, or ``None``."""

    return next(iter_balanced_json(text), None)


def _iter_candidates(raw_output: str) -> Iterator[str]:
    stripped = raw_output.strip()
    if stripped:
        yield stripped

    # Extract code-fenced JSON blocks if present (```json ... ```)
    for match in _CODE_BLOCK_PATTERN.finditer(raw_output):
        block = match.group(1).strip()
        if block:
            yield block

    unfenced = strip_code_fences(raw_output)
    yield from iter_balanced_json(unfenced)

    cleaned = strip_control_characters(unfenced)
    if cleaned and cleaned != unfenced:
        yield cleaned
        yield from iter_balanced_json(cleaned)


def _iter_parsed(raw_output: str) -> Iterator[Any]:
    seen = set()
    for candidate in _iter_candidates(raw_output):
        if candidate in seen:
            continue
        seen.add(candidate)
        try:
            yield json.loads(candidate, strict=False)
        except json.JSONDecodeError:
            continue


def extract_json(raw_output: str, *, expect: ExpectedType = None) -> Any:
    """Recover the first JSON value from ``raw_output``.

    When ``expect`` is given, the first value of that type wins over values of
    other types found earlier in the text.

    Raises:
        JSONRecoveryError: when no candidate substring parses.
    """

    if not raw_output or not raw_output.strip():
        raise JSONRecoveryError("Model returned empty output")

    first: Any = None
    found = False
    for value in _iter_parsed(raw_output):
        if expect is None or isinstance(value, expect):
            return value
        if not found:
            first, found = value, True

    if found:
        return first
    raise JSONRecoveryError(f"No JSON value found in model output: {raw_output[:200]!r}")


def _coerce(value: Any, expect: ExpectedType, collection_keys: Sequence[str]) -> Any:
    if expect is None or isinstance(value, expect):
        return value
    if expect is list and isinstance(value, dict):
        for key in collection_keys:
            if isinstance(value.get(key), list):
                return value[key]
        lists = [item for item in value.values() if isinstance(item, list)]
        if len(lists) == 1:
            return lists[0]
    raise JSONRecoveryError(
        f"Expected JSON {expect.__name__}, got {type(value).__name__}"
    )


def parse_json_or_default(
    raw_output: Optional[str],
    default: Any,
    *,
    expect: ExpectedType = None,
    collection_keys: Sequence[str] = (),
) -> Any:
    """Return the recovered JSON value, or ``default`` itself on any failure.

    A list is also recovered from an object wrapping it (``{"hotels": [...]}``)
    when ``expect`` is ``list``; ``collection_keys`` names the preferred keys.
    """

    try:
        value = extract_json(raw_output or "", expect=expect)
        return _coerce(value, expect, collection_keys)
    except JSONRecoveryError as exc:
        logger.warning("Falling back to default payload: %s", exc)
        logger.debug("Unparseable model output: %r", raw_output)
        return default


def clean_llm_text(raw_output: str) -> str:
    """Sanitise model output for callers that parse it themselves.

    Fences and control characters are removed; when the text contains a
    well-formed JSON value only that value is returned, otherwise the cleaned
    text is returned as-is (plain-text answers survive).
    """

    cleaned = strip_control_characters(strip_code_fences(raw_output))
    for segment in iter_balanced_json(cleaned):
        try:
            json.loads(segment)
        except json.JSONDecodeError:
            continue
        return segment
    return cleaned.strip()
