"""
Batch file parsing.

Two grammars are accepted, tried in order:
  - strict: a JSON array of [message, signature, signer] arrays
  - loose: free text with bracketed, comma separated triplets, e.g.
        [hello, 0xdead..., 5Grw...]  junk  [other, msg, here]
"""
import json
import re

from sigverify.errors import BatchFormatError
from sigverify.log_helper import get_logger

log = get_logger("batch_parser")

Triplet = tuple[str, str, str]

# Innermost bracket groups only: no nested brackets inside
_GROUP_RE = re.compile(r"\[([^\[\]]*)\]")


def _scalar_text(value) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _is_scalar(value) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def parse_strict(content: str) -> list[Triplet] | None:
    """
    Parse content as a JSON array of 3-element scalar arrays.

    Returns:
        The triplets, or None if the content is not JSON or has another shape
    """
    try:
        data = json.loads(content)
    except (ValueError, RecursionError):
        return None

    if not isinstance(data, list):
        return None

    triplets = []
    for item in data:
        if not isinstance(item, list) or len(item) != 3:
            return None
        if not all(_is_scalar(v) for v in item):
            return None
        triplets.append(tuple(_scalar_text(v) for v in item))
    return triplets


def parse_loose(content: str) -> list[Triplet]:
    """
    Extract bracketed triplets from free text.

    Groups that do not split into exactly three non-empty parts are skipped.

    Raises:
        BatchFormatError: if no group was accepted
    """
    triplets = []
    for match in _GROUP_RE.finditer(content):
        parts = [p.strip() for p in match.group(1).split(",")]
        parts = [p for p in parts if p]
        if len(parts) != 3:
            log.debug("Skipping bracket group at offset %d with %d parts", match.start(), len(parts))
            continue
        triplets.append((parts[0], parts[1], parts[2]))

    if not triplets:
        raise BatchFormatError("No [message, signature, signer] entries found in batch content")
    return triplets


def parse(content: str) -> list[Triplet]:
    """
    Parse batch content, strict JSON first, then the loose bracket grammar.

    Args:
        content: Raw batch file text

    Returns:
        Triplets in order of appearance; list position is the item index

    Raises:
        BatchFormatError: if neither grammar matched
    """
    # Editors on Windows prepend a byte order mark
    content = content.removeprefix("\ufeff")

    triplets = parse_strict(content)
    if triplets is not None:
        log.debug("Parsed %d entries as JSON", len(triplets))
        return triplets

    triplets = parse_loose(content)
    log.debug("Parsed %d entries with the bracket grammar", len(triplets))
    return triplets
