"""Names that cannot be used for scaffolded items."""

from __future__ import annotations

import re

from .errors import InvalidReservedWordError

RESERVED_WORDS = (
    "type",
    "role",
    "enum",
    "pub",
    "fn",
    "mod",
    "struct",
    "const",
    "Option",
    "Result",
    "crate",
    "hdi",
    "hdk",
    "return",
    "if",
    "else",
    "match",
    "Action",
    "Entry",
    "Record",
    "Zome",
    "Dna",
    "EntryType",
    "EntryHash",
    "ActionHash",
    "AgentPubKey",
    "Call",
)

_BOUNDARIES = (
    (re.compile(r"([a-z])([A-Z])"), r"\1 \2"),
    (re.compile(r"([A-Z])([A-Z][a-z])"), r"\1 \2"),
    (re.compile(r"([A-Za-z])(\d)"), r"\1 \2"),
    (re.compile(r"(\d)([A-Za-z])"), r"\1 \2"),
)
_SEPARATORS = re.compile(r"[\s_\-]+")


def _lower_case(text: str) -> str:
    """Split ``text`` into words and join them lower-cased with spaces."""
    for pattern, replacement in _BOUNDARIES:
        text = pattern.sub(replacement, text)
    return " ".join(w.lower() for w in _SEPARATORS.split(text) if w)


_RESERVED_LOWER = tuple((_lower_case(w), w) for w in RESERVED_WORDS)


def check_for_reserved_words(word: str) -> None:
    """Raise InvalidReservedWordError if ``word`` matches a reserved word in any case."""
    lowered = _lower_case(word)
    for reserved_lower, reserved in _RESERVED_LOWER:
        if lowered == reserved_lower:
            raise InvalidReservedWordError(reserved)