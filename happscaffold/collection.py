"""Collections of entries."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from .errors import InvalidCollectionTypeError

_ALLOWED = "global, by-author"


class CollectionType(Enum):
    """Which entries a collection gathers."""

    GLOBAL = "global"
    BY_AUTHOR = "by-author"

    @classmethod
    def parse(cls, text: str) -> "CollectionType":
        """Parse "global" or "by-author"."""
        for member in cls:
            if member.value == text:
                return member
        raise InvalidCollectionTypeError(text, _ALLOWED)

    def __str__(self) -> str:
        return self.value


def _select(prompt: str, items: Sequence[str], default: int = 0) -> int:
    """Ask the user to pick one of ``items``; return its index."""
    print(prompt)
    for number, item in enumerate(items, start=1):
        marker = ">" if number - 1 == default else " "
        print(f"{marker} {number}. {item}")
    while True:
        answer = input(f"Choose [1-{len(items)}] (default {default + 1}): ").strip()
        if not answer:
            return default
        if answer.isdigit() and 1 <= int(answer) <= len(items):
            return int(answer) - 1
        print(f"Please enter a number between 1 and {len(items)}.")


def choose_collection_type() -> CollectionType:
    """Ask the user which type of collection to scaffold."""
    selection = _select(
        "Which type of collection should be scaffolded?",
        [
            "Global (get all entries of the selected entry types)",
            "By author (get entries of the selected entry types that a given author has created)",
        ],
    )
    return (CollectionType.GLOBAL, CollectionType.BY_AUTHOR)[selection]