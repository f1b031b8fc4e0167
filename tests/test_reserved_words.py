import pytest

from happscaffold.errors import InvalidReservedWordError
from happscaffold.reserved_words import check_for_reserved_words


def _rejected(words):
    rejected = []
    for word in words:
        try:
            check_for_reserved_words(word)
        except InvalidReservedWordError:
            rejected.append(word)
    return rejected


@pytest.mark.parametrize(
    "word, reserved",
    [
        ("type", "type"),
        ("Type", "type"),
        ("TYPE", "type"),
        ("entry_hash", "EntryHash"),
        ("entryHash", "EntryHash"),
        ("agent_pub_key", "AgentPubKey"),
        ("action-hash", "ActionHash"),
        ("record", "Record"),
    ],
)
def test_reserved_words_rejected(word, reserved):
    with pytest.raises(InvalidReservedWordError) as exc:
        check_for_reserved_words(word)
    assert exc.value.word == reserved


def test_only_exact_matches_are_rejected():
    words = ["post", "type", "my_type", "typed", "entries", "entry_hash", "comment"]
    assert _rejected(words) == ["type", "entry_hash"]


def test_error_message_names_the_word():
    with pytest.raises(InvalidReservedWordError) as exc:
        check_for_reserved_words("Zome")
    assert str(exc.value) == "Invalid reserved word: Zome"