"""Grant Message — tests for Provided | Default classification and resolution.

Tests cover:
    - None, empty and whitespace-only input resolve to the default
    - provided text is kept verbatim
    - 500 characters accepted, 501 rejected (never truncated)
"""

import pytest

from noodles.core.errors import MessageTooLongError
from noodles.core.grant_message import (
    DEFAULT_MESSAGE,
    DefaultMessage,
    ProvidedMessage,
    message_from_input,
    resolve_message,
)


@pytest.mark.parametrize("raw", [None, "", "   ", "\n\t"])
def test_missing_message_is_default(raw):
    assert message_from_input(raw) == DefaultMessage()


def test_provided_message_is_kept():
    assert message_from_input("Great work") == ProvidedMessage("Great work")


def test_default_resolves_to_placeholder():
    assert resolve_message(DefaultMessage()) == DEFAULT_MESSAGE == "For being awesome!"


def test_custom_default_placeholder():
    assert resolve_message(DefaultMessage(), default="Thanks!") == "Thanks!"


def test_exactly_max_length_accepted():
    text = "x" * 500
    assert resolve_message(ProvidedMessage(text)) == text


def test_over_max_length_rejected():
    with pytest.raises(MessageTooLongError) as exc:
        resolve_message(ProvidedMessage("x" * 501))
    assert exc.value.code == "MESSAGE_TOO_LONG"
    assert exc.value.length == 501
    assert exc.value.max_length == 500


def test_default_never_length_checked():
    assert resolve_message(DefaultMessage(), default="y" * 600, max_length=500) == "y" * 600
