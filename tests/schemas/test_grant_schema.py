"""GrantCreate schema — boundary validation and draft conversion."""

import pytest
from pydantic import ValidationError

from noodles.core.grant_message import DefaultMessage, ProvidedMessage
from noodles.schemas.grant import GrantCreate


def _create(**overrides) -> GrantCreate:
    data = {
        "sender_id": " s1 ",
        "sender_username": "sam",
        "recipient_id": "r1",
        "recipient_username": "rita",
    }
    data.update(overrides)
    return GrantCreate(**data)


def test_ids_are_stripped():
    assert _create().sender_id == "s1"


def test_whitespace_id_rejected():
    with pytest.raises(ValidationError):
        _create(recipient_id="  ")


def test_eligible_by_default():
    assert _create().recipient_is_eligible is True


def test_long_message_not_rejected_at_boundary():
    # length is enforced by the ledger so every caller sees MESSAGE_TOO_LONG
    assert len(_create(message="x" * 900).message) == 900


def test_to_draft_resolves_names_and_message():
    draft = _create(message=None).to_draft("G")
    assert draft.group_id == "G"
    assert draft.sender_display_name == "sam"
    assert draft.recipient_display_name == "rita"
    assert draft.message == DefaultMessage()


def test_to_draft_keeps_provided_message():
    draft = _create(message="Great work", sender_display_name="Sam").to_draft("G")
    assert draft.message == ProvidedMessage("Great work")
    assert draft.sender_display_name == "Sam"
