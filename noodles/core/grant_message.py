"""Grant Message — explicit Provided | Default message type and its resolution.

Invariants:
    - A message is resolved exactly once, at the recorder boundary
    - Resolved text is never longer than the configured maximum (rejected, not truncated)
    - None, empty and whitespace-only input all mean DefaultMessage

Design Decisions:
    - Sum type instead of truthiness checks scattered through the shell
"""

from dataclasses import dataclass
from typing import Union

from noodles.core.domain_types import ActorId, GroupId
from noodles.core.errors import ErrorContext, MessageTooLongError

DEFAULT_MESSAGE: str = "For being awesome!"
MAX_MESSAGE_LENGTH: int = 500


@dataclass(frozen=True)
class ProvidedMessage:
    text: str


@dataclass(frozen=True)
class DefaultMessage:
    pass


GrantMessage = Union[ProvidedMessage, DefaultMessage]


def message_from_input(raw: str | None) -> GrantMessage:
    """Classify raw user input as provided or default."""
    if raw is None or not raw.strip():
        return DefaultMessage()
    return ProvidedMessage(raw)


def resolve_message(
    message: GrantMessage,
    default: str = DEFAULT_MESSAGE,
    max_length: int = MAX_MESSAGE_LENGTH,
    context: ErrorContext | None = None,
) -> str:
    """Concrete text to persist. Raises MessageTooLongError over the limit."""
    if isinstance(message, DefaultMessage):
        return default
    if len(message.text) > max_length:
        raise MessageTooLongError(len(message.text), max_length, context)
    return message.text


@dataclass(frozen=True)
class GrantDraft:
    """Everything needed to record a grant except store-assigned fields."""
    sender_id: ActorId
    recipient_id: ActorId
    sender_display_name: str
    recipient_display_name: str
    sender_username: str
    recipient_username: str
    group_id: GroupId
    channel_id: str | None = None
    group_name: str | None = None
    message: GrantMessage = DefaultMessage()


def draft_fields(draft: GrantDraft, message_text: str) -> dict:
    """Flat field mapping handed to LedgerStore.insert."""
    return {
        "sender_id": draft.sender_id,
        "recipient_id": draft.recipient_id,
        "sender_display_name": draft.sender_display_name,
        "recipient_display_name": draft.recipient_display_name,
        "sender_username": draft.sender_username,
        "recipient_username": draft.recipient_username,
        "group_id": draft.group_id,
        "group_name": draft.group_name,
        "channel_id": draft.channel_id,
        "message": message_text,
    }
