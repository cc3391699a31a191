"""Grant Recorder — appends one admissible grant to the ledger.

Invariants:
    - Message resolved (default or length-checked) before anything is persisted
    - Exactly one record appended per successful call; none on failure
    - Does NOT re-check self/eligibility/quota — callers validate first
"""

from noodles.core.domain_types import GrantRecord
from noodles.core.enforce_grant import error_context
from noodles.core.grant_message import (
    DEFAULT_MESSAGE, MAX_MESSAGE_LENGTH, GrantDraft, draft_fields, resolve_message,
)
from noodles.core.repository_protocols import LedgerStore


class GrantRecorder:

    def __init__(
        self,
        store: LedgerStore,
        default_message: str = DEFAULT_MESSAGE,
        max_message_length: int = MAX_MESSAGE_LENGTH,
    ):
        self.store = store
        self.default_message = default_message
        self.max_message_length = max_message_length

    async def record_grant(self, draft: GrantDraft) -> GrantRecord:
        """Persist the grant and return it with store-assigned id and created_at."""
        text = resolve_message(
            draft.message,
            default=self.default_message,
            max_length=self.max_message_length,
            context=error_context(draft.sender_id, draft.recipient_id, draft.group_id),
        )
        return await self.store.insert(draft_fields(draft, text))
