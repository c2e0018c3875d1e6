"""Conversation state for one chat page.

Responsibilities:
    - Ordered transcript with a single replaceable in-progress reply
    - Folding streamed fragments into that reply in arrival order
    - Typing indicator and session handle lifecycle per page

Pure Python with no UI dependencies, so it can be driven from tests.
"""

from gemini_chat.conversation.context import ChatContext
from gemini_chat.conversation.reconciler import reconcile
from gemini_chat.conversation.store import ConversationStore, StoreInvariantError

__all__ = ["ChatContext", "ConversationStore", "StoreInvariantError", "reconcile"]
