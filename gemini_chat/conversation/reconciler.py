"""Fold a streamed reply into the conversation store."""

import logging
from collections.abc import AsyncIterable

from gemini_chat.agent.chat_agent import Fragment
from gemini_chat.conversation.store import ConversationStore
from gemini_chat.models.schemas import Message

logger = logging.getLogger(__name__)


async def reconcile(store: ConversationStore, fragments: AsyncIterable[Fragment]) -> str:
    """Apply fragments to the generating message at the end of the store.

    Each fragment replaces the last message with the running concatenation,
    so the displayed text only ever grows. Exhaustion finalizes the message.
    Errors from the stream propagate unchanged and leave the message
    generating for the caller to terminate.

    Args:
        store: Store whose last message is the generating placeholder.
        fragments: Reply fragments in arrival order.

    Returns:
        The complete reply text.
    """
    accumulated = ""
    count = 0

    async for fragment in fragments:
        accumulated += fragment.text
        count += 1
        store.replace_last(Message.assistant(accumulated, is_generating=True))
        logger.debug(f"Applied fragment {count} ({len(fragment.text)} chars)")

    store.replace_last(Message.assistant(accumulated, is_generating=False))
    logger.info(f"Reply complete: {count} fragments, {len(accumulated)} chars")
    return accumulated
