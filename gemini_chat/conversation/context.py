"""Page-scoped chat state and the submission handler.

One ChatContext exists per open chat page. It owns the transcript, the
typing indicator flag and the upstream session handle, which is created
lazily and reused until the context is closed.
"""

import logging
from collections.abc import Callable

from gemini_chat.agent.chat_agent import ChatSessionHandle, start_chat
from gemini_chat.agent.config import DisplayConfig, get_chat_config
from gemini_chat.conversation.reconciler import reconcile
from gemini_chat.conversation.store import ConversationStore
from gemini_chat.models.schemas import Message

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], ChatSessionHandle]


def default_session_factory() -> ChatSessionHandle:
    """Create a session from environment configuration.

    Raises:
        ValidationError: If no API key is configured.
    """
    return start_chat(get_chat_config())


class ChatContext:
    """State for one chat page.

    Attributes:
        store: The conversation transcript.
        display: Fixed user-visible texts.
        is_typing: Whether a reply is currently streaming.
    """

    def __init__(
        self,
        session_factory: SessionFactory = default_session_factory,
        display: DisplayConfig | None = None,
    ) -> None:
        self.store = ConversationStore()
        self.display = display or DisplayConfig()
        self.is_typing: bool = False
        self._session_factory = session_factory
        self._session: ChatSessionHandle | None = None
        self._in_flight = False
        self._listeners: list[Callable[[], None]] = []
        self.store.subscribe(lambda _messages: self._notify())

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def has_session(self) -> bool:
        return self._session is not None

    def ensure_session(self) -> ChatSessionHandle:
        """Return the session handle, creating it on first use."""
        if self._session is None:
            self._session = self._session_factory()
        return self._session

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a callback for any change to the transcript or typing flag.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def submit(self, text: str) -> bool:
        """Send one prompt and stream the reply into the transcript.

        Input that is empty after trimming is ignored. A submission made
        while another reply is still streaming is rejected. Any failure
        replaces the in-progress reply with the configured error message.

        Args:
            text: The prompt as typed; stored and sent untrimmed.

        Returns:
            True if the prompt was accepted, False if it was ignored.
        """
        if not text.strip():
            return False
        if self._in_flight:
            logger.warning("Submission rejected: a reply is still streaming")
            return False

        self._in_flight = True
        self.is_typing = True
        self.store.append(Message.user(text))
        self.store.append(Message.assistant("", is_generating=True))

        try:
            session = self.ensure_session()
            await reconcile(self.store, session.send_message_stream(text))
        except Exception:
            logger.exception("Generation failed")
            self.store.replace_last(
                Message.assistant(self.display.error_message, is_generating=False)
            )
        finally:
            self.is_typing = False
            self._in_flight = False
            self._notify()

        return True

    def close(self) -> None:
        """Detach listeners and drop the session handle.

        A reply still streaming is abandoned, not cancelled.
        """
        self._listeners.clear()
        self.store.clear_listeners()
        self._session = None
        logger.debug("Chat context closed")

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
