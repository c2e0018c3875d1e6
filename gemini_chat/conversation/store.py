"""Ordered conversation transcript.

The store is append-only with one exception: while the last message is
still generating it may be replaced as a whole. Every mutation builds the
new sequence first and publishes it with a single assignment, so readers
never see a half-built transcript.
"""

import logging
from collections.abc import Callable

from gemini_chat.models.schemas import Append, Message, ReplaceLast, StoreOp

logger = logging.getLogger(__name__)

Listener = Callable[[tuple[Message, ...]], None]


class StoreInvariantError(Exception):
    """Raised when an operation would break the transcript ordering rules."""

    pass


class ConversationStore:
    """Transcript of one chat page."""

    def __init__(self) -> None:
        self._messages: tuple[Message, ...] = ()
        self._listeners: list[Listener] = []

    @property
    def messages(self) -> tuple[Message, ...]:
        """Current snapshot, oldest first."""
        return self._messages

    @property
    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def __len__(self) -> int:
        return len(self._messages)

    def append(self, message: Message) -> None:
        self.apply(Append(message=message))

    def replace_last(self, message: Message) -> None:
        self.apply(ReplaceLast(message=message))

    def apply(self, op: StoreOp) -> None:
        """Apply one store operation and notify listeners.

        Args:
            op: Append or ReplaceLast.

        Raises:
            StoreInvariantError: If appending after a generating message,
                or replacing a message that is already final.
        """
        last = self.last
        if isinstance(op, Append):
            if last is not None and last.is_generating:
                raise StoreInvariantError("Cannot append while the last message is generating")
            updated = (*self._messages, op.message)
        elif isinstance(op, ReplaceLast):
            if last is None or not last.is_generating:
                raise StoreInvariantError("Only a generating message can be replaced")
            updated = (*self._messages[:-1], op.message)
        else:
            raise TypeError(f"Unknown store operation: {op!r}")

        self._messages = updated
        self._notify()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback invoked with the new snapshot after each mutation.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear_listeners(self) -> None:
        self._listeners.clear()

    def _notify(self) -> None:
        snapshot = self._messages
        for listener in list(self._listeners):
            listener(snapshot)
