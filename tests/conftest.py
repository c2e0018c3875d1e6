"""Pytest fixtures and shared test configuration.

Fixtures:
    - display: Default display texts
    - store: Empty conversation store
    - fake_session: Factory for scripted upstream sessions
    - make_context: ChatContext wired to a scripted session
"""

from collections.abc import AsyncIterator, Callable

import pytest

from gemini_chat.agent.chat_agent import Fragment
from gemini_chat.agent.config import DisplayConfig
from gemini_chat.conversation.context import ChatContext
from gemini_chat.conversation.store import ConversationStore

Reply = list[str | Exception] | Exception


class FakeSession:
    """Stands in for ChatSessionHandle with one scripted reply per prompt.

    A reply is either an exception raised when the stream opens, or a list
    of fragment texts where an exception entry is raised at that point.
    """

    def __init__(self, replies: list[Reply]) -> None:
        self._replies = list(replies)
        self.prompts: list[str] = []

    async def send_message_stream(self, text: str) -> AsyncIterator[Fragment]:
        self.prompts.append(text)
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        for piece in reply:
            if isinstance(piece, Exception):
                raise piece
            yield Fragment(text=piece)


@pytest.fixture
def display() -> DisplayConfig:
    return DisplayConfig()


@pytest.fixture
def store() -> ConversationStore:
    return ConversationStore()


@pytest.fixture
def fake_session() -> Callable[..., FakeSession]:
    """Return a builder for scripted sessions."""

    def build(*replies: Reply) -> FakeSession:
        return FakeSession(list(replies))

    return build


@pytest.fixture
def make_context(display: DisplayConfig) -> Callable[[FakeSession], ChatContext]:
    """Return a builder for contexts backed by a given scripted session.

    The factory counts how often a session was requested from it.
    """

    def build(session: FakeSession) -> ChatContext:
        calls = {"count": 0}

        def factory() -> FakeSession:
            calls["count"] += 1
            return session

        context = ChatContext(session_factory=factory, display=display)
        context.factory_calls = calls
        return context

    return build
