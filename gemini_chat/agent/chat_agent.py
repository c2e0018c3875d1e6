"""Gemini chat session built on Agno.

Each chat page owns one ChatSessionHandle. The handle wraps an Agno Agent
with a Gemini model and an in-memory session database, so multi-turn
history is kept for the lifetime of the page and dropped with it.

The handle exposes a single streaming call that yields plain-text
fragments. Agno run events other than content are filtered out here, so
the reconciler only ever sees text.
"""

import logging
import uuid
from collections.abc import AsyncIterator

from agno.agent import Agent
from agno.db.in_memory import InMemoryDb
from agno.models.google import Gemini
from agno.run.agent import RunEvent
from pydantic import BaseModel, ConfigDict

from gemini_chat.agent.config import ChatConfig

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Raised when the upstream model reports a failed run."""

    pass


class Fragment(BaseModel):
    """One incremental unit of generated text."""

    model_config = ConfigDict(frozen=True)

    text: str


class ChatSessionHandle:
    """Stateful conversation with the Gemini API.

    Wraps Agno's Agent with:
    - In-memory session storage so follow-up prompts carry history
    - Sampling settings fixed at creation time
    - A fragment stream that raises instead of embedding errors in text
    """

    def __init__(self, config: ChatConfig) -> None:
        """Initialize the session handle.

        Args:
            config: Validated chat configuration.
        """
        self._config = config
        self.session_id: str = str(uuid.uuid4())
        self._agent = self._create_agent()

    def _create_agent(self) -> Agent:
        """Create the Agno agent instance.

        Returns:
            Configured Agent with Gemini model and in-memory history.
        """
        model = Gemini(
            id=self._config.model_name,
            api_key=self._config.api_key,
            temperature=self._config.temperature,
            top_k=self._config.top_k,
            top_p=self._config.top_p,
            max_output_tokens=self._config.max_output_tokens,
        )

        return Agent(
            model=model,
            db=InMemoryDb(),
            # Keep the whole page conversation in context
            add_history_to_context=True,
            # Output as markdown for rich formatting in UI
            markdown=True,
        )

    async def send_message_stream(self, text: str) -> AsyncIterator[Fragment]:
        """Stream the reply to one prompt.

        Args:
            text: The user's message, sent as typed.

        Yields:
            Fragments in arrival order. Empty content events are skipped.

        Raises:
            GenerationError: If the run reports an error event.
        """
        response_stream = self._agent.arun(
            text,
            session_id=self.session_id,
            stream=True,
        )

        async for chunk in response_stream:
            event = getattr(chunk, "event", None)
            if event == RunEvent.run_error:
                raise GenerationError(getattr(chunk, "content", None) or "Run failed")
            if event != RunEvent.run_content:
                continue
            content = getattr(chunk, "content", None)
            if isinstance(content, str) and content:
                yield Fragment(text=content)


def start_chat(config: ChatConfig) -> ChatSessionHandle:
    """Open a new conversation with the configured model.

    Args:
        config: Validated chat configuration.

    Returns:
        A fresh ChatSessionHandle with empty history.
    """
    handle = ChatSessionHandle(config)
    logger.info(f"Started chat session {handle.session_id[:8]} with {config.model_name}")
    return handle
