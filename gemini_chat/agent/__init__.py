"""Agno agent logic for the Gemini chat session.

Responsibilities:
    - Chat configuration loaded from the environment
    - Gemini session creation with fixed sampling settings
    - Conversation history kept for one page lifetime
    - Streaming reply fragments to the reconciler

Leverages the Agno framework for the model session.
Maintains clean separation from the UI layer.
"""

from gemini_chat.agent.chat_agent import (
    ChatSessionHandle,
    Fragment,
    GenerationError,
    start_chat,
)
from gemini_chat.agent.config import ChatConfig, DisplayConfig, get_chat_config

__all__ = [
    "ChatConfig",
    "ChatSessionHandle",
    "DisplayConfig",
    "Fragment",
    "GenerationError",
    "get_chat_config",
    "start_chat",
]
