"""Pydantic models for the conversation transcript.

Provides type safety and validation for everything the store holds.

Models:
    - Sender: Who wrote a message (user or assistant)
    - Message: One entry in the transcript
    - Append / ReplaceLast: Tagged store operations
"""

from gemini_chat.models.schemas import Append, Message, ReplaceLast, Sender, StoreOp

__all__ = ["Append", "Message", "ReplaceLast", "Sender", "StoreOp"]
