from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    """Author of a transcript message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single message in the conversation transcript.

    Messages are immutable. An in-progress assistant reply is updated by
    replacing the whole message, never by mutating it.

    Attributes:
        text: The message text (raw markdown for assistant replies).
        sender: Who wrote the message.
        is_generating: Whether the reply is still streaming in.
    """

    model_config = ConfigDict(frozen=True)

    text: str = ""
    sender: Sender
    is_generating: bool = False

    @classmethod
    def user(cls, text: str) -> "Message":
        """Build a final message typed by the user."""
        return cls(text=text, sender=Sender.USER)

    @classmethod
    def assistant(cls, text: str, *, is_generating: bool) -> "Message":
        """Build an assistant reply, streaming or final."""
        return cls(text=text, sender=Sender.ASSISTANT, is_generating=is_generating)


class Append(BaseModel):
    """Store operation that adds a message to the end of the transcript."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["append"] = "append"
    message: Message


class ReplaceLast(BaseModel):
    """Store operation that substitutes the in-progress final message."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["replace_last"] = "replace_last"
    message: Message


StoreOp = Annotated[Append | ReplaceLast, Field(discriminator="kind")]
