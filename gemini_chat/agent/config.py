"""Chat configuration with environment variable loading.

Pydantic-based configuration for the Gemini chat session and the
fixed texts shown in the transcript.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


def _api_key_from_env() -> str:
    return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY", "")


class DisplayConfig(BaseModel):
    """Fixed user-visible texts for the chat transcript.

    Kept apart from ChatConfig so the page can render without credentials.

    Attributes:
        error_message: Replaces a reply whose generation failed.
        placeholder_text: Shown in an assistant bubble that has no text yet.
        typing_text: Shown in the typing indicator while a reply streams.
    """

    error_message: str = Field(
        default="Sorry, there was an error processing your request.",
        min_length=1,
    )
    placeholder_text: str = Field(default="Thinking...", min_length=1)
    typing_text: str = Field(default="Typing...", min_length=1)


class ChatConfig(BaseModel):
    """Configuration for the Gemini chat session.

    The sampling settings are passed once, when the session is created,
    and are not exposed to the end user.

    Attributes:
        api_key: Gemini API key.
        model_name: Gemini model identifier.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        top_k: Number of highest-probability tokens considered per step.
        top_p: Nucleus sampling probability mass.
        max_output_tokens: Maximum tokens in a generated reply.
    """

    api_key: str = Field(
        default_factory=_api_key_from_env,
        validate_default=True,
        description="API key for Gemini",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        description="Gemini model to use",
    )
    temperature: float = Field(
        default=0.9,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    top_k: int = Field(
        default=1,
        ge=1,
        description="Top-k sampling cutoff",
    )
    top_p: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Top-p (nucleus) sampling cutoff",
    )
    max_output_tokens: int = Field(
        default=2048,
        ge=1,
        le=65536,
        description="Maximum tokens in generated response",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set GEMINI_API_KEY or GOOGLE_API_KEY in .env"
            )
        return v.strip()


def get_chat_config() -> ChatConfig:
    """Create chat configuration from environment.

    Returns:
        Configured ChatConfig instance.

    Raises:
        ValidationError: If no API key is set.
    """
    return ChatConfig()
