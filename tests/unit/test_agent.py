"""Unit tests for ChatConfig and ChatSessionHandle.

Tests configuration validation, session creation and fragment streaming.
"""

from collections.abc import AsyncIterator
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
import pytest_check as check
from agno.run.agent import RunEvent
from pydantic import ValidationError

from gemini_chat.agent.chat_agent import Fragment, GenerationError, start_chat
from gemini_chat.agent.config import ChatConfig, DisplayConfig, get_chat_config


class TestChatConfig:
    """Tests for ChatConfig validation."""

    def test_config_with_default_values(self) -> None:
        """Sampling defaults are fixed when only an API key is provided."""
        config = ChatConfig(api_key="test-key", model_name="gemini-2.5-flash")

        check.equal(config.temperature, 0.9)
        check.equal(config.top_k, 1)
        check.equal(config.top_p, 1.0)
        check.equal(config.max_output_tokens, 2048)

    def test_config_fails_with_missing_api_key(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ChatConfig(api_key="")

        assert "API key required" in str(exc_info.value)

    def test_config_fails_with_whitespace_api_key(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ChatConfig(api_key="   ")

        assert "API key required" in str(exc_info.value)

    def test_config_strips_api_key_whitespace(self) -> None:
        config = ChatConfig(api_key="  test-key  ")

        assert config.api_key == "test-key"

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("temperature", -0.1),
            ("temperature", 2.5),
            ("top_k", 0),
            ("top_p", 1.5),
            ("max_output_tokens", 0),
        ],
    )
    def test_config_rejects_out_of_range_sampling(self, field: str, value: float) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ChatConfig(api_key="test-key", **{field: value})

        assert field in str(exc_info.value)

    def test_get_config_reads_gemini_key_from_environment(self) -> None:
        env = {"GEMINI_API_KEY": "env-key", "GEMINI_MODEL": "gemini-2.5-pro"}
        with patch.dict("os.environ", env):
            config = get_chat_config()

        check.equal(config.api_key, "env-key")
        check.equal(config.model_name, "gemini-2.5-pro")

    def test_get_config_falls_back_to_google_key(self) -> None:
        with patch.dict("os.environ", {"GEMINI_API_KEY": "", "GOOGLE_API_KEY": "google-key"}):
            config = get_chat_config()

        assert config.api_key == "google-key"

    def test_get_config_fails_without_any_key(self) -> None:
        with (
            patch.dict("os.environ", {"GEMINI_API_KEY": "", "GOOGLE_API_KEY": ""}),
            pytest.raises(ValidationError),
        ):
            get_chat_config()

    def test_display_defaults(self) -> None:
        display = DisplayConfig()

        check.equal(display.error_message, "Sorry, there was an error processing your request.")
        check.equal(display.placeholder_text, "Thinking...")
        check.equal(display.typing_text, "Typing...")


def run_events(*events: SimpleNamespace) -> AsyncIterator[SimpleNamespace]:
    async def stream() -> AsyncIterator[SimpleNamespace]:
        for event in events:
            yield event

    return stream()


class TestChatSessionHandle:
    """Tests for session creation and fragment streaming."""

    @pytest.fixture
    def config(self) -> ChatConfig:
        return ChatConfig(api_key="test-key", model_name="gemini-2.5-flash")

    @patch("gemini_chat.agent.chat_agent.InMemoryDb")
    @patch("gemini_chat.agent.chat_agent.Gemini")
    @patch("gemini_chat.agent.chat_agent.Agent")
    def test_start_chat_passes_sampling_config(
        self,
        mock_agent_class: MagicMock,
        mock_gemini: MagicMock,
        mock_db: MagicMock,
        config: ChatConfig,
    ) -> None:
        handle = start_chat(config)

        mock_gemini.assert_called_once_with(
            id="gemini-2.5-flash",
            api_key="test-key",
            temperature=0.9,
            top_k=1,
            top_p=1.0,
            max_output_tokens=2048,
        )
        call_kwargs = mock_agent_class.call_args.kwargs
        check.is_true(call_kwargs["add_history_to_context"])
        check.is_true(call_kwargs["markdown"])
        check.equal(call_kwargs["db"], mock_db.return_value)
        check.equal(len(handle.session_id), 36)

    @patch("gemini_chat.agent.chat_agent.InMemoryDb")
    @patch("gemini_chat.agent.chat_agent.Gemini")
    @patch("gemini_chat.agent.chat_agent.Agent")
    def test_each_chat_gets_its_own_session_id(
        self,
        mock_agent_class: MagicMock,
        mock_gemini: MagicMock,
        mock_db: MagicMock,
        config: ChatConfig,
    ) -> None:
        assert start_chat(config).session_id != start_chat(config).session_id

    @patch("gemini_chat.agent.chat_agent.InMemoryDb")
    @patch("gemini_chat.agent.chat_agent.Gemini")
    @patch("gemini_chat.agent.chat_agent.Agent")
    async def test_stream_yields_content_events_only(
        self,
        mock_agent_class: MagicMock,
        mock_gemini: MagicMock,
        mock_db: MagicMock,
        config: ChatConfig,
    ) -> None:
        mock_agent_class.return_value.arun.return_value = run_events(
            SimpleNamespace(event=RunEvent.run_started, content=None),
            SimpleNamespace(event=RunEvent.run_content, content="Hi"),
            SimpleNamespace(event=RunEvent.run_content, content=""),
            SimpleNamespace(event=RunEvent.run_content, content=" there"),
            SimpleNamespace(event=RunEvent.run_completed, content="Hi there"),
        )
        handle = start_chat(config)

        fragments = [f async for f in handle.send_message_stream("Hello")]

        check.equal(fragments, [Fragment(text="Hi"), Fragment(text=" there")])
        mock_agent_class.return_value.arun.assert_called_once_with(
            "Hello", session_id=handle.session_id, stream=True
        )

    @patch("gemini_chat.agent.chat_agent.InMemoryDb")
    @patch("gemini_chat.agent.chat_agent.Gemini")
    @patch("gemini_chat.agent.chat_agent.Agent")
    async def test_stream_raises_on_run_error(
        self,
        mock_agent_class: MagicMock,
        mock_gemini: MagicMock,
        mock_db: MagicMock,
        config: ChatConfig,
    ) -> None:
        mock_agent_class.return_value.arun.return_value = run_events(
            SimpleNamespace(event=RunEvent.run_content, content="par"),
            SimpleNamespace(event=RunEvent.run_error, content="quota exceeded"),
        )
        handle = start_chat(config)

        received: list[Fragment] = []
        with pytest.raises(GenerationError, match="quota exceeded"):
            async for fragment in handle.send_message_stream("Hello"):
                received.append(fragment)

        assert received == [Fragment(text="par")]
