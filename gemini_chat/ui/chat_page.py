"""NiceGUI chat page with streamed Gemini replies."""

import logging
from collections.abc import Callable

from nicegui import Client, ui

from gemini_chat.conversation.context import ChatContext
from gemini_chat.models.schemas import Sender
from gemini_chat.ui.render import RenderedMessage, render_message, render_transcript

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f3f4f6; min-height: 100vh; }

    .header { background: #2563eb; }

    .message-user {
        background: #3b82f6;
        color: white;
        border-radius: 12px;
    }

    .message-assistant {
        background: #f0f0f0;
        color: #333;
        border-radius: 12px;
    }

    .typing-bubble { background: #d1d5db; border-radius: 12px; }

    @keyframes typing {
        0% { opacity: 0.3; }
        50% { opacity: 1; }
        100% { opacity: 0.3; }
    }
    .typing-animation { animation: typing 1.5s infinite; }

    /* Markdown styling */
    .prose { max-width: 65ch; font-size: 1rem; line-height: 1.75; }
    .prose code {
        background-color: #2d2d2d;
        color: #e0e0e0;
        padding: 0.2em 0.4em;
        border-radius: 3px;
        font-size: 0.85em;
        font-family: 'Menlo', 'Monaco', monospace;
    }
    .prose pre {
        background-color: #2d2d2d;
        color: #e0e0e0;
        border-radius: 0.3em;
        padding: 1em;
        overflow-x: auto;
    }
    .prose pre code { background-color: transparent; padding: 0; border-radius: 0; color: inherit; }
    .prose .highlight { border-radius: 0.3em; margin: 0.5rem 0; }
    .prose ul { list-style: disc; padding-left: 1.5rem; }
    .prose ol { list-style: decimal; padding-left: 1.5rem; }
    .prose a { color: #4f46e5; text-decoration: underline; }
</style>
"""


def attach_teardown(client: Client, context: ChatContext, unsubscribe: Callable[[], None]) -> None:
    """Close the context once NiceGUI deletes the client.

    Disconnects that end in a reconnect keep the page and its state alive,
    so teardown waits for deletion rather than the first dropped socket.
    """

    def teardown() -> None:
        unsubscribe()
        context.close()

    client.on_delete(teardown)


@ui.page("/")
def chat_page() -> None:
    """Main chat page. Each browser tab gets its own ChatContext."""
    ui.add_head_html(CUSTOM_CSS)
    context = ChatContext()
    rendered_count = 0

    scroll_area: ui.scroll_area
    messages_container: ui.column
    typing_row: ui.row
    last_bubble: ui.html | None = None
    input_field: ui.input

    def bubble_classes(msg: RenderedMessage) -> str:
        if msg.sender == Sender.USER:
            return "px-3 py-2 message-user"
        animation = " typing-animation" if msg.is_generating else ""
        return f"px-3 py-2 message-assistant prose{animation}"

    def render_bubble(msg: RenderedMessage) -> ui.html:
        is_user = msg.sender == Sender.USER
        align = "justify-end" if is_user else "justify-start"
        with ui.row().classes(f"w-full {align}"), ui.element("div").classes("max-w-[80%]"):
            return ui.html(msg.html, sanitize=False).classes(bubble_classes(msg))

    def refresh_messages() -> None:
        nonlocal rendered_count, last_bubble
        messages_container.clear()
        last_bubble = None
        with messages_container:
            for msg in render_transcript(context.store.messages, context.display):
                last_bubble = render_bubble(msg)
        rendered_count = len(context.store)

    def update_last() -> None:
        """Re-render only the final bubble while a reply streams in."""
        last = context.store.last
        if last is None or last_bubble is None:
            return
        msg = render_message(last, context.display)
        last_bubble.set_content(msg.html)
        last_bubble.classes(replace=bubble_classes(msg))

    def on_change() -> None:
        if len(context.store) == rendered_count:
            update_last()
        else:
            refresh_messages()
        typing_row.set_visibility(context.is_typing)
        scroll_area.scroll_to(percent=1.0)

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or context.in_flight:
            return
        input_field.value = ""
        await context.submit(text)

    attach_teardown(ui.context.client, context, context.subscribe(on_change))

    # === UI Layout ===
    with ui.column().classes("w-full h-screen gap-0").style("height: 100vh"):
        # Header
        with ui.row().classes("w-full header p-4 items-center"):
            ui.label("Gemini Chat").classes("text-2xl font-bold text-white")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full") as scroll_area,
            ui.column().classes("w-full p-4 gap-4"),
        ):
            messages_container = ui.column().classes("w-full gap-4")
            with ui.row().classes("w-full justify-start") as typing_row:
                ui.label(context.display.typing_text).classes("p-2 typing-bubble")
            typing_row.set_visibility(False)
            refresh_messages()

        # Input
        with ui.row().classes("w-full p-4 gap-0 items-center bg-white no-wrap"):
            input_field = (
                ui.input(placeholder="Type a message...")
                .props("outlined dense")
                .classes("flex-grow")
                .on("keydown.enter", send_message)
            )
            ui.button(icon="send", on_click=send_message).props("unelevated color=primary")

    try:
        context.ensure_session()
    except Exception as e:
        # Retried on first submission, where the failure reaches the transcript
        logger.warning(f"Could not create chat session: {e}")
