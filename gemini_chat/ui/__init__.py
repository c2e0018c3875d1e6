"""NiceGUI interface - thin visualization layer for the chat transcript.

Responsibilities:
    - Chat message display with streaming updates
    - Markdown rendering with highlighted code blocks
    - Typing indicator and auto-scroll to the newest message

Contains no conversation logic. Delegates all state changes to ChatContext.
"""
