"""Gemini Chat - streaming chat interface for Google Gemini.

Combines NiceGUI for the page, Agno for the Gemini session,
and Pydantic for data validation.

Components:
    - agent: Gemini session creation and fragment streaming
    - conversation: Transcript store, stream reconciler, page-scoped context
    - models: Message and store operation schemas
    - ui: Markdown rendering and the chat page
"""

__version__ = "0.1.0"
