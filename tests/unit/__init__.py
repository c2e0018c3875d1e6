"""Unit tests for individual components in isolation.

Coverage:
    - conversation/: Store invariants and fragment reconciliation
    - ui/: Markdown rendering and the transcript render step
    - agent/: Configuration and session handle streaming

Uses mocks for Agno classes. Leverages pytest-check for multiple
assertions per test.
"""
