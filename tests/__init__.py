"""Test package for Gemini Chat.

Unit tests for isolated logic and integration tests for full submission
flows through ChatContext.

Structure:
    - unit/: Individual function and class tests
    - integration/: Submission workflows with a scripted upstream session

Leverages pytest with pytest-check for soft assertions.
"""
